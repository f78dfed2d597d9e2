from typing import List
from fastapi import APIRouter, Depends, HTTPException
from utils.database import get_compiler, get_store
from .function import (
    create_table_definition_func,
    delete_table_definition_func,
    get_table_columns_func,
    get_table_definition_func,
    list_table_definitions_func,
    update_table_definition_func,
)
from .schemas import TableColumnsOut, TableDefinitionCreate, TableDefinitionOut, TableDefinitionUpdate

table_definitions_router = APIRouter(prefix="/table-definitions", tags=["table-definitions"])

NOT_FOUND = "no such record"

@table_definitions_router.post("", response_model=TableDefinitionOut, status_code=201)
async def create_table_definition(payload: TableDefinitionCreate, store=Depends(get_store), compiler=Depends(get_compiler)):
    return await create_table_definition_func(store, compiler, payload)

@table_definitions_router.get("", response_model=List[TableDefinitionOut])
async def list_table_definitions(store=Depends(get_store)):
    return await list_table_definitions_func(store)

@table_definitions_router.get("/{definition_id}", response_model=TableDefinitionOut)
async def get_table_definition(definition_id: int, store=Depends(get_store)):
    record = await get_table_definition_func(store, definition_id)
    if record is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return record

@table_definitions_router.patch("/{definition_id}", response_model=TableDefinitionOut)
async def update_table_definition(definition_id: int, payload: TableDefinitionUpdate,
                                  store=Depends(get_store), compiler=Depends(get_compiler)):
    record = await update_table_definition_func(store, compiler, definition_id, payload)
    if record is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return record

@table_definitions_router.delete("/{definition_id}", response_model=TableDefinitionOut)
async def delete_table_definition(definition_id: int, store=Depends(get_store)):
    record = await delete_table_definition_func(store, definition_id)
    if record is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return record

@table_definitions_router.get("/{definition_id}/columns", response_model=TableColumnsOut)
async def get_table_columns(definition_id: int, store=Depends(get_store), compiler=Depends(get_compiler)):
    try:
        columns = await get_table_columns_func(store, compiler, definition_id)
    except ValueError as error:
        # raw SQL from the space grammar may not parse
        raise HTTPException(status_code=422, detail=str(error))
    if columns is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return columns
