import logging
from dataclasses import asdict
from typing import List, Optional
from transformer.controller import ShorthandCompiler
from utils.config import load_settings
from utils.definition_store import TableDefinitionStore
from .schemas import ColumnOut, TableColumnsOut, TableDefinitionCreate, TableDefinitionOut, TableDefinitionUpdate

logger = logging.getLogger(__name__)


def resolve_grammar(grammar) -> str:
    return grammar.value if grammar is not None else load_settings().default_grammar


async def create_table_definition_func(store: TableDefinitionStore, compiler: ShorthandCompiler,
                                       payload: TableDefinitionCreate) -> TableDefinitionOut:
    # compile first so a failing definition is never stored
    generated_sql = compiler.compile(payload.name, payload.shorthand_definition, resolve_grammar(payload.grammar))
    record = await store.create(payload.name, payload.shorthand_definition, generated_sql)
    return TableDefinitionOut(**asdict(record))


async def list_table_definitions_func(store: TableDefinitionStore) -> List[TableDefinitionOut]:
    records = await store.list_all()
    return [TableDefinitionOut(**asdict(record)) for record in records]


async def get_table_definition_func(store: TableDefinitionStore, definition_id: int) -> Optional[TableDefinitionOut]:
    record = await store.get(definition_id)
    if record is None:
        return None
    return TableDefinitionOut(**asdict(record))


async def update_table_definition_func(store: TableDefinitionStore, compiler: ShorthandCompiler,
                                       definition_id: int, payload: TableDefinitionUpdate) -> Optional[TableDefinitionOut]:
    existing = await store.get(definition_id)
    if existing is None:
        return None

    generated_sql = None
    if payload.shorthand_definition is not None:
        table_name = payload.name if payload.name is not None else existing.name
        generated_sql = compiler.compile(table_name, payload.shorthand_definition, resolve_grammar(payload.grammar))
        logger.debug('Recompiled table definition %s', definition_id)

    record = await store.update(
        definition_id,
        name=payload.name,
        shorthand_definition=payload.shorthand_definition,
        generated_sql=generated_sql,
    )
    if record is None:
        return None
    return TableDefinitionOut(**asdict(record))


async def delete_table_definition_func(store: TableDefinitionStore, definition_id: int) -> Optional[TableDefinitionOut]:
    record = await store.delete(definition_id)
    if record is None:
        return None
    return TableDefinitionOut(**asdict(record))


async def get_table_columns_func(store: TableDefinitionStore, compiler: ShorthandCompiler,
                                 definition_id: int) -> Optional[TableColumnsOut]:
    record = await store.get(definition_id)
    if record is None:
        return None

    columns = compiler.describe(record.generated_sql)
    return TableColumnsOut(
        id=record.id,
        name=record.name,
        columns=[ColumnOut(**asdict(column)) for column in columns],
    )
