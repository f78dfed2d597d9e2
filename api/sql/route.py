from fastapi import APIRouter, Depends
from utils.database import get_compiler
from api.table_definitions.schemas import GenerateSqlRequest, GenerateSqlResult
from .function import generate_sql_func

sql_router = APIRouter(prefix="/sql", tags=["sql"])

@sql_router.post("/preview", response_model=GenerateSqlResult)
async def preview_sql(payload: GenerateSqlRequest, compiler=Depends(get_compiler)):
    return generate_sql_func(compiler, payload)
