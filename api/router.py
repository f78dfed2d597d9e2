from fastapi import APIRouter
from typing import List

v1_router = APIRouter(prefix="/api/v1")

from api.sql.route import sql_router
from api.table_definitions.route import table_definitions_router

v1_router.include_router(sql_router)
v1_router.include_router(table_definitions_router)

routers: List[APIRouter] = [v1_router]

def get_routers():
    return routers
