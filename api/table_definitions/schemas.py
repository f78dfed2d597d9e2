from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from transformer.utils.parsers import Grammar


def _require_text(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError('Table name is required')
    return value


class TableDefinitionCreate(BaseModel):
    name: str = Field(min_length=1)
    shorthand_definition: str = ''
    grammar: Optional[Grammar] = None

    @field_validator('name')
    @classmethod
    def check_name(cls, value):
        return _require_text(value)


class TableDefinitionUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    shorthand_definition: Optional[str] = None
    grammar: Optional[Grammar] = None

    @field_validator('name')
    @classmethod
    def check_name(cls, value):
        return _require_text(value)


class GenerateSqlRequest(BaseModel):
    table_name: str = Field(min_length=1)
    shorthand_definition: str = ''
    grammar: Optional[Grammar] = None

    @field_validator('table_name')
    @classmethod
    def check_table_name(cls, value):
        return _require_text(value)


class GenerateSqlResult(BaseModel):
    table_name: str
    shorthand_definition: str
    generated_sql: str


class TableDefinitionOut(BaseModel):
    id: int
    name: str
    shorthand_definition: str
    generated_sql: str
    created_at: datetime


class ColumnOut(BaseModel):
    name: str
    type: str
    not_null: bool
    primary_key: bool
    default: Optional[str] = None


class TableColumnsOut(BaseModel):
    id: int
    name: str
    columns: List[ColumnOut]
