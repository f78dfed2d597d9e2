from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class ColumnRule:
    sql_type: str
    is_nullable: bool
    default_clause: Optional[str] = None
    is_primary_key: bool = False


@dataclass
class ColumnSpec:
    name: str
    type_code: Optional[str] = None
    default_override: Optional[str] = None
    raw_sql: Optional[str] = None  # space form fallback for unknown types
    segment: Optional[str] = field(default=None, compare=False)
    position: Optional[int] = field(default=None, compare=False)


@dataclass
class ColumnDefinition:
    name: str
    type: str
    not_null: bool = False
    primary_key: bool = False
    default: Optional[Any] = None
