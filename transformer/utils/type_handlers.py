from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional
from ..models.column import ColumnRule


class TypeCode(str, Enum):
    ID = 'id'
    TEXT = 't'
    TEXT_NULLABLE = 'tn'
    INTEGER = 'i'
    INTEGER_NULLABLE = 'in'
    TIMESTAMPTZ = 'tz'
    TIMESTAMPTZ_NOW = 'tzn'


TYPE_RULES: Mapping[TypeCode, ColumnRule] = MappingProxyType({
    TypeCode.ID: ColumnRule('SERIAL', is_nullable=False, is_primary_key=True),
    TypeCode.TEXT: ColumnRule('TEXT', is_nullable=False, default_clause="''"),
    TypeCode.TEXT_NULLABLE: ColumnRule('TEXT', is_nullable=True),
    TypeCode.INTEGER: ColumnRule('INTEGER', is_nullable=False, default_clause='0'),
    TypeCode.INTEGER_NULLABLE: ColumnRule('INTEGER', is_nullable=True),
    TypeCode.TIMESTAMPTZ: ColumnRule('TIMESTAMPTZ', is_nullable=True),
    TypeCode.TIMESTAMPTZ_NOW: ColumnRule('TIMESTAMPTZ', is_nullable=False, default_clause='NOW()'),
})


class TypeHandler:
    def lookup(self, type_code: str) -> Optional[ColumnRule]:
        """Return the column rule for a shorthand type code, or None if unknown"""
        try:
            return TYPE_RULES[TypeCode(type_code)]
        except ValueError:
            return None

    def is_known(self, type_code: str) -> bool:
        return self.lookup(type_code) is not None

    def render(self, name: str, rule: ColumnRule, default_override: Optional[str] = None) -> str:
        """Render one column clause: <name> <type> [NOT NULL] [DEFAULT <expr>] [PRIMARY KEY]"""
        parts = [name, rule.sql_type]
        if not rule.is_nullable and not rule.is_primary_key:
            parts.append('NOT NULL')

        default = default_override if default_override is not None else rule.default_clause
        if default is not None:
            parts.append(f'DEFAULT {default}')

        if rule.is_primary_key:
            parts.append('PRIMARY KEY')
        return ' '.join(parts)
