import logging
from typing import List, Optional
from ..errors import DuplicateColumn, EmptyDefinition
from ..models.column import ColumnDefinition, ColumnSpec
from ..utils.parsers import Grammar, SqlParser
from ..utils.type_handlers import TYPE_RULES, TypeCode, TypeHandler

logger = logging.getLogger(__name__)

PRIMARY_KEY_COLUMN = 'id'
INDENT = '  '


class TableOperations:
    def __init__(self):
        self.type_handler = TypeHandler()
        self.parser = SqlParser()

    def build_create_table(self, table_name: str, columns: List[ColumnSpec], grammar: Grammar) -> str:
        """Turn parsed column specs into a CREATE TABLE statement"""
        if not columns and grammar == Grammar.COLON:
            raise EmptyDefinition()

        self._check_duplicates(columns)
        columns = self.ensure_primary_key(columns)
        clauses = [self.render_column(column) for column in columns]
        return self.assemble(table_name, clauses)

    def resolve_default(self, column: ColumnSpec) -> Optional[str]:
        """An explicit d '<literal>' wins over the type's built-in default"""
        if column.default_override is not None:
            return column.default_override
        return TYPE_RULES[TypeCode(column.type_code)].default_clause

    def render_column(self, column: ColumnSpec) -> str:
        if column.raw_sql is not None:
            return f'{column.name} {column.raw_sql}'

        rule = TYPE_RULES[TypeCode(column.type_code)]
        return self.type_handler.render(column.name, rule, self.resolve_default(column))

    def is_primary_key(self, column: ColumnSpec) -> bool:
        if column.raw_sql is not None:
            return self.parser.is_primary_key_clause(column.name, column.raw_sql)
        return TYPE_RULES[TypeCode(column.type_code)].is_primary_key

    def ensure_primary_key(self, columns: List[ColumnSpec]) -> List[ColumnSpec]:
        """Prepend a synthetic id column unless some column already is the primary key"""
        if any(self.is_primary_key(column) for column in columns):
            return list(columns)

        for column in columns:
            if column.name == PRIMARY_KEY_COLUMN:
                raise DuplicateColumn(
                    f"Column '{PRIMARY_KEY_COLUMN}' is not a primary key but the table needs one with that name; "
                    f"declare it as '{PRIMARY_KEY_COLUMN}' type or rename it",
                    column.segment,
                    column.position,
                )

        logger.debug('No primary key declared, adding synthetic %s column', PRIMARY_KEY_COLUMN)
        return [ColumnSpec(name=PRIMARY_KEY_COLUMN, type_code=TypeCode.ID.value)] + list(columns)

    def assemble(self, table_name: str, clauses: List[str]) -> str:
        body = ',\n'.join(f'{INDENT}{clause}' for clause in clauses)
        return f'CREATE TABLE {table_name} (\n{body}\n);'

    def describe(self, sql_statement: str) -> List[ColumnDefinition]:
        return self.parser.extract_columns(sql_statement)

    def _check_duplicates(self, columns: List[ColumnSpec]) -> None:
        seen = set()
        for column in columns:
            if column.name in seen:
                raise DuplicateColumn(
                    f"Column '{column.name}' is declared more than once",
                    column.segment,
                    column.position,
                )
            seen.add(column.name)
