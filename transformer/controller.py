from typing import List, Union
from .models.column import ColumnDefinition
from .operations.table_ops import TableOperations
from .utils.parsers import Grammar, ShorthandParser


class ShorthandCompiler:
    """Compiles shorthand column notation into a CREATE TABLE statement.

    Stateless apart from its helpers, so one instance can be shared freely.
    """

    def __init__(self):
        self.parser = ShorthandParser()
        self.table_ops = TableOperations()

    def compile(self, table_name: str, shorthand_definition: str,
                grammar: Union[Grammar, str] = Grammar.AUTO) -> str:
        if not table_name or not table_name.strip():
            raise ValueError('Table name is required')

        resolved, columns = self.parser.parse(shorthand_definition, grammar)
        return self.table_ops.build_create_table(table_name, columns, resolved)

    def describe(self, sql_statement: str) -> List[ColumnDefinition]:
        return self.table_ops.describe(sql_statement)
