import re
from enum import Enum
from typing import List, Optional, Tuple
import sqlglot
from sqlglot import expressions as exp
from sqlglot.errors import SqlglotError
from ..errors import MalformedSegment, UnknownTypeCode
from ..models.column import ColumnDefinition, ColumnSpec
from .type_handlers import TypeCode, TypeHandler

SEPARATORS = (',', '\n')
NAME_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')
DEFAULT_PATTERN = re.compile(r"^d\s*('[^']*')$")
QUOTED_LITERAL = re.compile(r"'[^']*'")


class Grammar(str, Enum):
    COLON = 'colon'  # name:code [d '<literal>'], strict
    SPACE = 'space'  # name code [d '<literal>'], unknown codes pass through as raw SQL
    AUTO = 'auto'


class ShorthandParser:
    def __init__(self):
        self.type_handler = TypeHandler()

    def split(self, shorthand: str) -> List[str]:
        """Split raw shorthand text into trimmed, non-empty column segments.

        Commas and newlines separate segments, except inside a single-quoted
        literal or a parenthesised group.
        """
        segments = []
        current = []
        in_quote = False
        depth = 0

        for char in shorthand or '':
            if char == "'":
                in_quote = not in_quote
            elif not in_quote:
                if char == '(':
                    depth += 1
                elif char == ')' and depth > 0:
                    depth -= 1
                elif char in SEPARATORS and depth == 0:
                    segments.append(''.join(current))
                    current = []
                    continue
            current.append(char)
        segments.append(''.join(current))

        return [segment.strip() for segment in segments if segment.strip()]

    def detect_grammar(self, segments: List[str]) -> Grammar:
        """A definition is colon form when any segment's leading token holds a colon"""
        for segment in segments:
            if ':' in segment.split(None, 1)[0]:
                return Grammar.COLON
        return Grammar.SPACE

    def parse(self, shorthand: str, grammar: Grammar = Grammar.AUTO) -> Tuple[Grammar, List[ColumnSpec]]:
        segments = self.split(shorthand)
        grammar = Grammar(grammar)
        if grammar == Grammar.AUTO:
            grammar = self.detect_grammar(segments)

        columns = [
            self.parse_segment(segment, grammar, position)
            for position, segment in enumerate(segments, start=1)
        ]
        return grammar, columns

    def parse_segment(self, segment: str, grammar: Grammar, position: Optional[int] = None) -> ColumnSpec:
        if Grammar(grammar) == Grammar.COLON:
            return self._parse_colon_segment(segment, position)
        return self._parse_space_segment(segment, position)

    def _parse_colon_segment(self, segment: str, position: Optional[int]) -> ColumnSpec:
        if ':' not in segment:
            raise MalformedSegment(f"Expected 'name:type' in segment '{segment}'", segment, position)

        name, _, remainder = segment.partition(':')
        name = name.strip()
        self._check_name(name, segment, position)

        tokens = remainder.strip().split(None, 1)
        if not tokens:
            raise MalformedSegment(f"Missing type for column '{name}'", segment, position)

        type_code = tokens[0]
        if not self.type_handler.is_known(type_code):
            raise UnknownTypeCode(type_code, segment, position)

        default = self._parse_default(tokens[1] if len(tokens) > 1 else '', segment, position)
        return ColumnSpec(name=name, type_code=type_code, default_override=default, segment=segment, position=position)

    def _parse_space_segment(self, segment: str, position: Optional[int]) -> ColumnSpec:
        tokens = segment.split(None, 1)
        name = tokens[0]
        remainder = tokens[1].strip() if len(tokens) > 1 else ''

        if not remainder:
            # a bare "id" line declares the primary key column
            if name == TypeCode.ID.value:
                return ColumnSpec(name=name, type_code=TypeCode.ID.value, segment=segment, position=position)
            raise MalformedSegment(f"Missing type for column '{name}'", segment, position)

        self._check_name(name, segment, position)

        type_tokens = remainder.split(None, 1)
        type_code = type_tokens[0]
        if not self.type_handler.is_known(type_code):
            return ColumnSpec(name=name, raw_sql=' '.join(remainder.split()), segment=segment, position=position)

        default = self._parse_default(type_tokens[1] if len(type_tokens) > 1 else '', segment, position)
        return ColumnSpec(name=name, type_code=type_code, default_override=default, segment=segment, position=position)

    def _check_name(self, name: str, segment: str, position: Optional[int]) -> None:
        if not name:
            raise MalformedSegment(f"Missing column name in segment '{segment}'", segment, position)
        if not NAME_PATTERN.match(name):
            raise MalformedSegment(f"Invalid column name '{name}'", segment, position)

    def _parse_default(self, tail: str, segment: str, position: Optional[int]) -> Optional[str]:
        """Return the quoted literal of a trailing d '<literal>' marker, if any"""
        tail = tail.strip()
        if not tail:
            return None

        match = DEFAULT_PATTERN.match(tail)
        if match:
            return match.group(1)

        if tail == 'd' or tail.startswith(("d ", "d'")):
            raise MalformedSegment(
                f"Default marker 'd' must be followed by a single-quoted literal in segment '{segment}'",
                segment,
                position,
            )
        raise MalformedSegment(f"Unexpected text '{tail}' in segment '{segment}'", segment, position)


class SqlParser:
    def extract_columns(self, sql_statement: str) -> List[ColumnDefinition]:
        """Extract column definitions from a CREATE TABLE statement"""
        try:
            parsed = sqlglot.parse_one(sql_statement, read='postgres')
        except SqlglotError as error:
            raise ValueError(f'Cannot parse CREATE TABLE statement: {error}') from error

        if not isinstance(parsed, exp.Create) or parsed.args.get('kind') != 'TABLE':
            raise ValueError('Invalid CREATE TABLE statement')

        columns = []
        for col in parsed.this.expressions:
            if not isinstance(col, exp.ColumnDef):
                continue

            data_type = col.kind.sql(dialect='postgres') if col.kind else ''
            not_null = False
            primary_key = False
            default = None

            for constraint in col.constraints:
                if isinstance(constraint.kind, exp.PrimaryKeyColumnConstraint):
                    primary_key = True
                elif isinstance(constraint.kind, exp.NotNullColumnConstraint):
                    not_null = not constraint.kind.args.get('allow_null')
                elif isinstance(constraint.kind, exp.DefaultColumnConstraint):
                    default = constraint.kind.this.sql(dialect='postgres')

            columns.append(ColumnDefinition(
                name=col.name,
                type=data_type.upper(),
                not_null=not_null or primary_key,
                primary_key=primary_key,
                default=default,
            ))

        return columns

    def is_primary_key_clause(self, name: str, raw_sql: str) -> bool:
        """Whether a raw column clause declares a PRIMARY KEY constraint"""
        try:
            columns = self.extract_columns(f'CREATE TABLE t ({name} {raw_sql})')
        except ValueError:
            # unparseable raw SQL: look for the keyword outside quoted literals
            unquoted = QUOTED_LITERAL.sub('', raw_sql)
            return 'PRIMARY KEY' in ' '.join(unquoted.upper().split())
        return any(column.primary_key for column in columns)
