import pytest
from transformer.models.column import ColumnSpec
from transformer.utils.parsers import Grammar, ShorthandParser
from transformer.utils.type_handlers import TYPE_RULES, TypeCode, TypeHandler


@pytest.fixture
def parser():
    return ShorthandParser()


def test_split_on_commas_and_newlines(parser):
    assert parser.split('a t, b t\nc t') == ['a t', 'b t', 'c t']


def test_split_drops_empty_segments(parser):
    assert parser.split('  \n , ,\n') == []
    assert parser.split('') == []
    assert parser.split(None) == []


def test_split_keeps_quoted_and_parenthesised_separators(parser):
    assert parser.split("config:t d 'a,b'\nx:i") == ["config:t d 'a,b'", 'x:i']
    assert parser.split('price NUMERIC(10,2), qty i') == ['price NUMERIC(10,2)', 'qty i']


def test_detect_grammar(parser):
    assert parser.detect_grammar(['title:t', 'body:tn']) == Grammar.COLON
    assert parser.detect_grammar(['title t', 'body tn']) == Grammar.SPACE
    assert parser.detect_grammar(["status t d 'a:b'"]) == Grammar.SPACE
    assert parser.detect_grammar([]) == Grammar.SPACE


def test_parse_returns_resolved_grammar_and_specs(parser):
    grammar, columns = parser.parse("title:t\nstatus:tn d 'draft'")

    assert grammar == Grammar.COLON
    assert columns == [
        ColumnSpec(name='title', type_code='t'),
        ColumnSpec(name='status', type_code='tn', default_override="'draft'"),
    ]


def test_parse_space_segment_with_default(parser):
    column = parser.parse_segment("priority   i  d  '1'", Grammar.SPACE)

    assert column == ColumnSpec(name='priority', type_code='i', default_override="'1'")


def test_parse_space_segment_raw_sql(parser):
    column = parser.parse_segment('score   DOUBLE   PRECISION', Grammar.SPACE)

    assert column.type_code is None
    assert column.raw_sql == 'DOUBLE PRECISION'


def test_default_literal_whitespace_is_kept(parser):
    column = parser.parse_segment("greeting:t d 'hello  world'", Grammar.COLON)

    assert column.default_override == "'hello  world'"


def test_type_rule_table_is_closed():
    assert {code.value for code in TYPE_RULES} == {'id', 't', 'tn', 'i', 'in', 'tz', 'tzn'}
    with pytest.raises(TypeError):
        TYPE_RULES[TypeCode.TEXT] = TYPE_RULES[TypeCode.ID]


def test_type_handler_lookup():
    handler = TypeHandler()

    assert handler.lookup('tzn') == TYPE_RULES[TypeCode.TIMESTAMPTZ_NOW]
    assert handler.lookup('varchar') is None
    assert handler.render('id', TYPE_RULES[TypeCode.ID]) == 'id SERIAL PRIMARY KEY'
    assert handler.render('n', TYPE_RULES[TypeCode.INTEGER], "'5'") == "n INTEGER NOT NULL DEFAULT '5'"
