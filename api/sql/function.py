from transformer.controller import ShorthandCompiler
from api.table_definitions.function import resolve_grammar
from api.table_definitions.schemas import GenerateSqlRequest, GenerateSqlResult

def generate_sql_func(compiler: ShorthandCompiler, payload: GenerateSqlRequest) -> GenerateSqlResult:
    generated_sql = compiler.compile(payload.table_name, payload.shorthand_definition, resolve_grammar(payload.grammar))
    return GenerateSqlResult(
        table_name=payload.table_name,
        shorthand_definition=payload.shorthand_definition,
        generated_sql=generated_sql,
    )
