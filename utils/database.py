from transformer.controller import ShorthandCompiler
from utils.config import load_settings
from utils.definition_store import TableDefinitionStore
from functools import lru_cache

@lru_cache()
def get_store():
    return TableDefinitionStore(load_settings().data_directory)

@lru_cache()
def get_compiler():
    return ShorthandCompiler()
