import sys
from pathlib import Path
import pytest

# Get the absolute path to the project root directory
project_root = Path(__file__).parent.parent.absolute()
sys.path.insert(0, str(project_root))

from transformer.controller import ShorthandCompiler
from utils.definition_store import TableDefinitionStore

@pytest.fixture
def compiler():
    return ShorthandCompiler()

@pytest.fixture
def store(tmp_path):
    """Fixture to create a store in a throwaway data directory"""
    store = TableDefinitionStore(str(tmp_path / 'data'))
    store.init()
    return store
