import json
import os
import pytest
import pandas as pd
from utils.definition_store import TableDefinitionStore

SQL = "CREATE TABLE users (\n  id SERIAL PRIMARY KEY,\n  name TEXT NOT NULL DEFAULT ''\n);"


def test_init_creates_table_and_metadata(store):
    assert os.path.exists(store.file_path)
    assert os.path.exists(store.meta_path)

    df = pd.read_csv(store.file_path)
    assert list(df.columns) == ['id', 'name', 'shorthand_definition', 'generated_sql', 'created_at']

    with open(store.meta_path, 'r') as f:
        metadata = json.load(f)
    assert metadata['columns']['id']['auto_increment_counter'] == 1


@pytest.mark.asyncio
async def test_create_assigns_ids(store):
    first = await store.create('users', 'name t', SQL)
    second = await store.create('posts', 'title:t\nbody:tn', 'CREATE TABLE posts ();')

    assert first.id == 1
    assert second.id == 2
    assert first.created_at.tzinfo is not None

    saved = await store.get(second.id)
    assert saved == second
    assert saved.shorthand_definition == 'title:t\nbody:tn'


@pytest.mark.asyncio
async def test_text_fields_round_trip(store):
    record = await store.create('123', '', SQL)

    saved = await store.get(record.id)
    assert saved.name == '123'
    assert saved.shorthand_definition == ''
    assert saved.generated_sql == SQL


@pytest.mark.asyncio
async def test_get_missing_returns_none(store):
    assert await store.get(42) is None


@pytest.mark.asyncio
async def test_list_all(store):
    assert await store.list_all() == []

    await store.create('a', 'name t', SQL)
    await store.create('b', 'name t', SQL)

    records = await store.list_all()
    assert [record.name for record in records] == ['a', 'b']


@pytest.mark.asyncio
async def test_update_only_supplied_fields(store):
    record = await store.create('users', 'name t', SQL)

    renamed = await store.update(record.id, name='people')
    assert renamed.name == 'people'
    assert renamed.shorthand_definition == 'name t'
    assert renamed.generated_sql == SQL
    assert renamed.created_at == record.created_at

    changed = await store.update(record.id, shorthand_definition='email t', generated_sql='CREATE TABLE people ();')
    assert changed.name == 'people'
    assert changed.shorthand_definition == 'email t'
    assert changed.generated_sql == 'CREATE TABLE people ();'


@pytest.mark.asyncio
async def test_update_without_changes_returns_existing(store):
    record = await store.create('users', 'name t', SQL)

    assert await store.update(record.id) == record


@pytest.mark.asyncio
async def test_update_missing_returns_none(store):
    assert await store.update(7, name='ghost') is None


@pytest.mark.asyncio
async def test_delete(store):
    record = await store.create('users', 'name t', SQL)
    await store.create('posts', 'title t', SQL)

    deleted = await store.delete(record.id)
    assert deleted == record
    assert await store.get(record.id) is None
    assert await store.delete(record.id) is None
    assert [r.name for r in await store.list_all()] == ['posts']


@pytest.mark.asyncio
async def test_ids_are_not_reused(store):
    first = await store.create('a', 'name t', SQL)
    await store.delete(first.id)

    second = await store.create('b', 'name t', SQL)
    assert second.id == 2


@pytest.mark.asyncio
async def test_records_survive_a_new_store_instance(store):
    record = await store.create('users', 'name t', SQL)

    reopened = TableDefinitionStore(store.base_dir)
    reopened.init()
    assert await reopened.get(record.id) == record


@pytest.mark.asyncio
async def test_failed_row_write_does_not_reuse_ids(store, monkeypatch):
    def fail_write(df):
        raise OSError('disk full')

    monkeypatch.setattr(store, '_write_frame', fail_write)
    with pytest.raises(OSError):
        await store.create('lost', 'name t', SQL)
    monkeypatch.undo()

    record = await store.create('kept', 'name t', SQL)
    assert record.id == 2
    assert [r.id for r in await store.list_all()] == [2]
