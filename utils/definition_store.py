import os
import json
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import List, Optional
import pandas as pd
from utils.types import TableDefinition

logger = logging.getLogger(__name__)

COLUMNS = ['id', 'name', 'shorthand_definition', 'generated_sql', 'created_at']
COLUMN_DTYPES = {
    'id': 'int64',
    'name': str,
    'shorthand_definition': str,
    'generated_sql': str,
    'created_at': str,
}


class TableDefinitionStore:
    """Keeps table definitions in a CSV file, with the id counter in a JSON metadata file"""

    def __init__(self, data_directory: str = 'data', table_name: str = 'table_definitions'):
        self.base_dir = data_directory
        self.table_name = table_name
        self.file_path = os.path.join(self.base_dir, 'tables', f'{table_name}.csv')
        self.meta_path = os.path.join(self.base_dir, '.metadata', f'{table_name}.json')
        self._lock = asyncio.Lock()

    def init(self):
        """Create the data directory, table file and metadata if they do not exist yet"""
        try:
            os.makedirs(os.path.dirname(self.file_path), exist_ok=True)
            os.makedirs(os.path.dirname(self.meta_path), exist_ok=True)

            if not os.path.exists(self.file_path):
                pd.DataFrame(columns=COLUMNS).to_csv(self.file_path, index=False)
            if not os.path.exists(self.meta_path):
                self._save_metadata({
                    'columns': {
                        'id': {'type': 'INT', 'is_serial': True, 'primary_key': True, 'auto_increment_counter': 1},
                        'name': {'type': 'TEXT', 'not_null': True},
                        'shorthand_definition': {'type': 'TEXT', 'not_null': True},
                        'generated_sql': {'type': 'TEXT', 'not_null': True},
                        'created_at': {'type': 'TIMESTAMPTZ', 'not_null': True},
                    }
                })
            logger.info('Table definition store ready at %s', self.file_path)
        except Exception as error:
            logger.error('Error initializing table definition store: %s', error)
            raise

    async def create(self, name: str, shorthand_definition: str, generated_sql: str) -> TableDefinition:
        """Persist a new definition and return it with its assigned id and creation time"""
        try:
            async with self._lock:
                loop = asyncio.get_event_loop()
                with ThreadPoolExecutor() as pool:
                    metadata, df = await asyncio.gather(
                        loop.run_in_executor(pool, self._load_metadata),
                        loop.run_in_executor(pool, self._read_frame),
                    )

                    id_meta = metadata['columns']['id']
                    record = TableDefinition(
                        id=int(id_meta['auto_increment_counter']),
                        name=name,
                        shorthand_definition=shorthand_definition,
                        generated_sql=generated_sql,
                        created_at=datetime.now(timezone.utc),
                    )
                    id_meta['auto_increment_counter'] = record.id + 1

                    new_row = pd.DataFrame([self._to_row(record)], columns=COLUMNS)
                    combined_df = new_row if df.empty else pd.concat([df, new_row], ignore_index=True)

                    # counter goes first: a failed row write then only skips an id
                    await loop.run_in_executor(pool, lambda: self._save_metadata(metadata))
                    await loop.run_in_executor(pool, lambda: self._write_frame(combined_df))

            logger.info('Stored table definition %s (%s)', record.id, record.name)
            return record

        except Exception as error:
            logger.error('Error creating table definition: %s', error)
            raise

    async def list_all(self) -> List[TableDefinition]:
        try:
            df = await self._read_frame_async()
            return [self._to_record(row) for _, row in df.sort_values('id').iterrows()]
        except Exception as error:
            logger.error('Error listing table definitions: %s', error)
            raise

    async def get(self, definition_id: int) -> Optional[TableDefinition]:
        try:
            df = await self._read_frame_async()
            matches = df[df['id'] == definition_id]
            if matches.empty:
                return None
            return self._to_record(matches.iloc[0])
        except Exception as error:
            logger.error('Error reading table definition %s: %s', definition_id, error)
            raise

    async def update(self, definition_id: int, name: Optional[str] = None,
                     shorthand_definition: Optional[str] = None,
                     generated_sql: Optional[str] = None) -> Optional[TableDefinition]:
        """Overwrite the supplied fields of a definition; id and created_at never change"""
        changes = {
            field: value
            for field, value in (
                ('name', name),
                ('shorthand_definition', shorthand_definition),
                ('generated_sql', generated_sql),
            )
            if value is not None
        }

        try:
            async with self._lock:
                loop = asyncio.get_event_loop()
                with ThreadPoolExecutor() as pool:
                    df = await loop.run_in_executor(pool, self._read_frame)
                    mask = df['id'] == definition_id
                    if not mask.any():
                        return None

                    if changes:
                        for field, value in changes.items():
                            df.loc[mask, field] = value
                        await loop.run_in_executor(pool, lambda: self._write_frame(df))

                    record = self._to_record(df[mask].iloc[0])

            if changes:
                logger.info('Updated table definition %s: %s', definition_id, ', '.join(changes))
            return record

        except Exception as error:
            logger.error('Error updating table definition %s: %s', definition_id, error)
            raise

    async def delete(self, definition_id: int) -> Optional[TableDefinition]:
        """Remove a definition and return what was removed"""
        try:
            async with self._lock:
                loop = asyncio.get_event_loop()
                with ThreadPoolExecutor() as pool:
                    df = await loop.run_in_executor(pool, self._read_frame)
                    mask = df['id'] == definition_id
                    if not mask.any():
                        return None

                    record = self._to_record(df[mask].iloc[0])
                    remaining_df = df[~mask]
                    await loop.run_in_executor(pool, lambda: self._write_frame(remaining_df))

            logger.info('Deleted table definition %s', definition_id)
            return record

        except Exception as error:
            logger.error('Error deleting table definition %s: %s', definition_id, error)
            raise

    async def _read_frame_async(self) -> pd.DataFrame:
        loop = asyncio.get_event_loop()
        with ThreadPoolExecutor() as pool:
            return await loop.run_in_executor(pool, self._read_frame)

    def _read_frame(self) -> pd.DataFrame:
        if not os.path.exists(self.file_path):
            raise ValueError(f'Table {self.table_name} does not exist')
        # keep_default_na stops empty shorthand text from turning into NaN
        return pd.read_csv(self.file_path, dtype=COLUMN_DTYPES, keep_default_na=False)

    def _write_frame(self, df: pd.DataFrame) -> None:
        df.to_csv(self.file_path, index=False)

    def _to_row(self, record: TableDefinition) -> dict:
        return {
            'id': record.id,
            'name': record.name,
            'shorthand_definition': record.shorthand_definition,
            'generated_sql': record.generated_sql,
            'created_at': record.created_at.isoformat(),
        }

    def _to_record(self, row) -> TableDefinition:
        return TableDefinition(
            id=int(row['id']),
            name=row['name'],
            shorthand_definition=row['shorthand_definition'],
            generated_sql=row['generated_sql'],
            created_at=datetime.fromisoformat(row['created_at']),
        )

    def _load_metadata(self) -> dict:
        """Load metadata from JSON file"""
        with open(self.meta_path, 'r') as f:
            return json.load(f)

    def _save_metadata(self, metadata: dict) -> None:
        """Save metadata to JSON file"""
        with open(self.meta_path, 'w') as f:
            json.dump(metadata, f, indent=2)
