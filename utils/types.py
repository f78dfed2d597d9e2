from dataclasses import dataclass
from datetime import datetime


@dataclass
class TableDefinition:
    id: int
    name: str
    shorthand_definition: str
    generated_sql: str
    created_at: datetime
