import os
from dataclasses import dataclass
from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    data_directory: str = 'data'
    log_level: str = 'INFO'
    host: str = '0.0.0.0'
    port: int = 8000
    cors_origins: tuple = ('*',)
    default_grammar: str = 'auto'


def load_settings() -> Settings:
    """Read settings from the environment, honouring a local .env file"""
    load_dotenv()
    origins = os.getenv('CORS_ORIGINS', '*')
    return Settings(
        data_directory=os.getenv('DATA_DIRECTORY', 'data'),
        log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        host=os.getenv('HOST', '0.0.0.0'),
        port=int(os.getenv('PORT', '8000')),
        cors_origins=tuple(origin.strip() for origin in origins.split(',') if origin.strip()),
        default_grammar=os.getenv('DEFAULT_GRAMMAR', 'auto').lower(),
    )
