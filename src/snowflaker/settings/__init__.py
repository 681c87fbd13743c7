"""Settings module providing configuration management for snowflaker.

Built on Pydantic Settings. Each settings class handles one concern:

    - connection.py: ODBC connection parameters (``SNOWFLAKE_*``)
    - sql_api.py: SQL REST API session defaults (``SNOWFLAKE_API_*``)
    - logging.py: Log level (``SNOWFLAKER_LOG_*``)
    - main.py: Aggregator with the ``get_settings()`` singleton

Configuration Sources (precedence order):
    1. Explicit constructor arguments
    2. Environment variables
    3. ``.env`` file in the working directory
    4. Default values in code

Quick Start:
    >>> from snowflaker.settings import get_settings
    >>> settings = get_settings()
    >>> settings.snowflake.dsn
    'snowflake-bi'
"""

from .main import _Settings, get_settings, reload_settings
from .base import SnowflakerBaseSettings
from .connection import SnowflakeSettings
from .sql_api import SQLAPISettings
from .logging import LoggingSettings

__all__ = [
    "get_settings",
    "reload_settings",
    "SnowflakerBaseSettings",
    "SnowflakeSettings",
    "SQLAPISettings",
    "LoggingSettings",
]
