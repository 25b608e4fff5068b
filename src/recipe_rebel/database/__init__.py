"""PostgreSQL database layer.

This module provides:
- Connection pool management
- Repository classes for data access
- Health check utilities
"""

from recipe_rebel.database.connection import (
    CONNECTION_ERRORS,
    DatabaseUnavailableError,
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)


__all__ = [
    "CONNECTION_ERRORS",
    "DatabaseUnavailableError",
    "check_database_health",
    "close_database_pool",
    "get_database_pool",
    "init_database_pool",
]
