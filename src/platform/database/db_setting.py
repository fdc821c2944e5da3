"""
Database configuration

Re-exports the SQLAlchemy pieces from orm_db_setting.py so models and adapters
have one import location.
"""

from src.platform.database.orm_db_setting import Base, Database, storage_guard

__all__ = [
    'Base',
    'Database',
    'storage_guard',
]
