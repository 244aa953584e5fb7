"""
Document store access for the Task Lists backend
"""

from .connection import close_store, connect_store
from .gateway import Collection, DataStore, format_id, parse_id
from .models import TaskListRecord, TodoRecord, UserRecord

__all__ = [
    "Collection",
    "DataStore",
    "TaskListRecord",
    "TodoRecord",
    "UserRecord",
    "close_store",
    "connect_store",
    "format_id",
    "parse_id",
]
