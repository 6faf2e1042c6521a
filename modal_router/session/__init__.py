"""
Session-scoped storage for serialized component contexts.
"""

from .session_store import (
    InMemorySessionStore,
    JsonFileSessionStore,
    atomic_write_json,
    create_session_store,
)

__all__ = [
    'InMemorySessionStore',
    'JsonFileSessionStore',
    'atomic_write_json',
    'create_session_store',
]
