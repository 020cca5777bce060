from __future__ import annotations

from typing import Literal, Optional

from fleet_dashboard.config import get_config

from .backends.json_store import JsonFileStateStore
from .backends.local_backend import LocalDataAccess
from .backends.memory_store import InMemoryStateStore
from .interface import DataAccess, StateStore


def get_state_store(kind: Optional[Literal["memory", "json"]] = None) -> StateStore:
    config = get_config()
    kind = kind or config.state_backend
    if kind == "memory":
        return InMemoryStateStore()
    if kind == "json":
        # Persists to the configured state file
        return JsonFileStateStore(path=config.state_file)
    raise ValueError(f"Unknown state store kind: {kind}")


def get_data_access(store: Optional[StateStore] = None) -> DataAccess:
    return LocalDataAccess(store=store if store is not None else get_state_store())
