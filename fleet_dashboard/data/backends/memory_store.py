from __future__ import annotations

import copy
from collections import defaultdict
from typing import Any, Callable, Dict, List

from ..interface import StateStore, Unsubscribe


class InMemoryStateStore(StateStore):
    """
    Dictionary-backed state.
    - Values are deep-copied on the way in and out so callers cannot mutate stored state.
    - Lives as long as the process (or the Streamlit session holding it).
    """

    def __init__(self, initial: Dict[str, Any] | None = None) -> None:
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self._subscribers: Dict[str, List[Callable[[Any], None]]] = defaultdict(list)

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)
        self._notify(key)

    def subscribe(self, key: str, callback: Callable[[Any], None]) -> Unsubscribe:
        self._subscribers[key].append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers[key]:
                self._subscribers[key].remove(callback)

        return unsubscribe

    def _notify(self, key: str) -> None:
        # Copy the list so callbacks may unsubscribe while being notified
        for callback in list(self._subscribers[key]):
            callback(self.get(key))
