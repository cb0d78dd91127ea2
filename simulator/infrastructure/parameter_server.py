"""
Process-wide parameter store

String-keyed values published by one part of the world (the elevator side)
and read once by others at setup time.
"""

from typing import Any, Dict


class ParameterServer:
    """Global parameter store queried by string key"""

    def __init__(self):
        self._params: Dict[str, Any] = {}

    def set_param(self, key: str, value: Any):
        self._params[key] = value

    def has_param(self, key: str) -> bool:
        return key in self._params

    def get_param(self, key: str, default: Any = None) -> Any:
        return self._params.get(key, default)
