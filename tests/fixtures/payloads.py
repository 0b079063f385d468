import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional


class Payloads:
    """Request bodies from test_data.json; every call returns a fresh copy."""

    _data: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def _load(cls) -> Dict[str, Dict[str, Any]]:
        if cls._data is None:
            with open(Path(__file__).parent / "test_data.json") as f:
                cls._data = json.load(f)
        return cls._data

    @classmethod
    def _payload(cls, section: str, name: str, overrides: Dict[str, Any]) -> Dict[str, Any]:
        try:
            payload = cls._load()[section][name]
        except KeyError:
            raise KeyError(f"No {section} payload named {name!r}") from None
        return copy.deepcopy(payload) | overrides

    @classmethod
    def session(cls, name: str, /, **overrides: Any) -> Dict[str, Any]:
        """Body for POST /api/sessions, e.g. ``session("focus_duration", name="Other")``."""
        return cls._payload("sessions", name, overrides)

    @classmethod
    def goal(cls, name: str, /, **overrides: Any) -> Dict[str, Any]:
        """Body for POST /api/goals."""
        return cls._payload("goals", name, overrides)
