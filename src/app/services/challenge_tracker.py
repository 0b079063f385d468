from typing import Dict
from uuid import UUID


class RepeatedActionTracker:
    """
    In-memory progress of RepeatedAction challenges.

    Deliberately volatile: the challenge demands continuous presence, so a
    restart starts the count again.
    """

    def __init__(self) -> None:
        self._counts: Dict[UUID, int] = {}

    def reset(self, session_id: UUID) -> None:
        self._counts[session_id] = 0

    def record(self, session_id: UUID) -> int:
        self._counts[session_id] = self._counts.get(session_id, 0) + 1
        return self._counts[session_id]

    def count(self, session_id: UUID) -> int:
        return self._counts.get(session_id, 0)

    def is_tracking(self, session_id: UUID) -> bool:
        return session_id in self._counts

    def clear(self, session_id: UUID) -> None:
        self._counts.pop(session_id, None)
