"""
Commitment Lock Use Cases
"""

from .commitment_lock_use_case import MIN_PHRASE_LENGTH, CommitmentLockUseCase
from .dtos import LockSessionCommand, SessionLockResponse, UnlockSessionCommand

__all__ = [
    "CommitmentLockUseCase",
    "LockSessionCommand",
    "UnlockSessionCommand",
    "SessionLockResponse",
    "MIN_PHRASE_LENGTH",
]
