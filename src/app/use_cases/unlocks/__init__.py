"""
Temporary Unlock Use Cases
"""

from .dtos import ExtendUnlockCommand, GrantUnlockCommand, UnlockGrantResponse
from .temporary_unlock_use_case import TemporaryUnlockUseCase

__all__ = [
    "TemporaryUnlockUseCase",
    "GrantUnlockCommand",
    "ExtendUnlockCommand",
    "UnlockGrantResponse",
]
