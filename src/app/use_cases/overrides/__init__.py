"""
Emergency Override Use Cases
"""

from .dtos import ChallengeStatusResponse, OverrideCommand, OverrideResponse
from .emergency_override_use_case import EmergencyOverrideUseCase

__all__ = [
    "EmergencyOverrideUseCase",
    "OverrideCommand",
    "ChallengeStatusResponse",
    "OverrideResponse",
]
