"""
Essential-App Registry Use Cases
"""

from .dtos import AddEssentialAppCommand, EssentialAppResponse
from .essential_apps_use_case import EssentialAppsUseCase

__all__ = [
    "EssentialAppsUseCase",
    "AddEssentialAppCommand",
    "EssentialAppResponse",
]
