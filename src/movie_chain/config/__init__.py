"""Configuration module for the movie chain game"""

from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
