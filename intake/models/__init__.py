"""Database models package."""

from .submission import Submission
from .admin import AdminSettings

__all__ = [
    'Submission',
    'AdminSettings',
]
