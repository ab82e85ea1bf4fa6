"""
Service interfaces for dependency inversion.
Allows swapping implementations without changing business logic.
"""

from .notifier import Notifier
from .null_notifier import NullNotifier

__all__ = ['Notifier', 'NullNotifier']
