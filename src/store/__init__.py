"""
Client-side application state.
"""

from .application_store import ApplicationStore, DerivedState, calculate_derived_state, MESSAGES
from .notifications import Notice, Notifier

__all__ = [
    'ApplicationStore',
    'DerivedState',
    'calculate_derived_state',
    'MESSAGES',
    'Notice',
    'Notifier',
]
