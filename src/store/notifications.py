"""
User-facing notices.

The store reports the outcome of every operation here. Notices carry a short
message only; diagnostic detail goes to the log.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional


@dataclass
class Notice:
    level: str  # success | error
    message: str
    description: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)


class Notifier:
    """Collects notices and forwards them to subscribed listeners."""

    def __init__(self):
        self.notices: List[Notice] = []
        self._listeners: List[Callable[[Notice], None]] = []

    def subscribe(self, listener: Callable[[Notice], None]) -> None:
        self._listeners.append(listener)

    def success(self, message: str, description: Optional[str] = None) -> Notice:
        return self._emit(Notice("success", message, description))

    def error(self, message: str, description: Optional[str] = None) -> Notice:
        return self._emit(Notice("error", message, description))

    def drain(self) -> List[Notice]:
        """Return pending notices and forget them."""
        notices, self.notices = self.notices, []
        return notices

    def _emit(self, notice: Notice) -> Notice:
        self.notices.append(notice)
        for listener in self._listeners:
            listener(notice)
        return notice
