"""
Adapter base — the contract between the install driver and processes.

The driver never calls ``subprocess`` directly; it hands Actions to
an adapter and reads back Receipts.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from asdf_config.core.models.action import Action, Receipt


class Adapter(ABC):
    """Abstract base class for command adapters.

    Adapters perform external side effects and return receipts.
    They NEVER raise for a failing command: a non-zero exit status,
    a timeout, or a binary that cannot be spawned all come back as a
    failed Receipt. Spawn failures are flagged with
    ``metadata["spawn_failed"] = True`` so callers can decide whether
    they are fatal.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def is_available(self, binary: str) -> bool:
        """Check whether ``binary`` can be executed. Never raises."""

    @abstractmethod
    def execute(self, action: Action) -> Receipt:
        """Run the action and return a receipt."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
