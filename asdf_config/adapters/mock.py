"""
Mock adapter — test double for command execution.

Records every Action it receives and returns success by default.
Configurable to fail specific action IDs (``"<plugin>:<step>"``).
"""

from __future__ import annotations

from asdf_config.adapters.base import Adapter
from asdf_config.core.models.action import Action, Receipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing.

    By default, returns success for everything. Can be configured
    with custom responses per action ID.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        default_output: str = "[mock] executed",
    ):
        self._name = adapter_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[str, Receipt] = {}
        self._call_log: list[Action] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[Action]:
        """All actions this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        """Number of times execute has been called."""
        return len(self._call_log)

    @property
    def executed_ids(self) -> list[str]:
        return [a.id for a in self._call_log]

    def is_available(self, binary: str) -> bool:
        return self._available

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        """Set a custom response for a specific action ID."""
        self._responses[action_id] = receipt

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        """Configure a specific action to fail with ``error`` as stderr."""
        self._responses[action_id] = Receipt.failure(
            action_id=action_id,
            error=error,
            return_code=1,
        )

    def set_missing_binary(self, action_id: str) -> None:
        """Configure a specific action to fail as if its binary is absent."""
        self._responses[action_id] = Receipt.failure(
            action_id=action_id,
            error="Cannot run: No such file or directory",
            metadata={"spawn_failed": True},
        )

    def execute(self, action: Action) -> Receipt:
        self._call_log.append(action)

        if action.id in self._responses:
            return self._responses[action.id]

        return Receipt.success(
            action_id=action.id,
            output=self._default_output,
            return_code=0,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
