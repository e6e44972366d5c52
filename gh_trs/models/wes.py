"""
Workflow Execution Service models.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class RunStatus(str, Enum):
    """Coarse status of a WES run, as far as testing is concerned."""

    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"

    @classmethod
    def from_wes_state(cls, state: str) -> "RunStatus":
        """
        Map a GA4GH WES run state onto a run status.

        Args:
            state: WES state, e.g. ``RUNNING`` or ``EXECUTOR_ERROR``

        Returns:
            The matching run status

        Raises:
            ValueError: For ``UNKNOWN`` and unrecognised states
        """
        mapping = {
            "QUEUED": cls.RUNNING,
            "INITIALIZING": cls.RUNNING,
            "RUNNING": cls.RUNNING,
            "PAUSED": cls.RUNNING,
            "COMPLETE": cls.COMPLETE,
            "EXECUTOR_ERROR": cls.FAILED,
            "SYSTEM_ERROR": cls.FAILED,
            "CANCELED": cls.FAILED,
            "CANCELING": cls.FAILED,
        }
        if state not in mapping:
            raise ValueError(f"Unknown run status: {state}")
        return mapping[state]


class AttachedFile(BaseModel):
    """An entry of the ``workflow_attachment`` form field."""

    file_name: str
    file_url: str


class TestResult(BaseModel):
    """Outcome of one test case."""

    __test__ = False

    id: str = Field(description="Test case id")
    status: RunStatus = Field(description="Final run status")
    run_log: str = Field(default="", description="Pretty-printed WES run log")
    run_id: str | None = Field(default=None, description="WES run id")

    @property
    def passed(self) -> bool:
        return self.status == RunStatus.COMPLETE
