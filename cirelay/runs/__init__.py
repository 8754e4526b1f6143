"""CI run capability interfaces and models."""

from __future__ import annotations

from .models import (
    BranchHead,
    ChangeLogEntry,
    ChangeRequestHead,
    RunDocument,
    RunOutcome,
    RunSnapshot,
    SCMHead,
    SCMRevision,
)
from .protocol import RunContext, RunLogSink, StaticUserDirectory, UserDirectory

__all__ = [
    "BranchHead",
    "ChangeLogEntry",
    "ChangeRequestHead",
    "RunContext",
    "RunDocument",
    "RunLogSink",
    "RunOutcome",
    "RunSnapshot",
    "SCMHead",
    "SCMRevision",
    "StaticUserDirectory",
    "UserDirectory",
]
