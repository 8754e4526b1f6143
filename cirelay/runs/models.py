"""Typed models describing a completed CI run.

SCM heads are a tagged union: a plain ``BranchHead`` or a
``ChangeRequestHead`` carrying the target branch and request id. The tag
keeps decoded run documents unambiguous, so callers dispatch on the variant
rather than probing for attributes.
"""

from __future__ import annotations

import enum
import typing as typ

import msgspec


class RunOutcome(enum.StrEnum):
    """Final verdict reported by the CI platform for a run."""

    SUCCESS = "SUCCESS"
    UNSTABLE = "UNSTABLE"
    FAILURE = "FAILURE"
    NOT_BUILT = "NOT_BUILT"
    ABORTED = "ABORTED"


class BranchHead(msgspec.Struct, frozen=True, tag="branch"):
    """SCM head for an ordinary branch build."""

    name: str


class ChangeRequestHead(msgspec.Struct, frozen=True, tag="change_request"):
    """SCM head for a pull or merge request build."""

    name: str
    target: str
    id: str


type SCMHead = BranchHead | ChangeRequestHead


class SCMRevision(msgspec.Struct, frozen=True):
    """Resolved revision for a run.

    ``str(revision)`` is the revision identifier reported as the commit SHA.
    """

    head: BranchHead | ChangeRequestHead
    sha: str = ""

    def __str__(self) -> str:
        """Return the revision identifier."""
        return self.sha


class ChangeLogEntry(msgspec.Struct, frozen=True):
    """One change-log entry; ``author_id`` names a user directory entry."""

    author_id: str | None = None
    message: str = ""


class RunSnapshot(msgspec.Struct, frozen=True, kw_only=True):
    """Serializable run description implementing ``RunContext``.

    Used by the command line and tests to describe a run without a live CI
    platform behind it.
    """

    job_full_name: str
    number: int
    start_time_ms: int
    duration_ms: int = 0
    # Any platform verdict; map_outcome reports unknown values as failure
    result: str | None = None
    revision: SCMRevision | None = None
    contributor: str | None = None
    changes: list[ChangeLogEntry] = msgspec.field(default_factory=list)
    started_by: str | None = None
    env: dict[str, str] = msgspec.field(default_factory=dict)

    def scm_revision(self) -> SCMRevision | None:
        """Return the resolved revision, if any."""
        return self.revision

    def contributor_email(self) -> str | None:
        """Return the contributor metadata email, if any."""
        return self.contributor

    def change_log(self) -> typ.Sequence[ChangeLogEntry]:
        """Return change-log entries in run order."""
        return self.changes

    def started_by_user_id(self) -> str | None:
        """Return the id of the user that triggered the run, if any."""
        return self.started_by

    def environment(self) -> typ.Mapping[str, str]:
        """Return the run's environment variables."""
        return self.env


class RunDocument(msgspec.Struct, frozen=True):
    """Command-line input: a run plus the user directory it refers to."""

    run: RunSnapshot
    users: dict[str, str] = msgspec.field(default_factory=dict)
