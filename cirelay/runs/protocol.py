"""Capability interfaces through which the relay reads a CI run.

The relay never depends on the CI platform's own object model. An adapter
for the platform implements ``RunContext`` (and ``UserDirectory`` for email
lookups); ``RunSnapshot`` is the in-process implementation used by the
command line and tests.
"""

from __future__ import annotations

import dataclasses
import typing as typ

if typ.TYPE_CHECKING:
    from .models import ChangeLogEntry, RunOutcome, SCMRevision


@typ.runtime_checkable
class RunContext(typ.Protocol):
    """Read-only view of a completed run.

    Every optional source is exposed as a method so adapters can fetch it
    lazily; any of them may return ``None`` (or an empty sequence) and
    ``environment`` may raise when the platform cannot compute it.
    """

    @property
    def job_full_name(self) -> str:
        """Full name of the job the run belongs to."""
        ...

    @property
    def number(self) -> int:
        """Run sequence number within the job."""
        ...

    @property
    def start_time_ms(self) -> int:
        """Start time in Unix epoch milliseconds."""
        ...

    @property
    def duration_ms(self) -> int:
        """Run duration in milliseconds."""
        ...

    @property
    def result(self) -> RunOutcome | str | None:
        """Final outcome, or ``None`` when the platform recorded none."""
        ...

    def scm_revision(self) -> SCMRevision | None:
        """Return the resolved SCM revision."""
        ...

    def contributor_email(self) -> str | None:
        """Return the email from contributor metadata."""
        ...

    def change_log(self) -> typ.Sequence[ChangeLogEntry]:
        """Return change-log entries in the order the platform recorded them."""
        ...

    def started_by_user_id(self) -> str | None:
        """Return the id from a "started by user" cause."""
        ...

    def environment(self) -> typ.Mapping[str, str]:
        """Return the run's environment variables."""
        ...


@typ.runtime_checkable
class UserDirectory(typ.Protocol):
    """Resolves CI user ids to email addresses."""

    def resolve_email(self, user_id: str) -> str | None:
        """Return the email for ``user_id``, or ``None`` when unknown."""
        ...


@typ.runtime_checkable
class RunLogSink(typ.Protocol):
    """Run-scoped console that receives diagnostic lines."""

    def write_line(self, message: str) -> None:
        """Append one line to the run's log."""
        ...


@dataclasses.dataclass(frozen=True, slots=True)
class StaticUserDirectory:
    """User directory backed by a fixed ``user id -> email`` mapping."""

    emails: typ.Mapping[str, str] = dataclasses.field(default_factory=dict)

    def resolve_email(self, user_id: str) -> str | None:
        """Return the configured email for ``user_id``."""
        return self.emails.get(user_id)
