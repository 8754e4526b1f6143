"""Run builders and recording collaborators for relay tests."""

from __future__ import annotations

import dataclasses
import typing as typ

from cirelay.runs import RunOutcome, RunSnapshot

if typ.TYPE_CHECKING:
    from cirelay.runs import ChangeLogEntry, RunContext, SCMRevision


BASE_URL = "https://dx.example.test"
CURRENT_HOST = "ci-east-01"


def build_run(  # noqa: PLR0913 - mirrors RunSnapshot fields
    *,
    job_full_name: str = "example/job",
    number: int = 42,
    start_time_ms: int = 1000,
    duration_ms: int = 500,
    result: RunOutcome | str | None = RunOutcome.SUCCESS,
    revision: SCMRevision | None = None,
    contributor: str | None = None,
    changes: list[ChangeLogEntry] | None = None,
    started_by: str | None = None,
    env: dict[str, str] | None = None,
) -> RunSnapshot:
    """Return a run snapshot with end-to-end scenario defaults."""
    return RunSnapshot(
        job_full_name=job_full_name,
        number=number,
        start_time_ms=start_time_ms,
        duration_ms=duration_ms,
        result=result,
        revision=revision,
        contributor=contributor,
        changes=list(changes or []),
        started_by=started_by,
        env=dict(env or {}),
    )


@dataclasses.dataclass(slots=True)
class RecordingGateway:
    """Delivery gateway that records payloads and returns a fixed result."""

    accept: bool = True
    calls: list[tuple[str, RunContext]] = dataclasses.field(default_factory=list)

    def send(self, payload: str, run: RunContext) -> bool:
        """Record the call and return ``accept``."""
        self.calls.append((payload, run))
        return self.accept


@dataclasses.dataclass(slots=True)
class ListLogSink:
    """Run console collecting lines in memory."""

    lines: list[str] = dataclasses.field(default_factory=list)

    def write_line(self, message: str) -> None:
        """Store ``message``."""
        self.lines.append(message)


class BrokenEnvironmentRun:
    """Run whose environment and SCM revision cannot be read."""

    def __init__(self, base: RunSnapshot) -> None:
        """Wrap ``base`` and fail the optional sources."""
        self._base = base

    def __getattr__(self, name: str) -> object:
        """Delegate everything else to the wrapped snapshot."""
        return getattr(self._base, name)

    def environment(self) -> typ.Mapping[str, str]:
        """Fail like an adapter that cannot compute the environment."""
        msg = "environment unavailable"
        raise OSError(msg)

    def scm_revision(self) -> SCMRevision | None:
        """Fail like an adapter whose SCM plugin errored."""
        msg = "revision lookup failed"
        raise RuntimeError(msg)
