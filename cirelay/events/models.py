"""Canonical pipeline run event sent for each completed CI run."""

from __future__ import annotations

import msgspec

from .status import PipelineStatus


class CanonicalRunEvent(msgspec.Struct, frozen=True, kw_only=True, omit_defaults=True):
    """Normalized record of one completed run.

    Attributes
    ----------
    pipeline_name
        Full name of the CI job.
    pipeline_source
        Label of the server farm that ran the job.
    reference_id
        ``"<job> #<number>"``; unique per run.
    source_id
        Job identifier on the CI server.
    started_at, finished_at
        Unix epoch seconds; ``finished_at`` is never before ``started_at``.
    status
        Reported outcome.
    repository
        Repository short name derived from ``source_url``.
    source_url
        Remote URL as configured on the job; may be empty.
    head_branch
        Branch that was built; empty when unknown.
    base_branch
        Target branch of a change request; omitted from the payload otherwise.
    commit_sha
        Revision that was built; may be empty.
    pr_number
        Change request id; omitted from the payload when absent.
    email
        Best-effort author email; may be empty.

    """

    pipeline_name: str
    pipeline_source: str
    reference_id: str
    source_id: str
    started_at: int
    finished_at: int
    status: PipelineStatus
    repository: str
    source_url: str
    head_branch: str
    commit_sha: str
    email: str
    base_branch: str | None = None
    pr_number: str | None = None

    def __post_init__(self) -> None:
        """Reject events that finish before they start."""
        if self.finished_at < self.started_at:
            msg = (
                f"finished_at ({self.finished_at}) precedes "
                f"started_at ({self.started_at})"
            )
            raise ValueError(msg)

    def to_json(self) -> str:
        """Serialize the event as the flat JSON payload sent for delivery."""
        return msgspec.json.encode(self).decode("utf-8")
