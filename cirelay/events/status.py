"""Mapping from CI run outcomes to reported pipeline statuses."""

from __future__ import annotations

import enum

from cirelay.runs.models import RunOutcome


class PipelineStatus(enum.StrEnum):
    """Status values accepted by the pipeline run API."""

    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"


# UNSTABLE reports as a failure; ABORTED and NOT_BUILT both report as cancelled.
_OUTCOME_STATUS: dict[RunOutcome, PipelineStatus] = {
    RunOutcome.SUCCESS: PipelineStatus.SUCCESS,
    RunOutcome.FAILURE: PipelineStatus.FAILURE,
    RunOutcome.UNSTABLE: PipelineStatus.FAILURE,
    RunOutcome.ABORTED: PipelineStatus.CANCELLED,
    RunOutcome.NOT_BUILT: PipelineStatus.CANCELLED,
}


def map_outcome(outcome: RunOutcome | str | None) -> PipelineStatus:
    """Return the reported status for a run outcome.

    Missing or unrecognised outcomes report as ``failure``; a run without a
    verdict is never reported as a success.

    Examples
    --------
    >>> map_outcome(RunOutcome.UNSTABLE)
    <PipelineStatus.FAILURE: 'failure'>
    >>> map_outcome(None)
    <PipelineStatus.FAILURE: 'failure'>

    """
    if outcome is None:
        return PipelineStatus.FAILURE
    try:
        key = RunOutcome(str(outcome).upper())
    except ValueError:
        return PipelineStatus.FAILURE
    return _OUTCOME_STATUS.get(key, PipelineStatus.FAILURE)
