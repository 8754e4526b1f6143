"""Build and deliver pipeline run events for completed CI runs.

``RunEventPipeline`` is the composition root of the relay. For each completed
run it:

1. skips the run when no base URL is configured;
2. extracts raw fields and normalizes branch names and the repository name;
3. resolves the pipeline source label for the current host;
4. maps the run outcome to a reported status;
5. drops the run when its repository is denylisted;
6. assembles a ``CanonicalRunEvent`` and hands its JSON to the gateway.

Skips are ordinary control flow reported through ``PipelineOutcome``; the
pipeline does not raise for missing or unreadable run data.

Usage
-----
>>> pipeline = RunEventPipeline(
...     config=RelayConfig.from_env(),
...     host_table=HostMappingTable(packaged_table_source()),
...     gateway=HttpDeliveryGateway.from_config(config),
...     user_directory=StaticUserDirectory(),
... )
>>> outcome = pipeline.process(run)

"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from cirelay.common.refs import repository_name, strip_branch_ref

from .denylist import RepositoryDenylist
from .extraction import RunFieldExtractor
from .models import CanonicalRunEvent
from .observability import PipelineEventLogger
from .status import map_outcome

if typ.TYPE_CHECKING:
    from cirelay.config import RelayConfig
    from cirelay.delivery.protocol import DeliveryGateway
    from cirelay.hosts.mapping import HostMappingTable
    from cirelay.runs.protocol import RunContext, RunLogSink, UserDirectory

_MS_PER_SECOND = 1000


class DispatchStatus(enum.StrEnum):
    """What happened to a run handed to the pipeline."""

    SENT = "sent"
    DELIVERY_FAILED = "delivery_failed"
    SKIPPED_UNCONFIGURED = "skipped_unconfigured"
    SKIPPED_DENYLISTED = "skipped_denylisted"


@dataclasses.dataclass(frozen=True, slots=True)
class PipelineOutcome:
    """Result of processing one run.

    Attributes
    ----------
    status
        Dispatch decision for the run.
    event
        The assembled event; ``None`` when the run was skipped before
        assembly.

    """

    status: DispatchStatus
    event: CanonicalRunEvent | None = None

    @property
    def sent(self) -> bool:
        """Return True when the gateway accepted the event."""
        return self.status is DispatchStatus.SENT


def reference_id_for(run: RunContext) -> str:
    """Return the ``"<job> #<number>"`` reference for ``run``."""
    return f"{run.job_full_name} #{run.number}"


def run_window(run: RunContext) -> tuple[int, int]:
    """Return ``(started_at, finished_at)`` in Unix seconds.

    Negative durations are treated as zero so the run never finishes before
    it starts.
    """
    start_ms = run.start_time_ms
    finish_ms = start_ms + max(run.duration_ms, 0)
    return (start_ms // _MS_PER_SECOND, finish_ms // _MS_PER_SECOND)


class RunEventPipeline:
    """Turn completed runs into delivered ``CanonicalRunEvent`` payloads.

    Parameters
    ----------
    config
        Relay configuration; supplies the base URL and denylist.
    host_table
        Shared host mapping cache used for the pipeline source label.
    gateway
        Delivery adapter receiving serialized events.
    user_directory
        Resolves user ids to emails during author extraction.

    """

    def __init__(
        self,
        *,
        config: RelayConfig,
        host_table: HostMappingTable,
        gateway: DeliveryGateway,
        user_directory: UserDirectory,
    ) -> None:
        """Initialise the pipeline with its collaborators."""
        self._config = config
        self._host_table = host_table
        self._gateway = gateway
        self._user_directory = user_directory
        self._denylist = RepositoryDenylist.parse(config.repository_denylist)

    def process(
        self,
        run: RunContext,
        *,
        log_sink: RunLogSink | None = None,
    ) -> PipelineOutcome:
        """Build, filter and deliver the event for one completed run.

        Parameters
        ----------
        run
            The completed run.
        log_sink
            Optional run console receiving diagnostic lines.

        Returns
        -------
        PipelineOutcome
            Whether the event was sent, failed delivery or was skipped.

        """
        events = PipelineEventLogger(log_sink)
        reference_id = reference_id_for(run)

        if not self._config.is_configured:
            events.log_skipped_unconfigured(reference_id=reference_id)
            return PipelineOutcome(DispatchStatus.SKIPPED_UNCONFIGURED)

        raw = RunFieldExtractor(self._user_directory, log_sink=log_sink).extract(run)
        repository = repository_name(raw.repository_url)

        resolution = self._host_table.resolve_current_host()
        events.log_source_resolved(
            pipeline_source=resolution.pipeline_source,
            hostname=resolution.hostname,
        )

        status = map_outcome(run.result)

        if self._denylist.denies(repository):
            events.log_skipped_denylisted(
                reference_id=reference_id, repository=repository
            )
            return PipelineOutcome(DispatchStatus.SKIPPED_DENYLISTED)

        started_at, finished_at = run_window(run)
        job_name = run.job_full_name
        event = CanonicalRunEvent(
            pipeline_name=job_name,
            pipeline_source=resolution.pipeline_source,
            reference_id=reference_id,
            source_id=job_name,
            started_at=started_at,
            finished_at=finished_at,
            status=status,
            repository=repository,
            source_url=raw.repository_url,
            head_branch=strip_branch_ref(raw.branch),
            base_branch=strip_branch_ref(raw.target_branch) or None,
            commit_sha=raw.commit_sha,
            pr_number=raw.pr_number or None,
            email=raw.email,
        )

        payload = event.to_json()
        events.log_payload_built(payload)
        if not self._gateway.send(payload, run):
            events.log_delivery_failed(event)
            return PipelineOutcome(DispatchStatus.DELIVERY_FAILED, event)

        events.log_sent(event)
        return PipelineOutcome(DispatchStatus.SENT, event)
