"""Structured log events for the run event pipeline.

``PipelineEventLogger`` mirrors each decision the pipeline takes into the
module logger and, when one is supplied, into the run's own console so the
CI user sees why an event was or was not reported.

Usage
-----
>>> events = PipelineEventLogger(log_sink=None)
>>> events.log_skipped_unconfigured(reference_id="example/job #42")

"""

from __future__ import annotations

import enum
import typing as typ

from cirelay.logging import get_logger, log_debug, log_info, log_warning

if typ.TYPE_CHECKING:
    from cirelay.runs.protocol import RunLogSink

    from .models import CanonicalRunEvent

logger = get_logger(__name__)

RUN_LOG_PREFIX = "CI relay: "


class PipelineEventType(enum.StrEnum):
    """Structured log event types for pipeline decisions."""

    SKIPPED_UNCONFIGURED = "pipeline.run.skipped_unconfigured"
    SKIPPED_DENYLISTED = "pipeline.run.skipped_denylisted"
    SOURCE_RESOLVED = "pipeline.source.resolved"
    PAYLOAD_BUILT = "pipeline.payload.built"
    RUN_SENT = "pipeline.run.sent"
    DELIVERY_FAILED = "pipeline.run.delivery_failed"


class PipelineEventLogger:
    """Emit pipeline events via femtologging and the run console."""

    def __init__(self, log_sink: RunLogSink | None = None) -> None:
        """Initialise with an optional run console."""
        self._log_sink = log_sink

    def _console(self, message: str) -> None:
        if self._log_sink is not None:
            self._log_sink.write_line(f"{RUN_LOG_PREFIX}{message}")

    def log_skipped_unconfigured(self, *, reference_id: str) -> None:
        """Log that the relay has no base URL and the run is skipped."""
        log_info(
            logger,
            "[%s] reference_id=%s",
            PipelineEventType.SKIPPED_UNCONFIGURED,
            reference_id,
        )
        self._console("plugin not configured. Skipping.")

    def log_skipped_denylisted(self, *, reference_id: str, repository: str) -> None:
        """Log that the run's repository is denylisted."""
        log_info(
            logger,
            "[%s] reference_id=%s repository=%s",
            PipelineEventType.SKIPPED_DENYLISTED,
            reference_id,
            repository,
        )
        self._console(
            f"repository '{repository}' is denylisted. Skipping submission."
        )

    def log_source_resolved(
        self,
        *,
        pipeline_source: str,
        hostname: str | None,
    ) -> None:
        """Log the pipeline source chosen for this host.

        Parameters
        ----------
        pipeline_source
            Label that will be reported.
        hostname
            Host name detected for diagnostics, or ``None`` when it could
            not be determined.

        """
        log_debug(
            logger,
            "[%s] pipeline_source=%s hostname=%s",
            PipelineEventType.SOURCE_RESOLVED,
            pipeline_source,
            hostname,
        )
        self._console(f"Using pipeline source: {pipeline_source}")
        if hostname is None:
            self._console("Could not determine hostname")
        else:
            self._console(f"Detected hostname: {hostname}")

    def log_payload_built(self, payload: str) -> None:
        """Log the serialized payload at DEBUG."""
        log_debug(
            logger, "[%s] payload=%s", PipelineEventType.PAYLOAD_BUILT, payload
        )

    def log_sent(self, event: CanonicalRunEvent) -> None:
        """Log a delivered event."""
        log_info(
            logger,
            "[%s] reference_id=%s repository=%s status=%s pipeline_source=%s",
            PipelineEventType.RUN_SENT,
            event.reference_id,
            event.repository,
            event.status,
            event.pipeline_source,
        )

    def log_delivery_failed(self, event: CanonicalRunEvent) -> None:
        """Log an event the gateway reported as not delivered."""
        log_warning(
            logger,
            "[%s] reference_id=%s repository=%s",
            PipelineEventType.DELIVERY_FAILED,
            event.reference_id,
            event.repository,
        )
        self._console(f"failed to send event for {event.reference_id}")
