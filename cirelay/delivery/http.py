"""HTTP delivery adapter for the pipeline run API."""

from __future__ import annotations

import typing as typ

import httpx

from cirelay.events.pipeline import reference_id_for
from cirelay.logging import get_logger, log_error, log_info

if typ.TYPE_CHECKING:
    from cirelay.config import RelayConfig
    from cirelay.runs.protocol import RunContext

logger = get_logger(__name__)

PIPELINE_RUNS_PATH = "/api/pipelineRuns.sync"
_HTTP_ERROR_STATUS_THRESHOLD = 400


class HttpDeliveryGateway:
    """POST serialized run events to ``{base_url}/api/pipelineRuns.sync``.

    Parameters
    ----------
    base_url
        Root URL of the pipeline run API.
    timeout_s
        Request timeout in seconds.
    http_client
        Optional ``httpx.Client`` for testing. If not provided, the gateway
        creates and owns its own client.

    Examples
    --------
    >>> with HttpDeliveryGateway("https://dx.example.com") as gateway:
    ...     gateway.send(payload, run)

    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_s: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialise the gateway with its endpoint."""
        self._endpoint = f"{base_url.rstrip('/')}{PIPELINE_RUNS_PATH}"
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout_s)

    @classmethod
    def from_config(cls, config: RelayConfig) -> HttpDeliveryGateway:
        """Build a gateway from relay configuration."""
        return cls(config.base_url or "", timeout_s=config.timeout_s)

    @property
    def endpoint(self) -> str:
        """URL events are posted to."""
        return self._endpoint

    def close(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> typ.Self:
        """Return the gateway for use as a context manager."""
        return self

    def __exit__(self, *exc_info: object) -> None:
        """Close owned resources on exit."""
        self.close()

    def send(self, payload: str, run: RunContext) -> bool:
        """POST ``payload`` and report whether the API accepted it."""
        reference_id = reference_id_for(run)
        try:
            response = self._client.post(
                self._endpoint,
                content=payload.encode("utf-8"),
                headers={"Content-Type": "application/json"},
            )
        except httpx.HTTPError as exc:
            log_error(
                logger,
                "Pipeline run delivery failed for %s: %s",
                reference_id,
                exc,
                exc_info=exc,
            )
            return False

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            log_error(
                logger,
                "Pipeline run API returned HTTP %d for %s",
                response.status_code,
                reference_id,
            )
            return False

        log_info(
            logger,
            "Pipeline run API accepted %s (HTTP %d)",
            reference_id,
            response.status_code,
        )
        return True
