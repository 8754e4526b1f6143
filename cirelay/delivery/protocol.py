"""DeliveryGateway protocol for handing off serialized run events.

This module defines the port through which the pipeline publishes events.
Adapters own transport concerns: HTTP status handling, timeouts and any
retry policy live behind ``send``.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from cirelay.runs.protocol import RunContext


@typ.runtime_checkable
class DeliveryGateway(typ.Protocol):
    """Protocol for delivering one serialized pipeline run event."""

    def send(self, payload: str, run: RunContext) -> bool:
        """Deliver ``payload`` for ``run``.

        Parameters
        ----------
        payload
            The event serialized as a flat JSON object.
        run
            The run the event describes.

        Returns
        -------
        bool
            ``True`` when the receiver accepted the event.

        """
        ...
