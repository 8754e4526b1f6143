"""Delivery adapter that prints payloads instead of sending them."""

from __future__ import annotations

import sys
import typing as typ

if typ.TYPE_CHECKING:
    from cirelay.runs.protocol import RunContext


class ConsoleDeliveryGateway:
    """Write each payload as one line to a text stream.

    Parameters
    ----------
    stream
        Destination stream; defaults to ``sys.stdout`` at send time.

    """

    def __init__(self, stream: typ.TextIO | None = None) -> None:
        """Initialise with an optional output stream."""
        self._stream = stream

    def send(self, payload: str, run: RunContext) -> bool:
        """Print ``payload`` and report it as delivered."""
        del run
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(f"{payload}\n")
        return True
