"""cirelay: report completed CI runs as normalized pipeline run events."""

from __future__ import annotations

__version__ = "0.1.0"
