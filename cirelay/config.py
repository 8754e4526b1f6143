"""Runtime configuration for the relay.

Usage
-----
Build a configuration explicitly:

>>> config = RelayConfig(base_url="https://dx.example.com")
>>> config.is_configured
True

Or load it from environment variables:

>>> import os
>>> os.environ["CIRELAY_BASE_URL"] = "https://dx.example.com"
>>> RelayConfig.from_env().base_url
'https://dx.example.com'

"""

from __future__ import annotations

import dataclasses as dc
import math
import os
from pathlib import Path

from cirelay.errors import RelayConfigError

_DEFAULT_TIMEOUT_S = 10.0
_SECURE_SCHEME = "https://"


def check_base_url(value: str | None) -> str | None:
    """Return a warning for a questionable base URL, else ``None``.

    Examples
    --------
    >>> check_base_url("http://dx.example.com")
    'Base URL should start with https://'
    >>> check_base_url("https://dx.example.com") is None
    True

    """
    if value is None or not value.strip():
        return "Base URL is empty."
    if not value.startswith(_SECURE_SCHEME):
        return f"Base URL should start with {_SECURE_SCHEME}"
    return None


@dc.dataclass(frozen=True, slots=True)
class RelayConfig:
    """Configuration for building and delivering pipeline run events.

    Attributes
    ----------
    base_url
        Root URL of the pipeline run API. The relay does nothing while this
        is unset or blank.
    repository_denylist
        Repository short names, separated by commas or newlines, whose runs
        are never reported.
    host_mapping_path
        Optional CSV table overriding the packaged host mapping.
    timeout_s
        HTTP timeout for delivery requests.

    """

    base_url: str | None = None
    repository_denylist: str = ""
    host_mapping_path: Path | None = None
    timeout_s: float = _DEFAULT_TIMEOUT_S

    @property
    def is_configured(self) -> bool:
        """Return True when a non-blank base URL is set."""
        return self.base_url is not None and bool(self.base_url.strip())

    @staticmethod
    def _parse_timeout(raw: str | None) -> float:
        if raw is None or not raw.strip():
            return _DEFAULT_TIMEOUT_S
        try:
            value = float(raw)
        except ValueError as exc:
            raise RelayConfigError.invalid_timeout(raw) from exc
        if not math.isfinite(value) or value <= 0:
            raise RelayConfigError.invalid_timeout(raw)
        return value

    @classmethod
    def from_env(cls) -> RelayConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``CIRELAY_BASE_URL``: Pipeline run API root.
        - ``CIRELAY_REPOSITORY_DENYLIST``: Denylisted repository names.
        - ``CIRELAY_HOST_MAPPING_PATH``: Host mapping CSV override.
        - ``CIRELAY_TIMEOUT_S``: Delivery timeout in seconds.

        Raises
        ------
        RelayConfigError
            If ``CIRELAY_TIMEOUT_S`` is not a positive number.

        """
        raw_base_url = os.environ.get("CIRELAY_BASE_URL", "").strip()

        host_mapping_path: Path | None = None
        raw_mapping_path = os.environ.get("CIRELAY_HOST_MAPPING_PATH", "")
        if raw_mapping_path.strip():
            host_mapping_path = Path(raw_mapping_path.strip())

        return cls(
            base_url=raw_base_url or None,
            repository_denylist=os.environ.get("CIRELAY_REPOSITORY_DENYLIST", ""),
            host_mapping_path=host_mapping_path,
            timeout_s=cls._parse_timeout(os.environ.get("CIRELAY_TIMEOUT_S")),
        )
