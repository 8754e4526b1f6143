"""Errors raised inside the relay."""

from __future__ import annotations


class RelayError(Exception):
    """Base class for relay errors."""


class RelayConfigError(RelayError):
    """Raised when relay configuration read from the environment is invalid."""

    @classmethod
    def invalid_timeout(cls, raw: str) -> RelayConfigError:
        """Return an error for a timeout that is not a positive number."""
        return cls(f"CIRELAY_TIMEOUT_S must be a positive number, got: {raw!r}")


class HostnameResolutionError(RelayError):
    """Raised when no source yields a host name for the current process."""

    @classmethod
    def exhausted(cls) -> HostnameResolutionError:
        """Return an error once every host name source has been tried."""
        return cls("Could not determine hostname")
