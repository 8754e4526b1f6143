"""Determine the host name of the running process.

The live network identity is preferred. When it cannot be queried the
``HOSTNAME`` environment variable is used instead.
"""

from __future__ import annotations

import os
import socket
import typing as typ

from cirelay.common.fallback import NamedStep, first_present
from cirelay.errors import HostnameResolutionError
from cirelay.logging import get_logger, log_warning

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = get_logger(__name__)

HOSTNAME_ENV_VAR = "HOSTNAME"


def _report_step_failure(step: str, exc: Exception) -> None:
    log_warning(logger, "Could not get hostname from %s: %s", step, exc)


def resolve_hostname(
    *,
    environ: typ.Mapping[str, str] | None = None,
    probe: cabc.Callable[[], str] = socket.gethostname,
) -> str:
    """Return the current host name.

    Parameters
    ----------
    environ
        Environment consulted when ``probe`` fails; defaults to
        ``os.environ``.
    probe
        Live host name query.

    Raises
    ------
    HostnameResolutionError
        If neither the probe nor the environment yields a host name.

    """
    env = os.environ if environ is None else environ
    hostname = first_present(
        (
            NamedStep("network identity", probe),
            NamedStep(f"${HOSTNAME_ENV_VAR}", lambda: env.get(HOSTNAME_ENV_VAR)),
        ),
        on_error=_report_step_failure,
    )
    if hostname is None:
        raise HostnameResolutionError.exhausted()
    return hostname
