"""Unit tests for current host name resolution."""

from __future__ import annotations

import pytest

from cirelay.errors import HostnameResolutionError
from cirelay.hosts import resolve_hostname


def _unreachable() -> str:
    msg = "name resolution failed"
    raise OSError(msg)


def test_prefers_live_probe() -> None:
    """The live probe wins over the environment."""
    hostname = resolve_hostname(environ={"HOSTNAME": "from-env"}, probe=lambda: "live")
    assert hostname == "live"


def test_falls_back_to_environment_when_probe_fails() -> None:
    """A failing probe hands over to ``HOSTNAME``."""
    hostname = resolve_hostname(environ={"HOSTNAME": "from-env"}, probe=_unreachable)
    assert hostname == "from-env"


def test_falls_back_to_environment_when_probe_is_blank() -> None:
    """A blank probe result hands over to ``HOSTNAME``."""
    hostname = resolve_hostname(environ={"HOSTNAME": "from-env"}, probe=lambda: "")
    assert hostname == "from-env"


@pytest.mark.parametrize("environ", [{}, {"HOSTNAME": "  "}])
def test_raises_when_every_source_fails(environ: dict[str, str]) -> None:
    """No usable source raises ``HostnameResolutionError``."""
    with pytest.raises(HostnameResolutionError, match="Could not determine hostname"):
        resolve_hostname(environ=environ, probe=_unreachable)


def test_reads_process_environment_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an explicit mapping ``os.environ`` is consulted."""
    monkeypatch.setenv("HOSTNAME", "process-host")
    assert resolve_hostname(probe=_unreachable) == "process-host"
