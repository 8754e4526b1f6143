"""Unit tests for relay configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from cirelay.config import RelayConfig, check_base_url
from cirelay.errors import RelayConfigError

_ENV_VARS = (
    "CIRELAY_BASE_URL",
    "CIRELAY_REPOSITORY_DENYLIST",
    "CIRELAY_HOST_MAPPING_PATH",
    "CIRELAY_TIMEOUT_S",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_are_unconfigured() -> None:
    """An empty environment leaves the relay unconfigured."""
    config = RelayConfig.from_env()
    assert config == RelayConfig()
    assert not config.is_configured


def test_from_env_reads_every_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    """Each variable populates its field."""
    monkeypatch.setenv("CIRELAY_BASE_URL", " https://dx.example.test ")
    monkeypatch.setenv("CIRELAY_REPOSITORY_DENYLIST", "alpha,beta")
    monkeypatch.setenv("CIRELAY_HOST_MAPPING_PATH", "/etc/cirelay/hosts.csv")
    monkeypatch.setenv("CIRELAY_TIMEOUT_S", "2.5")

    config = RelayConfig.from_env()

    assert config.base_url == "https://dx.example.test"
    assert config.is_configured
    assert config.repository_denylist == "alpha,beta"
    assert config.host_mapping_path == Path("/etc/cirelay/hosts.csv")
    assert config.timeout_s == 2.5


@pytest.mark.parametrize("raw", ["soon", "0", "-1", "nan", "inf"])
def test_invalid_timeout_raises(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    """Timeouts must be positive finite numbers."""
    monkeypatch.setenv("CIRELAY_TIMEOUT_S", raw)
    with pytest.raises(RelayConfigError, match="CIRELAY_TIMEOUT_S"):
        RelayConfig.from_env()


@pytest.mark.parametrize("base_url", [None, "", "   "])
def test_blank_base_url_is_unconfigured(base_url: str | None) -> None:
    """Blank base URLs do not count as configured."""
    assert not RelayConfig(base_url=base_url).is_configured


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, "Base URL is empty."),
        ("  ", "Base URL is empty."),
        ("http://dx.example.test", "Base URL should start with https://"),
        ("https://dx.example.test", None),
    ],
)
def test_check_base_url(value: str | None, expected: str | None) -> None:
    """Empty and non-HTTPS URLs produce warnings."""
    assert check_base_url(value) == expected
