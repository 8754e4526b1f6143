"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest

from cirelay.config import RelayConfig
from cirelay.hosts import HostMappingTable
from cirelay.runs import StaticUserDirectory
from tests.helpers.runs import BASE_URL, CURRENT_HOST, ListLogSink, RecordingGateway

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def gateway() -> RecordingGateway:
    """Return a gateway that accepts every payload."""
    return RecordingGateway()


@pytest.fixture
def log_sink() -> ListLogSink:
    """Return an in-memory run console."""
    return ListLogSink()


@pytest.fixture
def host_table_path(tmp_path: Path) -> Path:
    """Write a host mapping table and return its path."""
    path = tmp_path / "hosts.csv"
    path.write_text(
        "# hostname,label\n"
        f'{CURRENT_HOST},"east-farm"\n'
        "ci-west-01,west-farm\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def host_table(host_table_path: Path) -> HostMappingTable:
    """Return a host table whose current host is ``ci-east-01``."""
    return HostMappingTable(
        lambda: host_table_path.read_text(encoding="utf-8").splitlines(),
        hostname_resolver=lambda: CURRENT_HOST,
    )


@pytest.fixture
def relay_config() -> RelayConfig:
    """Return a configured relay with an empty denylist."""
    return RelayConfig(base_url=BASE_URL)


@pytest.fixture
def user_directory() -> StaticUserDirectory:
    """Return a directory with two known users."""
    return StaticUserDirectory(
        {
            "alice": "alice@example.com",
            "bob": "bob@example.com",
            "nomail": "",
        }
    )
