"""Host identity resolution for pipeline source labels."""

from __future__ import annotations

from .csv_line import split_csv_line
from .mapping import (
    DEFAULT_PIPELINE_SOURCE,
    HostMappingTable,
    HostResolution,
    TableSource,
    TableState,
    file_table_source,
    packaged_table_source,
    parse_table,
)
from .resolver import resolve_hostname

__all__ = [
    "DEFAULT_PIPELINE_SOURCE",
    "HostMappingTable",
    "HostResolution",
    "TableSource",
    "TableState",
    "file_table_source",
    "packaged_table_source",
    "parse_table",
    "resolve_hostname",
    "split_csv_line",
]
