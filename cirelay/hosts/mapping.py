"""Host name to pipeline source mapping.

Each CI server reports events under a pipeline source label that identifies
its server farm. Labels come from a two-column CSV table
(``hostname,label``) shipped with the package or supplied by the operator.

``HostMappingTable`` loads the table lazily on first use and publishes it as
an immutable snapshot. Builds are single-flight: concurrent first callers
block on a lock while one of them reads the table, then all of them share
the published snapshot. ``reload`` discards the snapshot so the next lookup
rebuilds it; lookups already holding the old snapshot finish against it.

Usage
-----
>>> table = HostMappingTable(file_table_source(Path("hosts.csv")))
>>> table.lookup("ci-east-01")
'east-farm'

"""

from __future__ import annotations

import dataclasses
import enum
import importlib.resources
import itertools
import threading
import types
import typing as typ

from cirelay.errors import HostnameResolutionError
from cirelay.logging import get_logger, log_debug, log_error, log_info, log_warning

from .csv_line import split_csv_line
from .resolver import resolve_hostname

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = get_logger(__name__)

DEFAULT_PIPELINE_SOURCE = "jenkins-unmapped"
PACKAGED_TABLE_NAME = "pipeline-hosts.csv"

# Mappings echoed at DEBUG after a build
_SAMPLE_SIZE = 5

type TableSource = cabc.Callable[[], cabc.Iterable[str]]
type HostnameResolver = cabc.Callable[[], str]


class TableState(enum.StrEnum):
    """Lifecycle of a host mapping table."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


@dataclasses.dataclass(frozen=True, slots=True)
class HostResolution:
    """Host name detected for this process and the label it maps to."""

    hostname: str | None
    pipeline_source: str


def packaged_table_source(name: str = PACKAGED_TABLE_NAME) -> TableSource:
    """Return a source reading the table bundled with ``cirelay.hosts``."""

    def _read() -> list[str]:
        resource = importlib.resources.files(__package__).joinpath(name)
        return resource.read_text(encoding="utf-8").splitlines()

    _read.__qualname__ = f"packaged_table_source({name!r})"
    return _read


def file_table_source(path: Path) -> TableSource:
    """Return a source reading the table from ``path``."""

    def _read() -> list[str]:
        return path.read_text(encoding="utf-8").splitlines()

    _read.__qualname__ = f"file_table_source({str(path)!r})"
    return _read


def parse_table(lines: cabc.Iterable[str]) -> dict[str, str]:
    """Parse table lines into a ``hostname -> label`` dict.

    Blank lines and ``#`` comments are skipped. A row counts only when both
    its first and second fields are non-empty; later rows win over earlier
    rows for the same host name. Host names keep their case.
    """
    mapping: dict[str, str] = {}
    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        fields = split_csv_line(line)
        if len(fields) < 2:  # noqa: PLR2004 - hostname and label columns
            continue
        hostname, label = fields[0], fields[1]
        if hostname and label:
            mapping[hostname] = label
    return mapping


class HostMappingTable:
    """Lazily built, reloadable ``hostname -> pipeline source`` cache.

    Parameters
    ----------
    source
        Zero-argument callable returning the table's lines. Any error it
        raises, including a missing file or undecodable content, leaves the
        table empty rather than failing lookups.
    default_source
        Label returned for hosts without a mapping.
    hostname_resolver
        Callable that determines the current host name; defaults to
        :func:`cirelay.hosts.resolver.resolve_hostname`.

    """

    def __init__(
        self,
        source: TableSource,
        *,
        default_source: str = DEFAULT_PIPELINE_SOURCE,
        hostname_resolver: HostnameResolver = resolve_hostname,
    ) -> None:
        """Initialise an unbuilt table."""
        self._source = source
        self._default_source = default_source
        self._hostname_resolver = hostname_resolver
        self._lock = threading.Lock()
        self._snapshot: types.MappingProxyType[str, str] | None = None
        self._state = TableState.UNINITIALIZED

    @property
    def default_source(self) -> str:
        """Label used when a host has no mapping."""
        return self._default_source

    @property
    def state(self) -> TableState:
        """Current lifecycle state."""
        return self._state

    def entries(self) -> typ.Mapping[str, str]:
        """Return the published mapping, building it on first use."""
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot

        with self._lock:
            # Double-check after acquiring the lock
            if self._snapshot is None:
                self._state = TableState.INITIALIZING
                self._snapshot = types.MappingProxyType(self._build())
                self._state = TableState.READY
            return self._snapshot

    def lookup(self, hostname: str) -> str:
        """Return the pipeline source for ``hostname`` or the default label."""
        label = self.entries().get(hostname)
        if label is not None and label.strip():
            log_debug(
                logger, "Found pipeline source for hostname %r: %s", hostname, label
            )
            return label
        log_info(
            logger,
            "No mapping found for hostname %r, using default: %s",
            hostname,
            self._default_source,
        )
        return self._default_source

    def resolve_current_host(self) -> HostResolution:
        """Resolve the host running this process and its pipeline source.

        Falls back to the default label when the host name cannot be
        determined.
        """
        try:
            hostname = self._hostname_resolver()
        except HostnameResolutionError as exc:
            log_warning(
                logger,
                "Error getting pipeline source for current hostname: %s",
                exc,
            )
            return HostResolution(hostname=None, pipeline_source=self._default_source)
        return HostResolution(hostname=hostname, pipeline_source=self.lookup(hostname))

    def resolve_for_current_host(self) -> str:
        """Return the pipeline source label for the host running this process."""
        return self.resolve_current_host().pipeline_source

    def reload(self) -> None:
        """Discard the published mapping; the next lookup rebuilds it."""
        with self._lock:
            self._snapshot = None
            self._state = TableState.UNINITIALIZED

    def _build(self) -> dict[str, str]:
        try:
            mapping = parse_table(self._source())
        except Exception as exc:  # noqa: BLE001 - an unreadable table maps nothing
            log_error(
                logger,
                "Host mapping table unavailable from %s: %s",
                getattr(self._source, "__qualname__", repr(self._source)),
                exc,
                exc_info=exc,
            )
            return {}

        log_info(logger, "Loaded %d hostname mappings", len(mapping))
        for hostname, label in itertools.islice(mapping.items(), _SAMPLE_SIZE):
            log_debug(logger, "Sample mapping: %s -> %s", hostname, label)
        return mapping


__all__ = [
    "DEFAULT_PIPELINE_SOURCE",
    "PACKAGED_TABLE_NAME",
    "HostMappingTable",
    "HostResolution",
    "TableSource",
    "TableState",
    "file_table_source",
    "packaged_table_source",
    "parse_table",
]
