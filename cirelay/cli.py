"""Command-line entry point for resolving pipeline sources and emitting runs."""

from __future__ import annotations

import argparse
import os
import sys
import typing as typ
from pathlib import Path

import msgspec

from cirelay.config import RelayConfig, check_base_url
from cirelay.delivery import ConsoleDeliveryGateway, HttpDeliveryGateway
from cirelay.errors import RelayConfigError
from cirelay.events import DispatchStatus, RunEventPipeline
from cirelay.hosts import HostMappingTable, file_table_source, packaged_table_source
from cirelay.logging import configure_logging, get_logger, log_warning
from cirelay.runs import RunDocument, StaticUserDirectory

if typ.TYPE_CHECKING:
    from cirelay.delivery import DeliveryGateway
    from cirelay.hosts import TableSource

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_DELIVERY_FAILED = 1
EXIT_BAD_INPUT = 2


class StreamLogSink:
    """Run console that writes diagnostic lines to a text stream."""

    def __init__(self, stream: typ.TextIO) -> None:
        """Initialise with the destination stream."""
        self._stream = stream

    def write_line(self, message: str) -> None:
        """Write ``message`` followed by a newline."""
        self._stream.write(f"{message}\n")


def _table_source(path: Path | None) -> TableSource:
    return packaged_table_source() if path is None else file_table_source(path)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cirelay", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    source = commands.add_parser(
        "source", help="Print the pipeline source label for a host"
    )
    source.add_argument(
        "--hostname",
        default=None,
        help="Host name to look up (default: the current host)",
    )
    source.add_argument(
        "--table",
        type=Path,
        default=None,
        help="Host mapping CSV (default: CIRELAY_HOST_MAPPING_PATH or packaged)",
    )

    emit = commands.add_parser(
        "emit", help="Build and deliver the event for a run JSON document"
    )
    emit.add_argument("run_json", type=Path, help="Run document to process")
    emit.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the payload instead of sending it",
    )
    return parser


def _run_source(args: argparse.Namespace, config: RelayConfig) -> int:
    table = HostMappingTable(_table_source(args.table or config.host_mapping_path))
    if args.hostname is None:
        print(table.resolve_for_current_host())
    else:
        print(table.lookup(args.hostname))
    return EXIT_OK


def _run_emit(args: argparse.Namespace, config: RelayConfig) -> int:
    run_path: Path = args.run_json
    try:
        document = msgspec.json.decode(run_path.read_bytes(), type=RunDocument)
    except (OSError, msgspec.DecodeError) as exc:
        print(f"Cannot read run document {run_path}: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if config.is_configured and (warning := check_base_url(config.base_url)):
        log_warning(logger, "CIRELAY_BASE_URL: %s", warning)

    gateway: DeliveryGateway
    if args.dry_run:
        gateway = ConsoleDeliveryGateway(sys.stdout)
    else:
        gateway = HttpDeliveryGateway.from_config(config)

    pipeline = RunEventPipeline(
        config=config,
        host_table=HostMappingTable(_table_source(config.host_mapping_path)),
        gateway=gateway,
        user_directory=StaticUserDirectory(document.users),
    )
    try:
        outcome = pipeline.process(document.run, log_sink=StreamLogSink(sys.stderr))
    finally:
        if isinstance(gateway, HttpDeliveryGateway):
            gateway.close()

    if outcome.status is DispatchStatus.DELIVERY_FAILED:
        return EXIT_DELIVERY_FAILED
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Run the ``cirelay`` command line.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        0 when the run was sent or deliberately skipped, 1 when delivery
        failed, 2 for unreadable input or invalid configuration.

    """
    args = _build_parser().parse_args(argv)

    raw_level = os.environ.get("CIRELAY_LOG_LEVEL", "INFO")
    normalized_level, invalid_level = configure_logging(raw_level)
    if invalid_level:
        log_warning(
            logger,
            "Invalid CIRELAY_LOG_LEVEL %r, falling back to %s",
            raw_level,
            normalized_level,
        )

    try:
        config = RelayConfig.from_env()
    except RelayConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if args.command == "source":
        return _run_source(args, config)
    return _run_emit(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
