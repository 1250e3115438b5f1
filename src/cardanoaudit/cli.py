"""CLI for the Cardano address audit.

Usage:
    BLOCKFROST_PROJECT_ID=your_key cardano-audit <cardano_address>
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dependency_injector import providers
from pydantic import ValidationError

from cardanoaudit.audit.types import AuditReport
from cardanoaudit.config import NETWORK_URLS, Settings
from cardanoaudit.container import Container
from cardanoaudit.exceptions import ConfigurationError, RetrievalError
from cardanoaudit.report.json_writer import default_output_path

logger = logging.getLogger("cardanoaudit.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cardano-audit",
        description="Audit received/spent ADA, attributed fees and outgoing assets for an address",
    )
    parser.add_argument("address", help="Cardano address to audit")
    parser.add_argument(
        "--network",
        choices=sorted(NETWORK_URLS),
        help="Blockfrost network (default: BLOCKFROST_NETWORK or mainnet)",
    )
    parser.add_argument("--output", type=Path, help="Write the detailed per-TX JSON to this path")
    parser.add_argument(
        "--details",
        action="store_true",
        help="Write the detailed per-TX JSON to audit_<address>.json",
    )
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL or INFO)")
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def load_settings(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.network:
        overrides["blockfrost_network"] = args.network
    if args.log_level:
        overrides["log_level"] = args.log_level
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    settings.validate_for_run()
    return settings


async def run_audit(container: Container, address: str) -> AuditReport:
    http = container.http_client()
    try:
        return await container.audit_service().audit_address(address)
    finally:
        await http.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level)

    container = Container()
    container.settings.override(providers.Object(settings))

    try:
        report = asyncio.run(run_audit(container, args.address))
    except RetrievalError as e:
        print(f"Failed to fetch address tx list: {e}", file=sys.stderr)
        return 1

    writer = container.json_writer()
    print("\n===== SUMMARY =====")
    print(writer.render_summary(report))

    if args.output or args.details:
        path = writer.write_detailed(report, args.output or default_output_path(args.address))
        logger.info("Wrote detailed report to %s", path)

    print("\nDone.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
