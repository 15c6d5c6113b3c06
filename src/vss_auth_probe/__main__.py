"""Entry point for the VSS auth probe.

Usage::

    uv run python -m vss_auth_probe --config config.yaml
    uv run vss-auth-probe --base-url http://localhost:5050 --extended
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from vss_auth_probe.config import Settings, apply_overrides, load_settings
from vss_auth_probe.logging import setup_logging
from vss_auth_probe.report import ProbeReport, print_banner, print_summary
from vss_auth_probe.runner import ProbeRunner
from vss_auth_probe.scenarios import canonical_scenarios, extended_scenarios

CONFIG_ERROR_EXIT_CODE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vss-auth-probe",
        description="Check that a VSS server accepts trusted JWTs and rejects untrusted ones.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="Path to config.yaml (default: $VSS_PROBE_CONFIG_PATH, then ./config.yaml).",
    )
    parser.add_argument(
        "--base-url",
        metavar="URL",
        help="VSS base URL (default: $VSS_URL, then vss.base_url from the config).",
    )
    parser.add_argument(
        "--key-path",
        metavar="PATH",
        help="PEM file holding the RSA private key the server trusts.",
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help="Diagnostic log level written to stderr (e.g. DEBUG).",
    )
    parser.add_argument(
        "--extended",
        action="store_true",
        help="Also run expired, premature, missing and malformed token scenarios.",
    )
    return parser


async def _run(settings: Settings, extended: bool) -> ProbeReport:
    key_path = Path(settings.signing.trusted_private_key_path)
    scenarios = canonical_scenarios(key_path)
    if extended:
        scenarios += extended_scenarios(key_path, settings.signing.validity_seconds)

    print_banner(settings.vss.base_url)
    runner = ProbeRunner(settings)
    try:
        report = await runner.run_all(scenarios)
    finally:
        await runner.close()
    print_summary(report)
    return report


def main(argv: list[str] | None = None) -> int:
    """Run the probe and return the process exit code."""
    args = _build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
        settings = apply_overrides(
            settings,
            base_url=args.base_url,
            key_path=args.key_path,
            log_level=args.log_level,
        )
        setup_logging(settings.logging.level, settings.logging.directory)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return CONFIG_ERROR_EXIT_CODE

    report = asyncio.run(_run(settings, args.extended))
    return report.exit_code


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
