# extract_cli.py
"""
Listing extraction CLI

Usage
-----
    python extract_cli.py --file data/sample/listing.html --pretty
    python extract_cli.py --url https://example.com/homedetails/123 --dataset data/sample/hud_rental_data.json
    PROPX_DEBUG=1 python extract_cli.py --file page.html --require-fields

Prints the extracted PropertyRecord as JSON on stdout. Exit code 1 when the
page cannot be read or extraction fails.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import requests

from propextract.core.errors import EXTRACTION_ERRORS
from propextract.core.logs import configure_logging
from propextract.inputs.settings import ExtractionSettings, SettingsLoader
from propextract.orchestrator.extraction import ExtractionOrchestrator
from propextract.schemas.models import PropertyRecord

logger = logging.getLogger("propextract.cli")

USER_AGENT = "propextract/0.1 (+listing-extract)"


def _read_html(file: str | None, url: str | None, timeout: float) -> str:
    if file:
        return Path(file).read_text(encoding="utf-8", errors="replace")
    resp = requests.get(url or "", headers={"User-Agent": USER_AGENT}, timeout=timeout)
    resp.raise_for_status()
    return resp.text


def _settings_from_args(args: argparse.Namespace) -> ExtractionSettings:
    loader = SettingsLoader()
    settings = loader.load(args.config)
    return loader.with_overrides(
        settings,
        benchmark_source=args.dataset,
        timeout_s=args.timeout,
        require_fields=True if args.require_fields else None,
        debug=True if args.debug else None,
    )


async def _run(html: str, settings: ExtractionSettings) -> PropertyRecord:
    orchestrator = ExtractionOrchestrator.from_html(html, settings=settings)
    if settings.timeout_s is not None:
        return await orchestrator.extract_with_timeout(settings.timeout_s)
    return await orchestrator.extract_property_data()


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Extract property facts from a listing page")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--file", type=str, default=None, help="Saved listing HTML file")
    src.add_argument("--url", type=str, default=None, help="Listing URL (fetched with requests)")
    p.add_argument("--dataset", type=str, default=None, help="Rent benchmark dataset (path or URL)")
    p.add_argument("--config", type=str, default=None, help="Settings JSON (default: ./config.json if present)")
    p.add_argument("--timeout", type=float, default=None, help="Overall extraction timeout in seconds")
    p.add_argument("--require-fields", action="store_true", help="Fail when price/beds/baths/type/zip are missing")
    p.add_argument("--debug", action="store_true", help="Verbose logging + rotating log file")
    p.add_argument("--pretty", action="store_true", help="Indent JSON output")

    args = p.parse_args(argv)

    try:
        settings = _settings_from_args(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    configure_logging(debug=settings.debug)

    try:
        html = _read_html(args.file, args.url, settings.timeout_s or 15.0)
    except (OSError, requests.RequestException) as e:
        logger.error("Could not read listing page: %s", e)
        print(f"error: could not read listing page: {e}", file=sys.stderr)
        return 1

    try:
        record = asyncio.run(_run(html, settings))
    except EXTRACTION_ERRORS as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    payload = record.model_dump(mode="json", exclude_none=True)
    print(json.dumps(payload, indent=2 if args.pretty else None, sort_keys=args.pretty))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
