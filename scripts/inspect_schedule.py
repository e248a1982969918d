"""Diagnose how schedule items map to their control rows.

Temporary investigation script for when the schedule layout changes and
check_once.py starts reporting UNKNOWN or skipping films. For each film it
prints the DOM hierarchy above the item, which row strategy matched
(including the generic fallback containers), every control in the row and
the resulting status.

Usage:
    python scripts/inspect_schedule.py
    python scripts/inspect_schedule.py --headed --limit 3
"""

import argparse
import asyncio
import os
import sys

from dotenv import load_dotenv

load_dotenv()

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.ticketwatch.browser import ScheduleBrowser  # noqa: E402
from src.ticketwatch.config import get_config  # noqa: E402
from src.ticketwatch.logging import setup_logging  # noqa: E402
from src.ticketwatch.pipeline import RowDiagnostics  # noqa: E402


def _log(msg: str) -> None:
    print(msg)


def _print_diagnostics(info: RowDiagnostics) -> None:
    _log(f"\n--- Film {info.index}: {info.title} ---")
    if info.screening_time:
        _log(f"Time: {info.screening_time}")
    _log("DOM hierarchy (item upwards):")
    for level, entry in enumerate(info.hierarchy):
        _log(f"  {level}. {entry}")

    if info.strategy is None:
        _log("Row: NOT FOUND (item would be skipped)")
        return

    _log(f"Row strategy: {info.strategy}")
    _log(f"Controls in row: {len(info.controls)}")
    for control in info.controls:
        flags = []
        if control.disabled:
            flags.append("[DISABLED]")
        if control.is_favorite_control:
            flags.append("[FAVORITE]")
        if not control.is_eligible:
            flags.append("[IGNORED]")
        _log(f'  - "{control.text}" {" ".join(flags)}'.rstrip())
    _log(f'Status: {info.status.value}  button: "{info.button_label}"')


async def main(args: argparse.Namespace) -> None:
    config = get_config()
    headless = False if args.headed else None

    async with ScheduleBrowser(config, headless=headless) as browser:
        rendered = await browser.schedule.wait_for_items()
        if not rendered:
            _log("Timeout waiting for schedule content, inspecting anyway...")

        diagnostics = await browser.schedule.inspect()
        _log(f"Found {len(diagnostics)} titled film entries")
        for info in diagnostics[: args.limit]:
            _print_diagnostics(info)

        if args.headed:
            _log("\nBrowser stays open for 15 seconds for manual inspection.")
            await browser.schedule.page.wait_for_timeout(15000)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Inspect schedule row structure")
    parser.add_argument("--headed", action="store_true", help="Visible browser")
    parser.add_argument(
        "--limit", type=int, default=None, help="Only print the first N films"
    )
    args = parser.parse_args()

    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)
    asyncio.run(main(args))
