"""Check ticket status for every film on your festival schedule.

Loads cookies.json, opens the "My Schedule" page in Chromium, confirms the
session is authenticated, and prints the films grouped by ticket status.

Run with: python scripts/check_once.py
Debug:    python scripts/check_once.py --headed --screenshot schedule.png
JSON:     python scripts/check_once.py --json
Polling:  python scripts/check_once.py --watch 300

Each --watch iteration is a fresh, independent check; nothing is compared
between iterations.

Exit codes:
  0 = success (report on stdout)
  1 = error (message on stderr)
  2 = not logged in, or the session state could not be determined
"""

import argparse
import asyncio
import os
import sys
from datetime import datetime

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.ticketwatch.browser import ScheduleBrowser  # noqa: E402
from src.ticketwatch.config import get_config  # noqa: E402
from src.ticketwatch.errors import (  # noqa: E402
    AuthenticationError,
    PermanentError,
    ScrapingError,
)
from src.ticketwatch.logging import setup_logging  # noqa: E402
from src.ticketwatch.report import format_report, report_to_json  # noqa: E402

EXIT_OK = 0
EXIT_NOT_AUTHENTICATED = 2


def _log(msg: str) -> None:
    """Write diagnostic messages to stderr so stdout stays clean for JSON."""
    print(msg, file=sys.stderr)


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Check ticket availability for the films on your festival schedule.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Launch browser in headed mode (visible window).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON instead of grouped text.",
    )
    parser.add_argument(
        "--screenshot",
        type=str,
        default=None,
        help="Save a full-page screenshot of the schedule to this path.",
    )
    parser.add_argument(
        "--watch",
        type=int,
        default=None,
        metavar="SECONDS",
        help="Repeat the check every SECONDS until interrupted.",
    )
    return parser.parse_args()


async def check(args: argparse.Namespace) -> int:
    config = get_config()
    headless = False if args.headed else None

    async with ScheduleBrowser(
        config, headless=headless, block_resources=args.screenshot is None
    ) as browser:
        schedule = browser.schedule
        await schedule.wait_for_items()

        if args.screenshot:
            await schedule.screenshot(args.screenshot, full_page=True)

        try:
            await browser.sessions.require_authenticated(schedule.page)
        except AuthenticationError as e:
            _log(str(e))
            _log("Run scripts/check_login.py --headed to verify manually.")
            return EXIT_NOT_AUTHENTICATED

        report = await schedule.extract()

    if args.json:
        print(report_to_json(report))
    else:
        print(format_report(report))
    return EXIT_OK


async def main(args: argparse.Namespace) -> int:
    if args.watch is None:
        return await check(args)

    _log(f"check_once: watching every {args.watch}s (Ctrl+C to stop)")
    while True:
        _log(f"\n=== {datetime.now().isoformat(timespec='seconds')} ===")
        try:
            exit_code = await check(args)
        except PermanentError:
            raise
        except ScrapingError as e:
            _log(f"  check failed, retrying next round: {e}")
        else:
            if exit_code != EXIT_OK:
                return exit_code
        await asyncio.sleep(args.watch)


if __name__ == "__main__":
    args = _parse_args()
    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)
    try:
        sys.exit(asyncio.run(main(args)))
    except KeyboardInterrupt:
        sys.exit(0)
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
