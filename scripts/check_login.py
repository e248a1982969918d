"""Verify that cookies.json gives an authenticated view of your schedule.

Run with: python scripts/check_login.py
Debug:    python scripts/check_login.py --headed --screenshot login.png

Exit codes:
  0 = authenticated
  1 = error (message on stderr)
  2 = login required, or status unclear
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
from src.ticketwatch.models import SessionState  # noqa: E402
from src.ticketwatch.session_state import classify_evidence  # noqa: E402

# How long to keep a headed browser open for a manual look
_HEADED_LINGER_MS = 10000

_MESSAGES: dict[SessionState, str] = {
    SessionState.AUTHENTICATED: "SUCCESS: you are logged in and can access your schedule.",
    SessionState.LOGIN_REQUIRED: (
        "FAILED: login required. Your cookies may be expired.\n"
        "Log in to the festival site in your regular browser, then export "
        "fresh cookies into cookies.json."
    ),
    SessionState.UNCLEAR: (
        "UNCLEAR: could not determine login status.\n"
        "Re-run with --headed and check the browser window."
    ),
}


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Check festival login via cookies.json")
    parser.add_argument("--headed", action="store_true", help="Visible browser")
    parser.add_argument(
        "--screenshot", type=str, default=None, help="Save a screenshot to this path"
    )
    return parser.parse_args()


async def main(args: argparse.Namespace) -> int:
    config = get_config()
    headless = False if args.headed else None

    async with ScheduleBrowser(
        config, headless=headless, block_resources=args.screenshot is None
    ) as browser:
        page = browser.schedule.page
        # Redirects to the login page happen client-side after load
        await page.wait_for_timeout(config.settle_delay_ms)

        if args.screenshot:
            await browser.schedule.screenshot(args.screenshot)

        evidence = await browser.sessions.gather_evidence(page)
        state = classify_evidence(evidence, schedule_path=config.schedule_path)

        print(f"Page title: {await page.title()}")
        print(f"Final URL:  {evidence.url}")
        print(f'Has "schedule" text: {evidence.has_schedule_text}')
        print()
        print(_MESSAGES[state])

        if args.headed:
            await page.wait_for_timeout(_HEADED_LINGER_MS)

    return 0 if state is SessionState.AUTHENTICATED else 2


if __name__ == "__main__":
    args = _parse_args()
    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)
    try:
        sys.exit(asyncio.run(main(args)))
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
