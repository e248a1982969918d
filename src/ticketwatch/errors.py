"""Error hierarchy for the browser-facing layer.

The extraction core never raises these: missing structure is skipped and
ambiguous rows resolve to UNKNOWN. These classes cover the Playwright
collaborator layer, where tenacity retry decorators classify transient
failures (should retry) vs permanent failures (should not retry).

Example usage with tenacity:
    @retry(retry=retry_if_exception_type(TransientError), stop=stop_after_attempt(3))
    async def open_schedule(page: Page):
        ...
"""


class ScrapingError(Exception):
    """Base exception for all watcher errors."""

    pass


class TransientError(ScrapingError):
    """Temporary failure that may succeed on retry.

    Examples: navigation timeouts, schedule rows not rendered in time.
    """

    pass


class PermanentError(ScrapingError):
    """Failure that won't succeed on retry."""

    pass


class AuthenticationError(PermanentError):
    """The loaded cookies do not produce an authenticated schedule view.

    Requires exporting fresh cookies, cannot be fixed by retry.
    """

    pass


class CookieFileError(PermanentError):
    """Cookie file is missing, unreadable or not a list of cookie objects."""

    pass
