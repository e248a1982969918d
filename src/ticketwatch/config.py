"""Watcher configuration loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings

from src.ticketwatch.models import ScheduleSelectors


class WatcherConfig(BaseSettings):
    """Watcher configuration loaded from environment variables.

    Settings are loaded from environment variables with sensible defaults.
    For local development, create a .env file in the project root.
    """

    # Festival site (cookie-authenticated, no API)
    festival_url: str = Field(
        default="https://festival.sundance.org/",
        description="Landing page loaded first to establish the session",
    )
    schedule_url: str = Field(
        default="https://festival.sundance.org/my-festival/my-schedule",
        description="Personal schedule page to watch",
    )
    schedule_path: str = Field(
        default="/my-festival/my-schedule",
        description="URL path that identifies the authenticated schedule view",
    )

    # Paths
    cookies_path: str = Field(
        default="cookies.json",
        description="Exported browser cookies for the festival account",
    )

    # Browser
    headless: bool = Field(default=True, description="Run Chromium headless")
    navigation_timeout_ms: int = Field(
        default=60000,
        description="Timeout for page.goto in milliseconds",
    )
    selector_timeout_ms: int = Field(
        default=30000,
        description="Timeout waiting for schedule items to render",
    )
    settle_delay_ms: int = Field(
        default=3000,
        description="Fixed delay after navigation for client-side rendering",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for unattended runs)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Optional CSS selectors (override when the schedule layout changes)
    film_desc_selector: str = Field(
        default=".sd_schedule_film_desc",
        description="CSS selector for one schedule item description",
    )
    title_selector: str = Field(
        default="h3",
        description="CSS selector for the title heading inside an item",
    )
    date_selector: str = Field(
        default=".sd_start_end_date",
        description="CSS selector for the screening date/time inside an item",
    )
    cell_selector: str = Field(
        default='.rdt_TableCell, [class*="TableCell"]',
        description="CSS selector for cells inside a schedule row",
    )
    control_selector: str = Field(
        default="button, a.button, .btn",
        description="CSS selector for purchase/waitlist controls",
    )
    favorite_marker: str = Field(
        default="fav",
        description="Class-name fragment marking favorite toggles",
    )
    max_row_ascent: int = Field(
        default=25,
        description="Maximum ancestor levels walked to find an item's row",
    )

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def schedule_selectors(self) -> ScheduleSelectors:
        """Build the selector set handed to the extraction pipeline."""
        return ScheduleSelectors(
            film_desc=self.film_desc_selector,
            title=self.title_selector,
            date=self.date_selector,
            cell=self.cell_selector,
            control=self.control_selector,
            favorite_marker=self.favorite_marker,
            max_row_ascent=self.max_row_ascent,
        )


# Singleton pattern
_config: WatcherConfig | None = None


def get_config() -> WatcherConfig:
    """Get the watcher configuration singleton.

    Returns:
        WatcherConfig: Watcher configuration instance
    """
    global _config
    if _config is None:
        _config = WatcherConfig()
    return _config
