from src.ticketwatch.config import WatcherConfig
from src.ticketwatch.models import ScheduleSelectors


def test_defaults():
    config = WatcherConfig(_env_file=None)

    assert config.schedule_url == "https://festival.sundance.org/my-festival/my-schedule"
    assert config.schedule_path == "/my-festival/my-schedule"
    assert config.cookies_path == "cookies.json"
    assert config.headless is True
    assert config.navigation_timeout_ms == 60000
    assert config.schedule_selectors() == ScheduleSelectors()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("COOKIES_PATH", "/tmp/festival-cookies.json")
    monkeypatch.setenv("HEADLESS", "false")
    monkeypatch.setenv("FILM_DESC_SELECTOR", ".schedule-entry")
    monkeypatch.setenv("MAX_ROW_ASCENT", "8")

    config = WatcherConfig(_env_file=None)
    selectors = config.schedule_selectors()

    assert config.cookies_path == "/tmp/festival-cookies.json"
    assert config.headless is False
    assert selectors.film_desc == ".schedule-entry"
    assert selectors.max_row_ascent == 8
    assert selectors.title == "h3"
