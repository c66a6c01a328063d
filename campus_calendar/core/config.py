"""
Configuration module - centralized settings for the calendar application.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Calendar settings. Environment variables win over .env entries,
    which win over the defaults below.

    Example overrides:
        export HOLIDAY_COUNTRY_CODE=US
        export DAY_START_HOUR=8
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    # APP_NAME: Display name shown in API docs and page titles
    APP_NAME: str = "Campus Calendar"

    DEBUG: bool = False

    # LOG_LEVEL: Level for the "campus_calendar" logger hierarchy
    LOG_LEVEL: str = "INFO"

    # ---------------------------------------------------------------------------
    # TIME GRID (day and week views)
    # ---------------------------------------------------------------------------
    # Visible hour window. 07:00-20:00 gives a 780 minute grid.
    DAY_START_HOUR: int = 7
    DAY_END_HOUR: int = 20

    # Smallest height (percent of the window) an event block is drawn with,
    # so short events stay clickable.
    MIN_EVENT_HEIGHT_PERCENT: float = 5.0

    # First column of week and month grids: 0 = Monday ... 6 = Sunday
    WEEK_STARTS_ON: int = 0

    # ---------------------------------------------------------------------------
    # SUMMARY LIMITS (month and year views)
    # ---------------------------------------------------------------------------
    MONTH_CELL_EVENT_LIMIT: int = 3
    YEAR_NOTABLE_EVENT_LIMIT: int = 2

    # ---------------------------------------------------------------------------
    # EVENT SOURCE
    # ---------------------------------------------------------------------------
    # EVENT_SOURCE_ENABLED: When False the calendar runs on local events only
    EVENT_SOURCE_ENABLED: bool = True

    # Nager.Date compatible public holiday API
    # Reference: https://date.nager.at/Api
    HOLIDAY_API_BASE_URL: str = "https://date.nager.at/api/v3"
    HOLIDAY_COUNTRY_CODE: str = "IN"

    # Request timeout in seconds for a single year fetch
    EVENT_SOURCE_TIMEOUT: float = 10.0

    # Add the fixed academic calendar (orientation, exams, breaks) to every year
    INCLUDE_ACADEMIC_EVENTS: bool = True


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from campus_calendar.core.config import settings
settings = Settings()
