from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

IdFallback = Literal["random", "hash"]


class FeedOptions(BaseModel):
    """Immutable parser/normalizer configuration passed explicitly to the core."""

    model_config = ConfigDict(frozen=True)

    parse_tag_values: bool = True
    trim_values: bool = True
    id_fallback: IdFallback = "random"
    user_agent: str = "feedcore/1.0"


class Settings(BaseSettings):
    # Environment mode: dev or prod
    ENV: Literal["dev", "prod"] = "dev"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None
    SLACK_WEBHOOK_URL: str | None = None

    # Feeds
    DEFAULT_FEED_URL: str = "https://expo.dev/changelog/rss.xml"
    USER_AGENT: str = "feedcore/1.0"
    ID_FALLBACK: IdFallback = "random"  # "hash" makes ids deterministic across fetches

    # Display
    DISPLAY_TIMEZONE: str = "UTC"

    # Docs Configuration
    DOCS_ENABLED: bool | None = None  # Override docs setting (None = auto based on ENV)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.ENV == "prod"

    @property
    def is_development(self) -> bool:
        return self.ENV == "dev"

    @property
    def effective_log_level(self) -> str:
        """Return appropriate log level based on environment."""
        if self.is_production:
            # In production, minimum INFO level (ignore DEBUG)
            return self.LOG_LEVEL if self.LOG_LEVEL.upper() != "DEBUG" else "INFO"
        return self.LOG_LEVEL

    @property
    def docs_enabled(self) -> bool:
        if self.DOCS_ENABLED is not None:
            return self.DOCS_ENABLED
        return self.is_development

    def feed_options(self) -> FeedOptions:
        """Build the options value handed to fetch/parse/normalize calls."""
        return FeedOptions(id_fallback=self.ID_FALLBACK, user_agent=self.USER_AGENT)


settings = Settings()
