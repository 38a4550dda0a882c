# ABOUTME: Centralized configuration using Pydantic Settings.
# ABOUTME: Loads site, affiliate, asset origin, database and logging settings from the environment.

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Sites / affiliate
    default_site: str = "swankyboyz"
    amazon_associate_tag: str = "your-affiliate-tag-20"
    affiliate_tags: dict[str, str] = {}  # site -> tag, overrides amazon_associate_tag
    site_hosts: dict[str, str] = {}  # host -> site

    # Static asset origin
    assets_origin_url: str = "http://localhost:8788"
    assets_timeout: float = 10.0

    # Database
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "trifecta"
    db_user: str = "trifecta"
    db_password: SecretStr | None = None
    db_pool_size: int = 5
    db_pool_max_overflow: int = 10
    db_create_tables: bool = True  # create missing tables on app startup

    @property
    def database_url(self) -> str:
        """Build async PostgreSQL connection URL."""
        password = self.db_password.get_secret_value() if self.db_password else ""
        return f"postgresql+asyncpg://{self.db_user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    def site_for_host(self, host: str | None) -> str:
        """Resolve the site served on a host, ignoring any port suffix."""
        if not host:
            return self.default_site
        hostname = host.split(":", 1)[0].lower()
        return self.site_hosts.get(hostname, self.default_site)

    def affiliate_tag_for(self, site: str) -> str:
        """Affiliate tag for a site, falling back to the network-wide tag."""
        return self.affiliate_tags.get(site, self.amazon_associate_tag)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded from environment variables and .env file.
    Dict-valued settings (AFFILIATE_TAGS, SITE_HOSTS) are read as JSON.
    """
    return Settings()
