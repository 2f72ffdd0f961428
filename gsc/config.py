"""Library settings: the YAML `settings` section + GOOGLE_SEARCH_CONSOLE_* environment overrides."""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

WEBMASTERS_SCOPE = "https://www.googleapis.com/auth/webmasters"

ENV_PREFIX = "GOOGLE_SEARCH_CONSOLE_"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, extra="ignore")

    application_name: str = Field(
        "gsc-cli", validation_alias=AliasChoices("application_name", ENV_PREFIX + "APP_NAME")
    )
    scopes: list[str] = Field(default_factory=lambda: [WEBMASTERS_SCOPE])
    timeout: int = 30
    retry_attempts: int = 3

    # search analytics
    default_row_limit: int = 1000
    default_dimensions: list[str] = Field(default_factory=list)
    default_days: int = 30

    # url inspection
    default_language_code: str = "en-US"

    # response cache
    cache_enabled: bool = False
    cache_ttl: int = 3600
    cache_prefix: str = "gsc_"

    debug: bool = False

    @classmethod
    def settings_customise_sources(cls, settings_cls, init_settings, env_settings,
                                   dotenv_settings, file_secret_settings):
        # environment beats values read from config.yaml
        return env_settings, init_settings

    @classmethod
    def from_dict(cls, cfg: dict | None) -> Settings:
        """Build settings from the nested layout used in config.yaml."""
        cfg = dict(cfg or {})
        values = {k: v for k, v in cfg.items() if k in cls.model_fields}
        for section, prefix in (("search_analytics", ""), ("url_inspection", ""), ("cache", "cache_")):
            for key, value in (cfg.get(section) or {}).items():
                values[prefix + key] = value
        return cls(**{k: v for k, v in values.items() if v is not None})
