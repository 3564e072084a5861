from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wikifix.exclusion.rules import default_exclusion_rules


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    small_context_radius: int = Field(default=40, ge=0)
    standard_context_radius: int = Field(default=100, ge=0)
    large_context_radius: int = Field(default=500, ge=0)
    max_context_length: int = Field(default=500, gt=0)

    dropped_tags: list[str] = Field(default_factory=lambda: ["head", "style", "pre"])

    exclude_edit_links: bool = True
    exclusion_rules: dict[str, dict[str, list[str]]] = Field(
        default_factory=default_exclusion_rules
    )
