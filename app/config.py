from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from domain.gateway import DEFAULT_TIMEOUT


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    env: Env = Env.local
    catalog_path: Path = Path("assets/recipes.json")
    # Empty disables the fallback.
    webhook_url: str = ""
    webhook_timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    language: str = "th"
    domain_hint: str = "recipe"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
