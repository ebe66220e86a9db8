from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parent.parent


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FORKIFY_")

    env: Env = Env.local
    log_level: str = "INFO"
    assets_dir: Path = BASE_DIR / "assets"
    html_dir: Path = BASE_DIR / "assets" / "html"
    icons_url: str = "/assets/img/icons.svg"
    api_url: str = "https://forkify-api.herokuapp.com/api/v2/recipes/"
    api_key: str | None = None
    timeout_sec: float = 10.0
    results_per_page: int = 10
    bookmarks_dir: Path = BASE_DIR / "data"
