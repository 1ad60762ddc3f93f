from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class WhoopSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WHOOP_", env_file=".env", extra="ignore")

    email: Optional[str] = None
    password: Optional[str] = None
    access_token: Optional[str] = None
    token_store: Path = Path("~/.whoop_mcp/token.json")

    api_base_url: str = "https://api.prod.whoop.com"
    auth_path: str = "/auth-service/v3/whoop/sign-in"
    home_path: str = "/home-service/v1/home"
    deep_dive_path: str = "/home-service/v1/deep-dive/{kind}"
    request_timeout_s: float = 30.0

    # Pauses between sequential per-day fetches
    history_fetch_delay_ms: int = 100
    trends_fetch_delay_ms: int = 100
    monthly_fetch_delay_ms: int = 150

    mcp_transport: Literal["stdio", "http"] = "stdio"
    mcp_host: str = "0.0.0.0"
    mcp_port: int = 8000
    mcp_path: str = "/mcp"

    log_level: str = "INFO"
