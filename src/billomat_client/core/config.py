"""Client configuration.

Why here:
- One settings contract (`BILLOMAT_*` env vars, pydantic-settings) shared by the
  library and the CLI.
- The per-user `.env` written by `billomat setup` lets the CLI run from any
  directory without exporting variables.
"""

from __future__ import annotations

from pathlib import Path

import typer
from dotenv import set_key
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from billomat_client.core.domain.models import BillomatApiClientConfig

APP_NAME = "billomat-client"


def get_user_env_file() -> Path:
    return Path(typer.get_app_dir(APP_NAME)) / ".env"


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Set `values` in the user `.env`, keeping unrelated keys; `None` values are skipped."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.touch(exist_ok=True)
    for key, value in values.items():
        if value is not None:
            set_key(str(env_path), key, value)
    return env_path


class BillomatSettings(BaseSettings):
    """Settings for talking to one Billomat account.

    Either `billomat_id` (the account subdomain) or an explicit `base_url`
    must be set before a client config can be derived.
    """

    model_config = SettingsConfigDict(
        env_prefix="BILLOMAT_",
        extra="ignore",
        case_sensitive=False,
        # Project `.env` first, then the user-level one written by `billomat setup`.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    billomat_id: str | None = Field(
        default=None,
        description="Account subdomain, as in https://<billomat_id>.billomat.net.",
    )
    base_url: str | None = Field(
        default=None,
        description="Explicit API base URL; overrides `billomat_id`.",
    )
    api_key: str | None = Field(
        default=None,
        description="Value sent as `x-billomatapikey`.",
    )
    app_id: str | None = Field(
        default=None,
        description="Registered app id (`x-appid`), raises the rate limit when set.",
    )
    app_secret: str | None = Field(
        default=None,
        description="Registered app secret (`x-appsecret`).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )

    @property
    def effective_base_url(self) -> str | None:
        if self.base_url:
            return self.base_url.rstrip("/")
        if self.billomat_id:
            return f"https://{self.billomat_id}.billomat.net"
        return None

    def to_client_config(self) -> BillomatApiClientConfig:
        base_url = self.effective_base_url
        if not base_url:
            raise ValueError("Either BILLOMAT_BASE_URL or BILLOMAT_BILLOMAT_ID must be set")
        if not self.api_key:
            raise ValueError("BILLOMAT_API_KEY must be set")
        return BillomatApiClientConfig(
            base_url=base_url,
            api_key=self.api_key,
            app_id=self.app_id,
            app_secret=self.app_secret,
            timeout_seconds=self.http_timeout_seconds,
        )
