"""Loads the sync `.env` file and the `TRADUORA_SYNC_*` runtime settings."""

from __future__ import annotations

from pathlib import Path

import httpx
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.errors import ConfigurationError
from core.domain.models import DEFAULT_FORMAT, LocalizationConfig

REQUIRED_KEYS: tuple[str, ...] = (
    "TRADUORA_BASE_URL",
    "TRADUORA_EMAIL",
    "TRADUORA_PASSWORD",
    "PROJECT_ID",
    "LOCALIZATION_PATH",
    "TARGET_LOCALES",
)
OPTIONAL_KEYS: tuple[str, ...] = ("FORMAT",)

EXAMPLE_ENV = """\
TRADUORA_BASE_URL=https://your-traduora-instance.com
TRADUORA_EMAIL=your-email@example.com
TRADUORA_PASSWORD=your-password
PROJECT_ID=your-project-id
LOCALIZATION_PATH=./path/to/localization
TARGET_LOCALES=en,es,fr
FORMAT=strings
"""


class AppSettings(BaseSettings):
    """Runtime tunables read from `TRADUORA_SYNC_*` environment variables.

    These never replace keys of the `.env` file; they only tune the
    transport and where the CLI looks for that file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TRADUORA_SYNC_",
        extra="ignore",
        case_sensitive=False,
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="traduora-sync/1.0",
        min_length=1,
        description="User-Agent sent to the Traduora API.",
    )
    env_file: Path = Field(
        default=Path(".env"),
        description="Default location of the sync configuration file.",
    )


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_env_text(text: str) -> dict[str, str]:
    """Parse `KEY=value` lines.

    Rules:
    - blank lines, `#` comments and lines without `=` are skipped
    - split on the first `=`; key and value are trimmed
    - one pair of matching surrounding quotes is removed from the value
    - later keys overwrite earlier ones
    """

    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            data[key] = _unquote(value.strip())
    return data


def parse_target_locales(value: str) -> tuple[str, ...]:
    return tuple(token.strip() for token in value.split(",") if token.strip())


def _check_base_url(value: str) -> None:
    try:
        url = httpx.URL(value)
        url.host.encode("idna")
    except (httpx.InvalidURL, UnicodeError) as exc:
        raise ConfigurationError(f"TRADUORA_BASE_URL is not a valid URL: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(
            f"TRADUORA_BASE_URL must be an http(s) URL with a host, got {value!r}"
        )


def load_config(path: Path) -> LocalizationConfig:
    """Read the env file at `path` into a `LocalizationConfig`.

    Raises `ConfigurationError` when the file does not exist or when any
    required key is missing or empty. Never returns a partial record.
    """

    if not path.is_file():
        raise ConfigurationError(f"{path} not found", source_missing=True)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}") from exc
    values = parse_env_text(text)
    target_locales = parse_target_locales(values.get("TARGET_LOCALES", ""))

    missing = [key for key in REQUIRED_KEYS if not values.get(key)]
    if "TARGET_LOCALES" not in missing and not target_locales:
        missing.append("TARGET_LOCALES")
    if missing:
        raise ConfigurationError(
            f"Missing required variables in {path}: {', '.join(missing)}",
            missing_keys=missing,
        )
    _check_base_url(values["TRADUORA_BASE_URL"])

    return LocalizationConfig(
        base_url=values["TRADUORA_BASE_URL"],
        email=values["TRADUORA_EMAIL"],
        password=values["TRADUORA_PASSWORD"],
        project_id=values["PROJECT_ID"],
        localization_path=values["LOCALIZATION_PATH"],
        target_locales=target_locales,
        format=values.get("FORMAT") or DEFAULT_FORMAT,
    )


def write_example_env(path: Path, *, overwrite: bool = False) -> Path:
    """Write `EXAMPLE_ENV` to `path`. Refuses to clobber unless `overwrite`."""

    if path.exists() and not overwrite:
        raise FileExistsError(str(path))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(EXAMPLE_ENV, encoding="utf-8")
    return path
