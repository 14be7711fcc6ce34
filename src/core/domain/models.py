"""Records shared by the loader, the API client and the pipeline.

`LocalizationConfig` is frozen and compared by value. The wire models
validate Traduora payloads at the edge and ignore fields we do not read.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

DEFAULT_FORMAT = "strings"
LOCALE_DIR_SUFFIX = ".lproj"
STRINGS_FILENAME = "Localizable.strings"


class LocalizationConfig(BaseModel):
    """Run configuration loaded once from the env file."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        ...,
        min_length=1,
        description="Root URL of the Traduora instance (no trailing slash assumed).",
    )
    email: str = Field(..., min_length=1, description="Account used for the password grant.")
    password: str = Field(..., min_length=1, repr=False)
    project_id: str = Field(..., min_length=1, description="Opaque Traduora project id.")
    localization_path: str = Field(
        ...,
        min_length=1,
        description="Filesystem root under which `<locale>.lproj` folders are created.",
    )
    target_locales: tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Wanted locale codes; order drives the download order.",
    )
    format: str = Field(
        default=DEFAULT_FORMAT,
        min_length=1,
        description="Export format passed verbatim to the exports endpoint.",
    )


class AuthRequest(BaseModel):
    grant_type: str = "password"
    username: str
    password: str


class AuthResponse(BaseModel):
    access_token: str = Field(..., min_length=1)


class LocaleInfo(BaseModel):
    code: str = Field(..., min_length=1)
    language: str | None = None


class ProjectLocale(BaseModel):
    locale: LocaleInfo


class TranslationsResponse(BaseModel):
    """Body of `GET /projects/{id}/translations`."""

    data: list[ProjectLocale]

    def codes(self) -> list[str]:
        return [item.locale.code for item in self.data]


def locale_dir(config: LocalizationConfig, locale: str) -> Path:
    return Path(config.localization_path) / f"{locale}{LOCALE_DIR_SUFFIX}"


def strings_file(config: LocalizationConfig, locale: str) -> Path:
    return locale_dir(config, locale) / STRINGS_FILENAME
