"""Shared fixtures: env files, a fake Traduora server and an event recorder."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import httpx
import pytest

from adapters.traduora_client import TraduoraClient
from core.config import AppSettings
from core.domain.models import LocalizationConfig
from core.interfaces.events import SyncStage

BASE_URL = "https://traduora.test"
PROJECT_ID = "proj-123"
TOKEN = "secret-token"


@dataclass
class FakeTraduora:
    """In-memory stand-in for the three Traduora endpoints."""

    locales: list[str] = field(default_factory=lambda: ["en", "es", "fr", "de"])
    exports: dict[str, bytes] = field(default_factory=dict)
    export_status: dict[str, int] = field(default_factory=dict)
    token_status: int = 200
    token_body: object = field(default_factory=lambda: {"access_token": TOKEN})
    translations_status: int = 200
    translations_body: object | None = None
    requests: list[httpx.Request] = field(default_factory=list)

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/api/v1/auth/token" and request.method == "POST":
            return httpx.Response(self.token_status, json=self.token_body)

        if request.headers.get("Authorization") != f"Bearer {TOKEN}":
            return httpx.Response(401, json={"error": "unauthorized"})

        if path == f"/api/v1/projects/{PROJECT_ID}/translations":
            body = self.translations_body
            if body is None:
                body = {
                    "data": [
                        {"locale": {"code": code, "language": code.upper()}}
                        for code in self.locales
                    ]
                }
            return httpx.Response(self.translations_status, json=body)

        if path == f"/api/v1/projects/{PROJECT_ID}/exports":
            locale = request.url.params.get("locale", "")
            status = self.export_status.get(locale, 200)
            if status != 200:
                return httpx.Response(status, text="boom")
            content = self.exports.get(locale, f'"hello" = "hello-{locale}";\n'.encode("utf-8"))
            return httpx.Response(200, content=content)

        return httpx.Response(404)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class RecordingObserver:
    def __init__(self) -> None:
        self.events: list[tuple[SyncStage, str | None, str]] = []

    def on_event(self, stage: SyncStage, locale: str | None, message: str) -> None:
        self.events.append((stage, locale, message))

    def stages(self) -> list[SyncStage]:
        return [stage for stage, _, _ in self.events]


@pytest.fixture
def fake_server() -> FakeTraduora:
    return FakeTraduora()


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def localization_root(tmp_path: Path) -> Path:
    return tmp_path / "Resources"


@pytest.fixture
def write_env(tmp_path: Path, localization_root: Path) -> Callable[..., Path]:
    """Write a `.env` file; keyword overrides replace keys, `None` drops one."""

    def _write(**overrides: str | None) -> Path:
        values: dict[str, str | None] = {
            "TRADUORA_BASE_URL": BASE_URL,
            "TRADUORA_EMAIL": "dev@example.com",
            "TRADUORA_PASSWORD": "hunter2",
            "PROJECT_ID": PROJECT_ID,
            "LOCALIZATION_PATH": str(localization_root),
            "TARGET_LOCALES": "en,es",
        }
        values.update(overrides)
        lines = [f"{key}={value}" for key, value in values.items() if value is not None]
        env_path = tmp_path / ".env"
        env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return env_path

    return _write


@pytest.fixture
def config(localization_root: Path) -> LocalizationConfig:
    return LocalizationConfig(
        base_url=BASE_URL,
        email="dev@example.com",
        password="hunter2",
        project_id=PROJECT_ID,
        localization_path=str(localization_root),
        target_locales=("en", "es"),
    )


@pytest.fixture
def client_factory(
    fake_server: FakeTraduora,
) -> Callable[[LocalizationConfig, AppSettings], TraduoraClient]:
    def _factory(config: LocalizationConfig, settings: AppSettings) -> TraduoraClient:
        return TraduoraClient(config, settings=settings, transport=fake_server.transport())

    return _factory


def json_body(request: httpx.Request) -> dict[str, object]:
    return json.loads(request.content.decode("utf-8"))
