"""Localization sync orchestration.

The flow is linear:
config -> authenticate -> list locales -> reconcile -> per-locale
(download -> ensure dir -> save).

Failures before the loop are fatal and end the run. Failures inside the loop
are recorded against the locale and the loop moves on. Progress is reported
through a `SyncObserver`; nothing here prints or exits the process.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Sequence

from adapters.strings_store import ensure_locale_dir, save_strings_file
from adapters.traduora_client import TraduoraClient
from core.config import AppSettings, load_config
from core.domain.errors import TraduoraSyncError
from core.domain.models import LocalizationConfig
from core.interfaces.events import NullObserver, SyncObserver, SyncStage

ClientFactory = Callable[[LocalizationConfig, AppSettings], TraduoraClient]


@dataclass
class LocaleFailure:
    locale: str
    error: Exception

    @property
    def message(self) -> str:
        return str(self.error) or self.error.__class__.__name__


@dataclass
class SyncResult:
    """Output of a sync run."""

    target_locales: list[str] = field(default_factory=list)
    available_locales: list[str] = field(default_factory=list)
    selected_locales: list[str] = field(default_factory=list)
    succeeded: list[str] = field(default_factory=list)
    failures: list[LocaleFailure] = field(default_factory=list)
    error: TraduoraSyncError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def nothing_to_do(self) -> bool:
        return self.ok and not self.selected_locales

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def reconcile_locales(targets: Sequence[str], available: Iterable[str]) -> list[str]:
    """Targets that the server has, in target order. Exact string match."""

    available_set = set(available)
    return [locale for locale in targets if locale in available_set]


def _default_client_factory(config: LocalizationConfig, settings: AppSettings) -> TraduoraClient:
    return TraduoraClient(config, settings=settings)


def _sync_one_locale(
    *,
    client: TraduoraClient,
    config: LocalizationConfig,
    locale: str,
    observer: SyncObserver,
) -> None:
    content = client.download_strings(locale)
    observer.on_event(SyncStage.DOWNLOAD, locale, f"Downloaded {len(content)} characters")

    directory, created = ensure_locale_dir(config, locale)
    if created:
        observer.on_event(SyncStage.DIRECTORY, locale, f"Created directory: {directory}")

    path = save_strings_file(config, locale, content)
    observer.on_event(SyncStage.SAVE, locale, f"Saved: {path}")


def sync_locales(
    *,
    client: TraduoraClient,
    config: LocalizationConfig,
    observer: SyncObserver | None = None,
    result: SyncResult | None = None,
) -> SyncResult:
    """Drive an already constructed client through one run.

    Fatal errors (authentication, locale discovery) propagate to the caller.
    """

    observer = observer or NullObserver()
    result = result or SyncResult()
    result.target_locales = list(config.target_locales)

    observer.on_event(SyncStage.AUTHENTICATE, None, "Authenticating...")
    client.authenticate()
    observer.on_event(SyncStage.AUTHENTICATE, None, "Authentication successful")

    observer.on_event(SyncStage.PROJECT, None, f"Using project ID: {config.project_id}")

    observer.on_event(SyncStage.LIST_LOCALES, None, "Getting available locales...")
    result.available_locales = client.get_available_locales()
    observer.on_event(
        SyncStage.LIST_LOCALES,
        None,
        f"Available locales in project: {', '.join(result.available_locales)}",
    )

    result.selected_locales = reconcile_locales(config.target_locales, result.available_locales)
    if not result.selected_locales:
        observer.on_event(
            SyncStage.NO_MATCH,
            None,
            f"None of the target locales ({', '.join(config.target_locales)}) "
            "are available in the project",
        )
        return result

    observer.on_event(
        SyncStage.RECONCILE,
        None,
        f"Will download locales: {', '.join(result.selected_locales)}",
    )

    for locale in result.selected_locales:
        observer.on_event(SyncStage.LOCALE_START, locale, f"Processing locale: {locale}")
        try:
            _sync_one_locale(client=client, config=config, locale=locale, observer=observer)
        except Exception as exc:
            failure = LocaleFailure(locale=locale, error=exc)
            result.failures.append(failure)
            observer.on_event(
                SyncStage.LOCALE_FAILED,
                locale,
                f"Failed to update {locale} localization: {failure.message}",
            )
            continue
        result.succeeded.append(locale)
        observer.on_event(SyncStage.LOCALE_DONE, locale, f"Successfully updated {locale} localization")

    return result


def run_sync(
    env_path: Path,
    *,
    observer: SyncObserver | None = None,
    settings: AppSettings | None = None,
    client_factory: ClientFactory | None = None,
) -> SyncResult:
    """Top-level entry: load config, run the sync, return the outcome.

    Fatal errors are returned in `SyncResult.error` instead of raised, so the
    caller decides what the process exit status is.
    """

    observer = observer or NullObserver()
    settings = settings or AppSettings()
    client_factory = client_factory or _default_client_factory
    result = SyncResult()

    observer.on_event(SyncStage.START, None, "Updating localization from Traduora...")
    try:
        config = load_config(env_path)
        observer.on_event(SyncStage.CONFIG, None, "Configuration loaded")
        with client_factory(config, settings) as client:
            sync_locales(client=client, config=config, observer=observer, result=result)
    except TraduoraSyncError as exc:
        result.error = exc
        observer.on_event(SyncStage.ERROR, None, f"Error: {exc}")
        return result

    if not result.nothing_to_do:
        observer.on_event(SyncStage.DONE, None, "Localization update completed!")
    return result
