"""Writes exported strings under `<localization_path>/<locale>.lproj/`.

Files are replaced atomically: content goes to a temp file in the target
directory, then `os.replace` moves it over the final path.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from core.domain.models import LocalizationConfig, locale_dir, strings_file

DEFAULT_FILE_MODE = 0o644


def ensure_locale_dir(config: LocalizationConfig, locale: str) -> tuple[Path, bool]:
    """Create the locale folder (and parents) if needed.

    Returns the folder and whether it was created by this call.
    """

    directory = locale_dir(config, locale)
    if directory.is_dir():
        return directory, False
    directory.mkdir(parents=True, exist_ok=True)
    return directory, True


def _target_mode(path: Path) -> int:
    try:
        return path.stat().st_mode & 0o777
    except FileNotFoundError:
        return DEFAULT_FILE_MODE


def atomic_write_text(path: Path, content: str) -> Path:
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return path


def save_strings_file(config: LocalizationConfig, locale: str, content: str) -> Path:
    """Write `Localizable.strings` for `locale`, overwriting any previous file."""

    return atomic_write_text(strings_file(config, locale), content)
