"""Checks on the output folder and on the ffmpeg executable."""

from __future__ import annotations

import os
from pathlib import Path

FFMPEG_NAME = "ffmpeg"
WINDOWS_SUFFIX = ".exe"


class StorageError(OSError):
    """An output folder or an executable is not usable."""


def ensure_output_dir(path: str | Path) -> Path:
    """Make sure ``path`` is a writable folder, creating it when missing.

    The path should not end in a separator, so that a regular file of the
    same name is reported rather than silently passed over.
    """
    directory = Path(path)
    if directory.exists():
        if not directory.is_dir():
            raise StorageError(f"「{path}」が存在しますが、フォルダではありません。")
        if not os.access(directory, os.W_OK):
            raise StorageError(f"「{path}」フォルダが書き込み可能ではありません。")
        return directory
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        raise StorageError(f"「{path}」フォルダの作成に失敗しました。") from error
    return directory


def check_executable(path: str | Path) -> Path:
    """Return ``path`` if it names an existing executable file."""
    candidate = Path(path)
    if not candidate.exists():
        raise StorageError(f"{path}が見つかりません。")
    if not os.access(candidate, os.X_OK):
        raise StorageError(f"{path}は実行可能ではありません。")
    return candidate


def ffmpeg_path(bundle_dir: str | Path, windows: bool) -> Path:
    """Locate the ffmpeg executable shipped next to the application."""
    name = FFMPEG_NAME + (WINDOWS_SUFFIX if windows else "")
    return check_executable(Path(bundle_dir) / name)