"""Fetch, decrypt and join the AES-128 encrypted HLS segments of a broadcast."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from urllib.parse import unquote_to_bytes

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .storage import ensure_output_dir

MASTER_PREFIX = "https://nhk-vh.akamaihd.net/i/gogaku-stream/mp4/"
MASTER_SUFFIX = "/master.m3u8"
ORIGINAL_FORMAT = "ts"

_INDEX_RE = re.compile(r"http[^\n]*")
_KEY_RE = re.compile(r'#EXT-X-KEY:METHOD=AES-128,URI="([^"]*)"')
_SEGMENT_RE = re.compile(r"(?=(http:[^\n]*))")
_SEGMENT_NAME_RE = re.compile(r"http.*/mp4/(.*).mp4/([^?]*)?")


class HlsError(Exception):
    """A playlist, key or segment could not be fetched, decrypted or stored."""


def _percent_decode(text: str) -> str:
    return unquote_to_bytes(text).decode("latin-1")


def master_playlist_url(file: str) -> str:
    """URL of the master playlist for a stream file."""
    return MASTER_PREFIX + file + MASTER_SUFFIX


def index_playlist_url(master: str) -> str | None:
    """The first URL in a master playlist, or None."""
    match = _INDEX_RE.search(master)
    return match.group(0) if match else None


def key_uri(index: str) -> str | None:
    """The percent-decoded URI of the AES-128 key named in an index playlist."""
    match = _KEY_RE.search(index)
    return _percent_decode(match.group(1)) if match else None


def segment_urls(index: str) -> list[str]:
    """Every "http:" URL in an index playlist, each running to the end of its line."""
    return [_percent_decode(match.group(1)) for match in _SEGMENT_RE.finditer(index)]


def segment_name(url: str) -> str:
    """Local file name of a segment: stream name and segment file joined by "-"."""
    match = _SEGMENT_NAME_RE.search(url)
    if match is None:
        raise HlsError(f"セグメントファイルのURLが認識できません：　{url}")
    return f"{match.group(1)}-{match.group(2) or ''}"


def segment_iv(index: int) -> bytes:
    """The initialisation vector of the numbered segment: its number as 16 bytes."""
    try:
        return index.to_bytes(16, "big")
    except OverflowError:
        raise ValueError(f"segment number out of range: {index}") from None


def decrypt_segment(data: bytes, key: bytes, index: int) -> bytes:
    """Decrypt one AES-128-CBC segment and strip its PKCS#7 padding."""
    try:
        decryptor = Cipher(algorithms.AES(key), modes.CBC(segment_iv(index))).decryptor()
        padded = decryptor.update(data) + decryptor.finalize()
        unpadder = padding.PKCS7(128).unpadder()
        return unpadder.update(padded) + unpadder.finalize()
    except ValueError as error:
        raise HlsError(f"復号化に失敗しました：　segment {index}") from error


def merge_segments(paths: Iterable[str | Path], destination: str | Path) -> Path:
    """Concatenate segment files into ``destination``; it is removed on failure."""
    target = Path(destination)
    done = False
    try:
        try:
            out = target.open("wb")
        except OSError as error:
            raise HlsError(
                f"{ORIGINAL_FORMAT}ファイルの作成に失敗しました：　{target.name}"
            ) from error
        with out:
            for path in paths:
                segment = Path(path)
                try:
                    data = segment.read_bytes()
                except OSError as error:
                    raise HlsError(
                        f"セグメントファイルのオープンに失敗しました：　{segment.name}"
                    ) from error
                try:
                    out.write(data)
                except OSError as error:
                    raise HlsError(
                        f"{ORIGINAL_FORMAT}ファイルの書き込みに失敗しました：　{target.name}"
                    ) from error
        done = True
    finally:
        if not done:
            target.unlink(missing_ok=True)
    return target


class HlsFetcher:
    """Records a stream file into a single transport-stream file.

    ``fetch`` takes a URL and returns its body as bytes; it may raise
    OSError.  An empty body counts as a failed fetch.  Setting
    ``canceled`` stops a download between segments.
    """

    def __init__(self, fetch: Callable[[str], bytes]) -> None:
        self.fetch = fetch
        self.canceled = False

    def _get(self, url: str, failure: str) -> bytes:
        try:
            data = self.fetch(url)
        except OSError as error:
            raise HlsError(failure) from error
        if not data:
            raise HlsError(failure)
        return data

    def _playlists(self, file: str) -> tuple[bytes, Sequence[str]]:
        master = self._get(
            master_playlist_url(file), f"master.m3u8の取得に失敗しました：　{file}"
        ).decode("latin-1")

        index_failure = f"index_0_a.m3u8の取得に失敗しました：　{file}"
        index_url = index_playlist_url(master)
        if index_url is None:
            raise HlsError(index_failure)
        index = _percent_decode(self._get(index_url, index_failure).decode("latin-1"))

        key_failure = f"crypt.keyの取得に失敗しました：　{file}"
        uri = key_uri(index)
        if uri is None:
            raise HlsError(key_failure)
        key = self._get(uri, key_failure)

        urls = segment_urls(index)
        if not urls:
            raise HlsError(f"音声ファイルセグメントのURLの取得に失敗しました：　{file}")
        return key, urls

    def download(self, file: str, output_dir: str | Path, basename: str) -> Path | None:
        """Download, decrypt and join every segment into ``basename``.ts.

        Returns the path written, or None when canceled.  Segment files are
        always removed afterwards.
        """
        directory = ensure_output_dir(output_dir)
        key, urls = self._playlists(file)

        written: list[Path] = []
        try:
            for number, url in enumerate(urls, start=1):
                if self.canceled:
                    return None
                name = segment_name(url)
                data = self._get(url, f"セグメントのダウンロードに失敗しました：　{name}")
                plain = decrypt_segment(data, key, number)
                path = directory / name
                written.append(path)
                try:
                    path.write_bytes(plain)
                except OSError as error:
                    raise HlsError(
                        f"セグメントファイルの書き込みに失敗しました：　{name}"
                    ) from error
            if self.canceled:
                return None
            return merge_segments(written, directory / f"{basename}.{ORIGINAL_FORMAT}")
        finally:
            for path in written:
                path.unlink(missing_ok=True)