"""Collect stream names for the English news course from its web pages."""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Callable, Iterable
from datetime import date, timedelta

SEARCH_20100323 = (
    "http://www.google.co.jp/search?q=video_player_wide.swf+site:cgi2.nhk.or.jp"
    "&hl=ja&lr=lang_ja&num=100&filter=0&start=0"
)
SEARCH_20090330 = (
    "http://www.google.co.jp/search?q=video_player.swf+site:cgi2.nhk.or.jp"
    "&hl=ja&lr=lang_ja&num=100&filter=0&start=0"
)
SEARCH_AT_ONCE = 100
VIDEO_PLAYER_WIDE = "video_player_wide.swf"
SEARCH_HOST_PREFIX = "http://www.google.co.jp/"
PAGE_URL_PREFIX = "http://cgi2.nhk.or.jp/e-news/news/index.cgi?ymd="
OLDEST_DATE = date(2009, 3, 30)

_SEARCH_RE = re.compile(
    r'http://cgi2.nhk.or.jp/e-news/swfp/video_player(?:_wide)?.swf.type=real&amp;m_name=([^"]*)',
    re.IGNORECASE,
)
_REREAD_RE = re.compile(r'mp3player.swf.type=real&m_name=([^&"]*)', re.IGNORECASE)
_VIDEO_RE = re.compile(r'video_player_wide.swf.type=real&m_name=([^"]*)', re.IGNORECASE)
_START_RE = re.compile(r"^(.*&start=)(\d+)$", re.IGNORECASE | re.DOTALL)


def page_dates(today: date, reread: bool, past: bool) -> list[date]:
    """Weekdays from today back to the oldest date to fetch, newest first."""
    oldest = OLDEST_DATE if reread and past else today - timedelta(days=7)
    days = (today - oldest).days
    candidates = (today - timedelta(days=n) for n in range(days + 1))
    return [day for day in candidates if day.isoweekday() <= 5]


def enews_urls(today: date, reread: bool, past: bool) -> list[str]:
    """The URLs fetched to start a collection run."""
    urls = [PAGE_URL_PREFIX + day.strftime("%Y%m%d") for day in page_dates(today, reread, past)]
    if not reread and past:
        urls += [SEARCH_20100323, SEARCH_20090330]
    return urls


def parse_search_page(page: str, known: Iterable[str]) -> list[str]:
    """Stream names found on a search result page that are not yet known."""
    known_set = set(known)
    return [m.group(1) for m in _SEARCH_RE.finditer(page) if m.group(1) not in known_set]


def next_search_url(url: str, found_count: int) -> str | None:
    """The URL of the next result page, if the current one was full."""
    if found_count < SEARCH_AT_ONCE:
        return None
    match = _START_RE.match(url)
    if match is None:
        return None
    return match.group(1) + str(int(match.group(2)) + SEARCH_AT_ONCE)


def parse_program_page(page: str, reread: bool) -> str | None:
    """The stream name on a daily program page, or None."""
    match = (_REREAD_RE if reread else _VIDEO_RE).search(page)
    return match.group(1) if match else None


class ENewsCollector:
    """Fetches the daily and search pages and gathers stream names.

    ``fetch`` takes a URL and returns the page text; it raises OSError
    when the page cannot be fetched, and such pages are skipped.
    """

    def __init__(self, reread: bool, past: bool, fetch: Callable[[str], str]) -> None:
        self.reread = reread
        self.past = past
        self.fetch = fetch
        self.flv_list: list[str] = []
        self.flv_list_before_20100323: list[str] = []

    def collect(self, today: date | None = None) -> tuple[list[str], list[str]]:
        """Run the collection and return (current names, names before 2010-03-23)."""
        self.flv_list = []
        self.flv_list_before_20100323 = []
        pending = deque(enews_urls(today or date.today(), self.reread, self.past))
        while pending:
            url = pending.popleft()
            try:
                page = self.fetch(url)
            except OSError:
                continue
            if not self.reread and url.startswith(SEARCH_HOST_PREFIX):
                found = parse_search_page(page, self.flv_list)
                if VIDEO_PLAYER_WIDE in url:
                    self.flv_list.extend(found)
                else:
                    self.flv_list_before_20100323.extend(found)
                following = next_search_url(url, len(found))
                if following is not None:
                    pending.append(following)
            else:
                name = parse_program_page(page, self.reread)
                if name is not None and name not in self.flv_list:
                    self.flv_list.append(name)
        return self.flv_list, self.flv_list_before_20100323