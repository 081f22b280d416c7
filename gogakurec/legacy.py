"""Naming and listing helpers for the older per-file course listings."""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date

from .naming import _to_int, _two_digits, is_illegal

LEGACY_LISTING_PREFIX = "http://cgi2.nhk.or.jp/gogaku/"
LEGACY_LISTING_SUFFIX = "listdataflv.xml"

_HDATE_RE = re.compile(r"(\d+)(?:\D+)(\d+)", re.ASCII)


def format_legacy_name(
    format: str,
    kouza: str,
    hdate: str,
    file: str,
    check_illegal: bool,
    today: date | None = None,
) -> str:
    """Expand the %-directives of a format, taking the year from the file name.

    The year is 2000 plus the file name's first two digits; a broadcast in
    January to April belongs to the following calendar year when ``today``
    is already past the file's year.
    """
    today = today or date.today()
    month = _to_int(hdate[:2])
    year = 2000 + _to_int(file[:2])
    if month <= 4 and today.year > year:
        year += 1
    day = _to_int(hdate[3:5])

    if file.endswith(".flv"):
        file = file[:-4]

    expansions = {
        "k": lambda: kouza,
        "h": lambda: hdate,
        "f": lambda: file,
        "Y": lambda: str(year),
        "y": lambda: str(year)[-2:],
        "M": lambda: _two_digits(month),
        "m": lambda: str(month),
        "D": lambda: _two_digits(day),
        "d": lambda: str(day),
    }

    parts: list[str] = []
    percent = False
    for char in format:
        if percent:
            percent = False
            if check_illegal and is_illegal(char):
                continue
            expand = expansions.get(char)
            parts.append(expand() if expand else char)
        elif char == "%":
            percent = True
        elif check_illegal and is_illegal(char):
            continue
        else:
            parts.append(char)
    return "".join(parts)


def pad_broadcast_date(hdate: str) -> str:
    """Zero-pad single-digit month and day numbers, keeping the rest as is."""
    match = _HDATE_RE.search(hdate)
    if match is None:
        return hdate
    if len(match.group(2)) == 1:
        start, end = match.span(2)
        hdate = hdate[:start] + "0" + match.group(2) + hdate[end:]
    if len(match.group(1)) == 1:
        start, end = match.span(1)
        hdate = hdate[:start] + "0" + match.group(1) + hdate[end:]
    return hdate


def pad_broadcast_dates(hdates: Sequence[str]) -> list[str]:
    """Apply :func:`pad_broadcast_date` to every date."""
    return [pad_broadcast_date(hdate) for hdate in hdates]


def legacy_listing_url(path: str) -> str:
    """URL of the listing document for a course path such as "english/kaiwa"."""
    return f"{LEGACY_LISTING_PREFIX}{path}/{LEGACY_LISTING_SUFFIX}"