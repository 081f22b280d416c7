"""Build title tags and file names from broadcast metadata."""

from __future__ import annotations

import re
from collections.abc import Sequence

NENDO1 = "2024"
NENDO2 = "2025"
NENDO_START_DATE1 = (2024, 4, 1)
NENDO_END_DATE1 = (2025, 3, 30)

BROADCAST_SUFFIX = "放送分"
NENDO_SUFFIX = "年度"

_ILLEGAL = frozenset('/\\:*?"<>|#{}%&~')
_INT_RE = re.compile(r"[+-]?[0-9]+")
_HDATE_RE = re.compile(r"(\d+)(?:\D+)(\d+)", re.ASCII)
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def _to_int(text: str) -> int:
    """Parse a decimal integer the lenient way: 0 when it does not parse."""
    stripped = text.strip()
    if not _INT_RE.fullmatch(stripped):
        return 0
    value = int(stripped)
    return value if _INT32_MIN <= value <= _INT32_MAX else 0


def _is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _is_valid_date(year: int, month: int, day: int) -> bool:
    if year == 0 or not 1 <= month <= 12:
        return False
    lengths = (31, 29 if _is_leap(year) else 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
    return 1 <= day <= lengths[month - 1]


def _school_year(year: int, month: int, day: int) -> str:
    if not _is_valid_date(year, month, day):
        return NENDO1
    on_air = (year, month, day)
    nendo = NENDO1 if on_air <= NENDO_END_DATE1 else ""
    if on_air >= NENDO_START_DATE1:
        nendo = NENDO2
    return nendo


def _two_digits(value: int) -> str:
    return str(value + 100)[-2:]


def is_illegal(char: str) -> bool:
    """True for a character that may not appear in a file name."""
    return len(char) == 1 and char in _ILLEGAL


def format_name(
    format: str,
    kouza: str,
    hdate: str,
    file: str,
    nendo: str,
    dupnmb: str,
    check_illegal: bool,
) -> str:
    """Expand the %-directives of a title or file-name format."""
    month = _to_int(hdate[:2])
    year = _to_int(nendo[-4:])
    day = _to_int(hdate[3:5])
    nendo = _school_year(year, month, day)

    if file.endswith(".flv"):
        file = file[:-4]

    lowered = format.lower()
    dupnmb_date = "" if "%i" in lowered else dupnmb
    if "%_%i" in lowered:
        dupnmb = dupnmb.replace("-", "_")
        format = format.replace("%_", "")

    expansions = {
        "k": lambda: kouza,
        "h": lambda: hdate[:6] + BROADCAST_SUFFIX + dupnmb_date,
        "f": lambda: file,
        "Y": lambda: str(year),
        "y": lambda: str(year)[-2:],
        "N": lambda: nendo + NENDO_SUFFIX,
        "n": lambda: nendo[-2:] + NENDO_SUFFIX,
        "M": lambda: _two_digits(month),
        "m": lambda: str(month),
        "D": lambda: _two_digits(day) + dupnmb_date,
        "d": lambda: str(day) + dupnmb_date,
        "i": lambda: dupnmb,
        "x": lambda: "",
        "s": lambda: "",
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


def normalize_hdates(hdates: Sequence[str]) -> list[str]:
    """Rewrite broadcast dates as zero-padded "MM月DD日放送分"."""
    result = []
    for hdate in hdates:
        match = _HDATE_RE.search(hdate)
        month = _to_int(match.group(1)) if match else 0
        day = _to_int(match.group(2)) if match else 0
        result.append(f"{_two_digits(month)}月{_two_digits(day)}日{BROADCAST_SUFFIX}")
    return result


def this_week_files(files: Sequence[str], codes: Sequence[str]) -> list[str]:
    """Shift each file's code forward by the list length and drop "-re01"."""
    if len(codes) < len(files):
        raise ValueError(f"expected at least {len(files)} codes, got {len(codes)}")
    count = len(files)
    result = []
    for name, code in zip(files, codes):
        shifted = str(_to_int(code) + count)[-3:]
        result.append(name.replace(code[-3:], shifted).replace("-re01", ""))
    return result


def duplicate_numbers(hdates: Sequence[str]) -> list[str]:
    """Number runs of equal consecutive dates as "-1", "-2", ...; others get ""."""
    numbers = [""] * len(hdates)
    run = 1
    for index in range(len(hdates) - 1):
        if hdates[index] == hdates[index + 1]:
            if run == 1:
                numbers[index] = "-1"
            run += 1
            numbers[index + 1] = f"-{run}"
        else:
            run = 1
    return numbers