"""Title-tag and file-name format settings kept per course in an INI file."""

from __future__ import annotations

import configparser
import enum
from collections.abc import Sequence
from pathlib import Path

SETTING_GROUP = "CustomizeDialog"
DEFAULT_TITLE = "%k_%Y_%M_%D"
DEFAULT_FILE_NAME = "%k_%Y_%M_%D"

COURSES: tuple[str, ...] = (
    "小学生の基礎英語",
    "中学生の基礎英語【レベル1】",
    "中学生の基礎英語【レベル2】",
    "中高生の基礎英語_in_English",
    "英会話タイムトライアル",
    "ラジオ英会話",
    "ラジオビジネス英語",
    "エンジョイ・シンプル・イングリッシュ",
    "ボキャブライダー",
    "まいにち中国語",
    "ステップアップ中国語",
    "まいにちフランス語",
    "まいにちイタリア語",
    "まいにちハングル講座",
    "ステップアップハングル講座",
    "まいにちドイツ語",
    "まいにちスペイン語",
    "まいにちロシア語",
)

_KEY_STEMS: tuple[str, ...] = (
    "basic0", "basic1", "basic2", "basic3",
    "timetrial", "kaiwa",
    "business1", "enjoy",
    "vrradio",
    "chinese", "stepup-chinese",
    "french", "italian",
    "hangeul", "stepup-hangeul",
    "german", "spanish",
    "russian",
)

TITLE_KEYS: tuple[str, ...] = tuple(f"{stem}_title" for stem in _KEY_STEMS)
FILE_NAME_KEYS: tuple[str, ...] = tuple(f"{stem}_file_name" for stem in _KEY_STEMS)

_LEVEL_MARKERS = ("【初級編】", "【入門編】", "【中級編】", "【応用編】")


class DialogMode(enum.Enum):
    """Which of the two per-course formats is being edited."""

    TITLE = "title"
    FILE_NAME = "file_name"

    @property
    def keys(self) -> tuple[str, ...]:
        return TITLE_KEYS if self is DialogMode.TITLE else FILE_NAME_KEYS

    @property
    def default(self) -> str:
        return DEFAULT_TITLE if self is DialogMode.TITLE else DEFAULT_FILE_NAME


def normalize_course(course: str) -> str:
    """Strip the level markers that some course names carry."""
    for marker in _LEVEL_MARKERS:
        course = course.replace(marker, "")
    return course


class FormatSettings:
    """Reads and writes the format strings stored in an INI file."""

    def __init__(self, ini_path: str | Path) -> None:
        self.ini_path = Path(ini_path)

    def _load(self) -> configparser.RawConfigParser:
        parser = configparser.RawConfigParser(interpolation=None)
        parser.optionxform = str  # type: ignore[assignment]
        if self.ini_path.exists():
            parser.read(self.ini_path, encoding="utf-8")
        return parser

    @staticmethod
    def _value(parser: configparser.RawConfigParser, key: str, default: str) -> str:
        return parser.get(SETTING_GROUP, key, fallback=default)

    def formats(self, course: str) -> tuple[str, str]:
        """Return (title format, file-name format) for a course."""
        try:
            index = COURSES.index(normalize_course(course))
        except ValueError:
            return DEFAULT_TITLE, DEFAULT_FILE_NAME
        parser = self._load()
        return (
            self._value(parser, TITLE_KEYS[index], DEFAULT_TITLE),
            self._value(parser, FILE_NAME_KEYS[index], DEFAULT_FILE_NAME),
        )

    def read(self, mode: DialogMode) -> list[str]:
        """Return the formats of every course for the given mode."""
        parser = self._load()
        return [self._value(parser, key, mode.default) for key in mode.keys]

    def write(self, mode: DialogMode, values: Sequence[str]) -> None:
        """Store one format per course; empty values fall back to the default."""
        if len(values) != len(COURSES):
            raise ValueError(f"expected {len(COURSES)} formats, got {len(values)}")
        parser = self._load()
        if not parser.has_section(SETTING_GROUP):
            parser.add_section(SETTING_GROUP)
        for key, text in zip(mode.keys, values):
            parser.set(SETTING_GROUP, key, text or mode.default)
        self.ini_path.parent.mkdir(parents=True, exist_ok=True)
        with self.ini_path.open("w", encoding="utf-8") as handle:
            parser.write(handle)