"""Course catalogue: listing and API URLs, stream locations and ffmpeg arguments."""

from __future__ import annotations

import enum
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass

LISTING_PREFIX = "https://www.nhk.or.jp/gogaku/st/xml/"
LISTING_SUFFIX = "listdataflv.xml"
SERIES_API = "https://www.nhk.or.jp/radio-api/app/v1/web/ondemand/series"
STREAM_PREFIX = "https://vod-stream.nhk.jp/gogaku-stream/mp4/"
STREAM_SUFFIX = "/index.m3u8"

SEEKABLE_INPUT = ("-y", "-http_seekable", "0", "-i")
PLAIN_INPUT = ("-y", "-i")
RECONNECT = ("-reconnect", "1", "-reconnect_streamed", "1", "-reconnect_delay_max", "120")

_TAGS = (
    "-id3v2_version,3,-metadata,title=%3,-metadata,artist=NHK,"
    "-metadata,album=%4,-metadata,date=%5,-metadata,genre=Speech"
)
_MP3_TAGS = (
    "-id3v2_version,3,-write_xing,0,-metadata,title=%3,-metadata,artist=NHK,"
    "-metadata,album=%4,-metadata,date=%5,-metadata,genre=Speech"
)

FFMPEG_TEMPLATES: dict[str, str] = {
    "3g2": "%1,-vn,-bsf,aac_adtstoasc,-acodec,copy,%2",
    "3gp": "%1,-vn,-bsf,aac_adtstoasc,-acodec,copy,%2",
    "aac": "%1,-vn,-acodec,copy,%2",
    "avi": f"%1,{_TAGS},-vn,-acodec,copy,%2",
    "m4a": f"%1,{_TAGS},-vn,-bsf,aac_adtstoasc,-acodec,copy,%2",
    "mka": f"%1,{_TAGS},-vn,-acodec,copy,%2",
    "mkv": f"%1,{_TAGS},-vn,-acodec,copy,%2",
    "mov": f"%1,{_TAGS},-vn,-bsf,aac_adtstoasc,-acodec,copy,%2",
    "mp3": f"%1,{_MP3_TAGS},-vn,-acodec:a,libmp3lame,-ab,64k,-write_xing,0,%2",
    "ts": "%1,-vn,-acodec,copy,%2",
    "op0": f"%1,{_MP3_TAGS},-vn,-acodec:a,libmp3lame,-ab,64k,-ac,1,-write_xing,0,%2",
    "op1": f"%1,{_MP3_TAGS},-vn,-acodec:a,libmp3lame,-ab,48k,-ar,24000,-ac,1,-write_xing,0,%2",
    "op2": f"%1,{_MP3_TAGS},-vn,-acodec:a,libmp3lame,-ab,40k,-ac,1,-write_xing,0,%2",
    "op3": f"%1,{_MP3_TAGS},-vn,-acodec:a,libmp3lame,-ab,32k,-ac,1,-write_xing,0,%2",
    "op4": f"%1,{_MP3_TAGS},-vn,-acodec:a,libmp3lame,-ab,24k,-ar,22050,-ac,1,-write_xing,0,%2",
    "op5": f"%1,{_MP3_TAGS},-vn,-acodec:a,libmp3lame,-ab,16k,-ar,22050,-ac,1,-write_xing,0,%2",
}

XML_COURSES: dict[str, str] = {
    "GGQY3M1929_01": "english/basic0",
    "148W8XX226_01": "english/basic1",
    "83RW6PK3GG_01": "english/basic2",
    "B2J88K328M_01": "english/basic3",
    "8Z6XJ6J415_01": "english/timetrial",
    "PMMJ59J6N2_01": "english/kaiwa",
    "368315KKP8_01": "english/business1",
    "BR8Z3NX7XM_01": "english/enjoy",
    "77RQWQX1L6_01": "english/gendaieigo",
    "XQ487ZM61K_x1": "french/kouza",
    "XQ487ZM61K_y1": "french/kouza2",
    "N8PZRZ9WQY_x1": "german/kouza",
    "N8PZRZ9WQY_y1": "german/kouza2",
    "NRZWXVGQ19_x1": "spanish/kouza",
    "NRZWXVGQ19_y1": "spanish/kouza2",
    "LJWZP7XVMX_x1": "italian/kouza",
    "LJWZP7XVMX_y1": "italian/kouza2",
    "YRLK72JZ7Q_x1": "russian/kouza",
    "YRLK72JZ7Q_y1": "russian/kouza2",
    "983PKQPYN7_01": "chinese/kouza",
    "MYY93M57V6_01": "chinese/stepup",
    "LR47WW9K14_01": "hangeul/kouza",
    "NLJM5V3WXK_01": "hangeul/stepup",
    "XQ487ZM61K_01": "french/kouza3",
    "N8PZRZ9WQY_01": "german/kouza3",
    "NRZWXVGQ19_01": "spanish/kouza3",
    "LJWZP7XVMX_01": "italian/kouza3",
    "YRLK72JZ7Q_01": "russian/kouza3",
    "6805_01": "english/basic0",
    "6806_01": "english/basic1",
    "6807_01": "english/basic2",
    "6808_01": "english/basic3",
    "2331_01": "english/timetrial",
    "0916_01": "english/kaiwa",
    "6809_01": "english/business1",
    "3064_01": "english/enjoy",
    "0953_x1": "french/kouza",
    "0953_y1": "french/kouza2",
    "0943_x1": "german/kouza",
    "0943_y1": "german/kouza2",
    "0948_x1": "spanish/kouza",
    "0948_y1": "spanish/kouza2",
    "0946_x1": "italian/kouza",
    "0946_y1": "italian/kouza2",
    "0956_x1": "russian/kouza",
    "0956_y1": "russian/kouza2",
    "0953_01": "french/kouza3",
    "0943_01": "german/kouza3",
    "0948_01": "spanish/kouza3",
    "0946_01": "italian/kouza3",
    "0956_01": "russian/kouza3",
    "0915_01": "chinese/kouza",
    "6581_01": "chinese/stepup",
    "0951_01": "hangeul/kouza",
    "6810_01": "hangeul/stepup",
}

_LISTING_ATTRIBUTES = ("file", "kouza", "hdate", "nendo", "dir")
_PLACEHOLDER_RE = re.compile(r"%([1-5])")
_LEVELS = ("入門", "初級", "中級", "応用")
_ERROR_MARKERS = ("HTTP error", "Unable to open resource:")


@dataclass(frozen=True)
class ListingEntry:
    """One broadcast from a course listing document."""

    file: str = ""
    kouza: str = ""
    hdate: str = ""
    nendo: str = ""
    dir: str = ""


class FfmpegOutcome(enum.Enum):
    """How a finished ffmpeg run is judged."""

    SUCCESS = "success"
    OUTPUT_ERROR = "output_error"
    EXIT_FAILURE = "exit_failure"


def parse_listing(xml_text: str) -> list[ListingEntry]:
    """Entries of every element carrying listing attributes, up to the first error."""
    parser = ET.XMLPullParser(events=("start",))
    parser.feed(xml_text)
    try:
        parser.close()
    except ET.ParseError:
        pass
    entries: list[ListingEntry] = []
    try:
        for _, element in parser.read_events():
            if any(name in element.attrib for name in _LISTING_ATTRIBUTES):
                entries.append(
                    ListingEntry(**{name: element.get(name, "") for name in _LISTING_ATTRIBUTES})
                )
    except ET.ParseError:
        pass
    return entries


def listing_url(xml_koza: str) -> str:
    """URL of a course's listing document."""
    return f"{LISTING_PREFIX}{xml_koza}/{LISTING_SUFFIX}"


def series_api_url(program_id: str) -> str:
    """URL of the on-demand series API for a program id such as "XXXX_01"."""
    site_length = 10 if len(program_id) == 13 else len(program_id) - 3
    program_id = program_id.replace("_x1", "_01").replace("_y1", "_01")
    return f"{SERIES_API}?site_id={program_id[:site_length]}&corner_site_id={program_id[-2:]}"


def output_extension(extension: str) -> str:
    """File extension written for a chosen output format."""
    if extension.startswith("op") or extension.startswith("mp3"):
        return "mp3"
    return extension


def stream_urls(file: str, directory: str) -> tuple[str, str, str]:
    """The playlist URLs tried in turn for a stream file."""
    if directory:
        prefix = STREAM_PREFIX.replace("mp4", directory)
    else:
        prefix = STREAM_PREFIX.replace("/mp4", "")
    url = prefix + file + STREAM_SUFFIX
    return url, url, url


def ffmpeg_arguments(
    extension: str,
    source: str,
    destination: str,
    title: str,
    album: str,
    year: str,
    seekable: bool,
    reconnect: bool,
) -> list[str]:
    """Command-line arguments for ffmpeg to record a stream in a given format."""
    try:
        template = FFMPEG_TEMPLATES[extension]
    except KeyError:
        raise ValueError(f"unsupported output format: {extension!r}") from None
    values = (source, destination, title, album, str(year))
    body = [
        _PLACEHOLDER_RE.sub(lambda m: values[int(m.group(1)) - 1], token)
        for token in template.split(",")
    ]
    head = list(RECONNECT) if reconnect else []
    head += SEEKABLE_INPUT if seekable else PLAIN_INPUT
    return head + body


def classify_ffmpeg_output(stderr: str, exit_code: int) -> tuple[FfmpegOutcome, str]:
    """Judge a finished ffmpeg run by its error output and exit code."""
    if any(marker in stderr for marker in _ERROR_MARKERS) or "error" in stderr:
        message = "ffmpeg error"
        if "HTTP error" in stderr:
            message = "HTTP error"
        if "Unable to open resource:" in stderr:
            message = "Unable to open resource"
        return FfmpegOutcome.OUTPUT_ERROR, message
    if exit_code:
        return FfmpegOutcome.EXIT_FAILURE, ""
    return FfmpegOutcome.SUCCESS, ""


def separate_kouza(kouza: str, title: str) -> str:
    """Append the level named in an episode title to the course name."""
    for level in _LEVELS:
        if level in title:
            kouza = f"{kouza} {level}編"
    return kouza


def album_tag(kouza: str) -> str:
    """Short album tag: level first, "まいにち" dropped."""
    album = kouza.replace("まいにち", "")
    for marker, label in (("レベル１", "L1"), ("レベル２", "L2")):
        if marker in kouza:
            album = f"{label}_" + album.replace(marker, "")
    for level in _LEVELS:
        if level in kouza:
            album = f"{level}_" + album.replace(f"{level}編", "")
    return album


def selected_sources(json_path: str, xml_koza: str, this_week: bool) -> tuple[bool, bool]:
    """Whether to record from the listing document and from the series API."""
    has_json = json_path != "0000"
    has_xml = xml_koza != ""
    use_xml = has_xml and not this_week
    use_json = has_json and (this_week or not has_xml)
    return use_xml, use_json