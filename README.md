# gogakurec

A library of building blocks for recording NHK radio language courses.
It works out what a recorder needs to know: where the listings are, what
the output files are called, which ffmpeg arguments to use, and how to
decrypt and join HLS segments. It never starts ffmpeg or any other program,
and it does no network access of its own: where a page or file has to be
fetched, you pass in a function that does it.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `gogakurec.settings`

Per-course title and file-name formats, kept in an INI file under the
`CustomizeDialog` section. The default for both is `%k_%Y_%M_%D`.

- `FormatSettings(ini_path).formats(course)` returns `(title_format,
  file_name_format)`. Level markers such as `【入門編】` are removed from the
  course name first (`normalize_course`). Unknown courses get the defaults.
- `FormatSettings.read(mode)` returns the formats of every course for a
  `DialogMode` (`DialogMode.TITLE` or `DialogMode.FILE_NAME`).
- `FormatSettings.write(mode, values)` stores one format per course. Empty
  values are stored as the default. A `ValueError` is raised when the number
  of values does not match the number of courses.

### `gogakurec.naming`

- `format_name(format, kouza, hdate, file, nendo, dupnmb, check_illegal)`
  expands the `%` directives of a format:
  - `%k` course
  - `%h` broadcast date
  - `%f` file
  - `%Y` / `%y` year
  - `%N` / `%n` school year
  - `%M` / `%m` month
  - `%D` / `%d` day
  - `%i` duplicate number

  `%x` and `%s` expand to nothing. With `check_illegal`, characters that
  `is_illegal` rejects are dropped.
- `normalize_hdates` rewrites dates as `MM月DD日放送分`.
- `duplicate_numbers` numbers runs of equal consecutive dates `-1`, `-2`, …
- `this_week_files` shifts file codes forward by the number of files.

### `gogakurec.catalog`

- `parse_listing(xml_text)` reads a listing document into `ListingEntry`
  records, each with `file`, `kouza`, `hdate`, `nendo` and `dir`.
- `listing_url`, `series_api_url` and `stream_urls` build URLs.
- `XML_COURSES` maps programme ids to listing paths.
- `selected_sources(json_path, xml_koza, this_week)` decides which of the two
  sources to record from.
- `ffmpeg_arguments(extension, source, destination, title, album, year,
  seekable, reconnect)` builds an argument list from `FFMPEG_TEMPLATES`. It
  raises `ValueError` for an unknown format. `output_extension` gives the file
  extension written for a format.
- `classify_ffmpeg_output(stderr, exit_code)` judges a finished run. It
  returns an `FfmpegOutcome` and a message.
- `separate_kouza` and `album_tag` derive course names and album tags.

### `gogakurec.storage`

- `ensure_output_dir` checks that a folder is writable and creates it if it
  is missing.
- `check_executable` and `ffmpeg_path(bundle_dir, windows)` check for an
  executable.

All three raise `StorageError`, a subclass of `OSError`.

### `gogakurec.enews`

Collects stream names for the English news course.

- `page_dates` and `enews_urls` give the daily pages and search pages to
  fetch.
- `parse_search_page`, `next_search_url` and `parse_program_page` read those
  pages.
- `ENewsCollector(reread, past, fetch).collect(today)` runs the whole
  collection. It returns `(names, names_before_20100323)`. Pages whose fetch
  raises `OSError` are skipped.

### `gogakurec.legacy`

The older naming scheme and listings:

- `format_legacy_name` takes the year from the file name.
- `pad_broadcast_date` and `pad_broadcast_dates` zero-pad dates.
- `legacy_listing_url` builds a listing URL.

### `gogakurec.hls`

- Playlist parsing: `master_playlist_url`, `index_playlist_url`, `key_uri`,
  `segment_urls` and `segment_name`.
- `decrypt_segment(data, key, index)` decrypts one AES-128-CBC segment. The
  IV is the segment number (`segment_iv`).
- `merge_segments(paths, destination)` joins segment files into one. The
  destination is removed if this fails.
- `HlsFetcher(fetch).download(file, output_dir, basename)` fetches, decrypts
  and joins every segment into `basename.ts`. The `fetch` function you supply
  returns the bytes of a URL. The download returns `None` when `canceled` is
  set. Segment files are always removed afterwards. Failures raise
  `HlsError`.

## Example

```python
from gogakurec.catalog import ffmpeg_arguments
from gogakurec.naming import format_name, normalize_hdates

hdate = normalize_hdates(["4月8日放送分"])[0]  # "04月08日放送分"
name = format_name("%k_%Y_%M_%D", "ラジオ英会話", hdate, "file", "2024", "", True)
args = ffmpeg_arguments(
    "mp3", "https://example.com/index.m3u8", name + ".mp3",
    name, "ラジオ英会話", "2024", seekable=True, reconnect=False,
)
```

## What it does not do

- There is no command-line program and no graphical interface.
- It does not run ffmpeg. `ffmpeg_arguments` and `classify_ffmpeg_output`
  prepare a run and judge its result, but the caller starts the process.
- It does not fetch anything over the network itself.
- It does not read the responses of the on-demand series API. It only builds
  their URLs with `series_api_url`.
- It does not write ID3 tags to audio files.