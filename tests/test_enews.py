from datetime import date, timedelta

from gogakurec.enews import (
    OLDEST_DATE,
    PAGE_URL_PREFIX,
    SEARCH_20090330,
    SEARCH_20100323,
    SEARCH_AT_ONCE,
    ENewsCollector,
    enews_urls,
    next_search_url,
    page_dates,
    parse_program_page,
    parse_search_page,
)

TODAY = date(2010, 5, 14)


def _search_link(name, wide=True):
    player = "video_player_wide" if wide else "video_player"
    return f'<a href="http://cgi2.nhk.or.jp/e-news/swfp/{player}.swf?type=real&amp;m_name={name}">'


def test_page_dates_recent_window_weekdays_only():
    days = page_dates(TODAY, reread=False, past=False)
    assert all(d.isoweekday() <= 5 for d in days)
    assert all(TODAY - timedelta(days=7) <= d <= TODAY for d in days)
    assert days == sorted(days, reverse=True)
    assert days[0] == TODAY


def test_page_dates_past_reaches_oldest():
    days = page_dates(TODAY, reread=True, past=True)
    assert days[-1] == OLDEST_DATE
    assert len(days) > len(page_dates(TODAY, reread=True, past=False))


def test_enews_urls_includes_searches_only_when_past_without_reread():
    urls = enews_urls(TODAY, reread=False, past=True)
    assert urls[-2:] == [SEARCH_20100323, SEARCH_20090330]
    assert urls[0] == PAGE_URL_PREFIX + "20100514"
    assert SEARCH_20100323 not in enews_urls(TODAY, reread=True, past=True)


def test_parse_search_page_skips_known():
    page = _search_link("a1") + _search_link("b2", wide=False) + _search_link("c3")
    assert parse_search_page(page, ["b2"]) == ["a1", "c3"]


def test_next_search_url():
    assert next_search_url(SEARCH_20100323, SEARCH_AT_ONCE).endswith("&start=100")
    assert next_search_url(SEARCH_20100323, SEARCH_AT_ONCE - 1) is None
    assert next_search_url("http://example.com/?q=x", SEARCH_AT_ONCE) is None


def test_parse_program_page():
    page = 'x video_player_wide.swf?type=real&m_name=news/item" y'
    assert parse_program_page(page, reread=False) == "news/item"
    reread_page = 'mp3player.swf?type=real&m_name=audio1&other"'
    assert parse_program_page(reread_page, reread=True) == "audio1"
    assert parse_program_page(page, reread=True) is None


def test_collector_gathers_and_follows_pages():
    first_full = "".join(_search_link(f"w{i}") for i in range(SEARCH_AT_ONCE))
    pages = {
        SEARCH_20100323: first_full,
        next_search_url(SEARCH_20100323, SEARCH_AT_ONCE): _search_link("last"),
        SEARCH_20090330: _search_link("old", wide=False),
        PAGE_URL_PREFIX + "20100514": 'video_player_wide.swf?type=real&m_name=daily"',
    }
    fetched = []

    def fetch(url):
        fetched.append(url)
        if url not in pages:
            raise OSError("missing")
        return pages[url]

    collector = ENewsCollector(reread=False, past=True, fetch=fetch)
    current, before = collector.collect(TODAY)
    assert before == ["old"]
    assert current[0] == "daily"
    assert "last" in current
    assert len(current) == SEARCH_AT_ONCE + 2
    assert len(set(current)) == len(current)
    assert next_search_url(SEARCH_20100323, SEARCH_AT_ONCE) in fetched


def test_collector_reread_dedupes_program_pages():
    page = 'mp3player.swf?type=real&m_name=same"'
    collector = ENewsCollector(reread=True, past=False, fetch=lambda url: page)
    current, before = collector.collect(TODAY)
    assert current == ["same"]
    assert before == []