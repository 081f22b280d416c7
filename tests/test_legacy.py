from datetime import date

import pytest

from gogakurec.legacy import (
    format_legacy_name,
    legacy_listing_url,
    pad_broadcast_date,
    pad_broadcast_dates,
)


def test_pad_single_digits():
    assert pad_broadcast_date("4月1日放送分") == "04月01日放送分"


def test_pad_leaves_two_digits_alone():
    assert pad_broadcast_date("12月25日放送分") == "12月25日放送分"


def test_pad_without_match_is_unchanged():
    assert pad_broadcast_date("放送分") == "放送分"


def test_pad_is_idempotent():
    once = pad_broadcast_date("5月9日放送分")
    assert pad_broadcast_date(once) == once


def test_pad_many_keeps_order_and_length():
    dates = ["4月1日放送分", "10月3日放送分", "放送分"]
    padded = pad_broadcast_dates(dates)
    assert len(padded) == len(dates)
    assert padded == [pad_broadcast_date(d) for d in dates]


def test_listing_url():
    assert (
        legacy_listing_url("english/kaiwa")
        == "http://cgi2.nhk.or.jp/gogaku/english/kaiwa/listdataflv.xml"
    )


def test_format_default_pattern():
    name = format_legacy_name(
        "%k_%Y_%M_%D", "ラジオ英会話", "04月05日放送分", "13-kaiwa-4-1.flv", True, date(2013, 5, 1)
    )
    assert name == "ラジオ英会話_2013_04_05"


def test_early_month_moves_to_next_year_when_past():
    name = format_legacy_name("%Y", "k", "04月05日放送分", "13-x.flv", False, date(2014, 1, 10))
    assert name == "2014"


def test_late_month_does_not_move_year():
    same = format_legacy_name("%Y", "k", "05月05日放送分", "13-x.flv", False, date(2013, 6, 1))
    later = format_legacy_name("%Y", "k", "05月05日放送分", "13-x.flv", False, date(2015, 6, 1))
    assert same == later


def test_file_directive_strips_flv():
    name = format_legacy_name("%f", "k", "04月05日放送分", "13-kaiwa-4-1.flv", False, date(2013, 5, 1))
    assert name == "13-kaiwa-4-1"


def test_hdate_and_kouza_directives():
    name = format_legacy_name("%h%k", "K", "04月05日放送分", "13-x", False, date(2013, 5, 1))
    assert name == "04月05日放送分K"


def test_short_year_is_suffix_of_full_year():
    full = format_legacy_name("%Y", "k", "06月01日放送分", "13-x", False, date(2013, 7, 1))
    short = format_legacy_name("%y", "k", "06月01日放送分", "13-x", False, date(2013, 7, 1))
    assert full.endswith(short)
    assert len(short) == 2


def test_unpadded_month_and_day():
    padded = format_legacy_name("%M%D", "k", "06月07日放送分", "13-x", False, date(2013, 7, 1))
    plain = format_legacy_name("%m%d", "k", "06月07日放送分", "13-x", False, date(2013, 7, 1))
    assert padded == "0607"
    assert plain == "67"


@pytest.mark.parametrize("bad", list('/\\:*?"<>|#{}&~'))
def test_illegal_characters_dropped_when_checked(bad):
    fmt = f"a{bad}b%{bad}c"
    checked = format_legacy_name(fmt, "k", "06月07日放送分", "13-x", True, date(2013, 7, 1))
    unchecked = format_legacy_name(fmt, "k", "06月07日放送分", "13-x", False, date(2013, 7, 1))
    assert checked == "abc"
    assert unchecked == f"a{bad}b{bad}c"


def test_unknown_directive_kept_literally():
    name = format_legacy_name("%z", "k", "06月07日放送分", "13-x", True, date(2013, 7, 1))
    assert name == "z"