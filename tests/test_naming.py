import pytest

from gogakurec.naming import (
    BROADCAST_SUFFIX,
    NENDO1,
    NENDO2,
    NENDO_SUFFIX,
    duplicate_numbers,
    format_name,
    is_illegal,
    normalize_hdates,
    this_week_files,
)

KOUZA = "ラジオ英会話"
HDATE = "05月07日放送分"


def _name(fmt, *, hdate=HDATE, file="file.flv", nendo="2024", dupnmb="", check=False):
    return format_name(fmt, KOUZA, hdate, file, nendo, dupnmb, check)


@pytest.mark.parametrize("char", list('/\\:*?"<>|#{}%&~'))
def test_illegal_characters(char):
    assert is_illegal(char) is True


@pytest.mark.parametrize("char", ["a", "-", "_", "月", " ", ""])
def test_legal_characters(char):
    assert is_illegal(char) is False


def test_default_format():
    assert _name("%k_%Y_%M_%D") == KOUZA + "_2024_05_07"


def test_unpadded_and_short_directives():
    assert _name("%m") == "5"
    assert _name("%d") == "7"
    assert _name("%y") == "24"


def test_school_year_after_start_date():
    assert _name("%N") == NENDO2 + NENDO_SUFFIX
    assert _name("%n") == NENDO2[-2:] + NENDO_SUFFIX


def test_school_year_before_start_date():
    assert _name("%N", hdate="03月10日放送分") == NENDO1 + NENDO_SUFFIX


def test_invalid_date_uses_first_school_year():
    assert _name("%N", hdate="13月40日放送分") == NENDO1 + NENDO_SUFFIX


def test_file_directive_strips_flv():
    assert _name("%f", file="abc.flv") == "abc"
    assert _name("%f", file="abc.mp4") == "abc.mp4"


def test_broadcast_directive():
    assert _name("%h", dupnmb="-2") == HDATE[:6] + BROADCAST_SUFFIX + "-2"


def test_duplicate_number_follows_day():
    assert _name("%D", dupnmb="-2") == "07-2"
    assert _name("%d", dupnmb="-2") == "7-2"


def test_explicit_duplicate_directive_moves_number():
    assert _name("%D%i", dupnmb="-2") == _name("%D", dupnmb="-2")
    assert _name("%h%i", dupnmb="-2") == HDATE[:6] + BROADCAST_SUFFIX + "-2"


def test_underscore_duplicate_directive():
    assert _name("%D%_%i", dupnmb="-2") == "07_2"


def test_ignored_directives():
    assert _name("%x%s") == ""


def test_trailing_percent_is_dropped():
    assert _name("%k%") == KOUZA


def test_unknown_directive_is_literal():
    assert _name("%q") == "q"


def test_illegal_characters_removed_from_format_only():
    fmt = "a/b:%k"
    assert _name(fmt, check=True) == "ab" + KOUZA
    assert _name(fmt, check=False) == "a/b:" + KOUZA


def test_double_percent():
    assert _name("%%", check=False) == "%"
    assert _name("%%", check=True) == ""


def test_checked_names_have_no_illegal_characters():
    result = _name('%k<>|"%Y?%M*%D#{}&~', check=True)
    assert not any(is_illegal(c) for c in result)


def test_normalize_pads_month_and_day():
    assert normalize_hdates(["5月7日放送分"]) == ["05月07日放送分"]


def test_normalize_is_idempotent():
    once = normalize_hdates(["5月7日放送分", "12月25日放送分", "1/2"])
    assert normalize_hdates(once) == once


def test_normalize_without_digits():
    assert normalize_hdates(["abc"]) == ["00月00日" + BROADCAST_SUFFIX]


def test_this_week_files_removes_rerun_marker():
    result = this_week_files(["x-001-re01", "x-002"], ["001", "002"])
    assert all("-re01" not in name for name in result)
    assert len(result) == 2


def test_this_week_files_shifts_code():
    assert this_week_files(["x-001"], ["001"]) == ["x-002"]


def test_this_week_files_needs_codes():
    with pytest.raises(ValueError):
        this_week_files(["a", "b"], ["001"])


def test_duplicate_numbers_runs():
    hdates = ["a", "a", "b", "c", "c", "c"]
    assert duplicate_numbers(hdates) == ["-1", "-2", "", "-1", "-2", "-3"]


def test_duplicate_numbers_all_distinct():
    hdates = normalize_hdates(["4月1日", "4月2日", "4月3日"])
    assert duplicate_numbers(hdates) == ["", "", ""]


def test_duplicate_numbers_empty():
    assert duplicate_numbers([]) == []