import pytest

from paginator.core.href import HREF_MARKER, demangled_href, unescape_string


MANGLED_PREFIX = (
    "#viv-id-:002fpageableContentDD835404-D8AE-4FC3-A6BE-E1BFD35C6885:002e"
    "html:0023"
)


def test_mangled_href_is_demangled() -> None:
    assert demangled_href(MANGLED_PREFIX + "foo:0020bar") == "#foo bar"


def test_short_mangled_href_is_demangled() -> None:
    assert demangled_href("#xehtml:0023foo:0020bar") == "#foo bar"


@pytest.mark.parametrize(
    "href",
    [
        "https://example.com/a:0041",
        "chapter.html#intro",
        "",
        "mailto:someone@example.com",
    ],
)
def test_hrefs_without_fragment_marker_pass_through(href: str) -> None:
    assert demangled_href(href) == href


def test_none_passes_through() -> None:
    assert demangled_href(None) is None


def test_authored_in_page_link_is_unchanged() -> None:
    assert demangled_href("#section:0020two") == "#section:0020two"


def test_demangling_is_idempotent_without_marker() -> None:
    once = demangled_href(MANGLED_PREFIX + "a:0023b")
    assert once == "#a#b"
    assert demangled_href(once) == once


def test_only_text_after_first_marker_is_kept() -> None:
    href = "#prefix" + HREF_MARKER + "x" + HREF_MARKER
    assert demangled_href(href) == "#x" + "ehtml#"


def test_unescape_basic_code_units() -> None:
    assert unescape_string(":0041:0042") == "AB"


def test_unescape_is_case_insensitive() -> None:
    assert unescape_string(":00e9t:00E9") == "été"


def test_unescape_leaves_malformed_runs() -> None:
    assert unescape_string("a:12") == "a:12"
    assert unescape_string(":zzzz") == ":zzzz"
    assert unescape_string("::0041") == ":A"
    assert unescape_string("trailing:") == "trailing:"


def test_unescape_uses_exactly_four_digits() -> None:
    assert unescape_string(":004142") == "A42"


def test_unescape_recombines_surrogate_pairs() -> None:
    assert unescape_string(":d83d:de00") == "\U0001F600"


def test_unescape_keeps_lone_surrogate() -> None:
    assert unescape_string(":d83dx") == "\ud83dx"


def test_unescape_plain_text_unchanged() -> None:
    assert unescape_string("plain-text_42") == "plain-text_42"
