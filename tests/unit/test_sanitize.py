import pytest

from site_api.domain.sanitize import absint, sanitize_text_field


def test_strips_tags():
    assert sanitize_text_field("<b>Bold</b> title") == "Bold title"


def test_drops_script_bodies():
    assert sanitize_text_field("Hi<script>alert('xss')</script>!") == "Hi!"


def test_collapses_whitespace_and_line_breaks():
    assert sanitize_text_field("  My\n\tSite   Title \r\n") == "My Site Title"


def test_removes_percent_encoded_octets():
    assert sanitize_text_field("a%20b%3Cc") == "abc"


def test_keeps_lone_angle_brackets():
    assert sanitize_text_field("1 < 2") == "1 < 2"


def test_nested_tags_do_not_survive():
    assert sanitize_text_field("<<b>script>x") == "x"


def test_non_string_input():
    assert sanitize_text_field(None) == ""
    assert sanitize_text_field(12) == "12"
    assert sanitize_text_field(True) == "1"
    assert sanitize_text_field(["a"]) == ""


def test_absint():
    assert absint("-5") == 5
    assert absint("3 apples") == 3
    assert absint(None) == 0
    assert absint(-2.7) == 2
    assert absint("x") == 0


@pytest.mark.parametrize(
    "raw",
    [
        "New Title",
        "  spaced\n\nout  ",
        "<em>x</em>%41%%4141",
        "<<b>a>b",
        "<script>bad()</script>ok",
        "tab\tand<br/>break",
    ],
)
def test_sanitize_text_field_is_idempotent(raw):
    once = sanitize_text_field(raw)
    assert sanitize_text_field(once) == once


@pytest.mark.parametrize("raw", ["-9", "4", 7, -7.5, "abc", None, True])
def test_absint_is_idempotent(raw):
    once = absint(raw)
    assert absint(once) == once
