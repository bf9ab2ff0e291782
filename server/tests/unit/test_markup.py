"""Unit tests for content markup rendering."""

import pytest

from timola_api.services.markup import render_markup


@pytest.mark.parametrize(
    "source, expected",
    [
        ("# Title", '<h1 class="text-2xl font-bold mt-10 mb-6">Title</h1>'),
        ("### Small", '<h3 class="text-lg font-bold mt-6 mb-4">Small</h3>'),
        ("**bold**", '<strong class="font-bold text-foreground">bold</strong>'),
        ("*soft*", '<em class="italic">soft</em>'),
        ("__under__", '<u class="underline">under</u>'),
        ("~~gone~~", '<s class="line-through">gone</s>'),
        ("> Quote", '<blockquote class="border-l-4 border-primary/30 pl-4 italic text-muted-foreground my-4">Quote</blockquote>'),
    ],
)
def test_single_rules(source, expected):
    """Each construct renders to its HTML element."""
    assert render_markup(source) == expected


def test_empty_input():
    """Empty or missing text renders to nothing."""
    assert render_markup("") == ""
    assert render_markup(None) == ""


def test_lists_and_line_breaks():
    """Bullets, numbered lines and plain newlines become breaks."""
    rendered = render_markup("Pack:\n- boots\n- jacket\n1. Day one\nEnd")

    assert rendered == "Pack:<br />• boots<br />• jacket<br />1. Day one<br />End"


def test_links_and_images():
    """Safe URLs are emitted as links and images."""
    rendered = render_markup("[Map](https://maps.example.com) ![Peak](/img/peak.jpg)")

    assert '<a href="https://maps.example.com"' in rendered
    assert 'rel="noopener noreferrer">Map</a>' in rendered
    assert '<img src="/img/peak.jpg" alt="Peak"' in rendered


def test_unsafe_urls_are_dropped():
    """Script URLs never reach an href or src."""
    rendered = render_markup("[x](javascript:alert(1)) ![y](data:image/png;base64,AAAA)")

    assert "javascript:" not in rendered
    assert "data:" not in rendered
    assert "<a " not in rendered
    assert "<img " not in rendered


def test_raw_html_is_escaped():
    """Tags typed into the content are rendered inert."""
    rendered = render_markup('<img src=x onerror="alert(1)">')

    assert rendered.startswith("&lt;img")
    assert "<img" not in rendered


def test_attribute_breakout_is_escaped():
    """Quotes inside a link target cannot close the attribute."""
    rendered = render_markup('[x](https://a.example/" onmouseover="alert(1))')

    assert 'onmouseover="' not in rendered
