"""Render the tour content markup dialect to HTML.

The dialect is the one admins use in ``itineraryDetail`` and
``additionalInfo``: ``#``/``##``/``###`` headers, ``![alt](src)`` images,
``**bold**``, ``*italic*``, ``__underline__``, ``~~strike~~``, `` `code` ``,
``[text](href)`` links, ``> `` quotes, ``- `` bullets, numbered lines and
plain line breaks.

Substitutions run in a fixed order over text that has already been HTML
escaped, so raw tags typed into the content come out inert.
"""

import html
import re
from typing import Callable, List, Tuple, Union

_SAFE_URL = re.compile(r"^(https?://|mailto:|/|#)", re.IGNORECASE)


def _safe_url(url: str) -> str:
    """Return ``url`` if it uses an allowed scheme, else an empty string."""
    url = url.strip()
    return url if _SAFE_URL.match(url) else ""


def _image(match: re.Match) -> str:
    alt, src = match.group(1), _safe_url(match.group(2))
    if not src:
        return alt
    return f'<img src="{src}" alt="{alt}" class="rounded-lg my-2 max-w-full" />'


def _link(match: re.Match) -> str:
    text, href = match.group(1), _safe_url(match.group(2))
    if not href:
        return text
    return (
        f'<a href="{href}" class="text-primary underline hover:text-primary/80" '
        f'target="_blank" rel="noopener noreferrer">{text}</a>'
    )


_Replacement = Union[str, Callable[[re.Match], str]]

# Order matters: headers before emphasis, images before links, bold before italic
_RULES: List[Tuple[re.Pattern, _Replacement]] = [
    (re.compile(r"^### (.*?)$", re.MULTILINE), r'<h3 class="text-lg font-bold mt-6 mb-4">\1</h3>'),
    (re.compile(r"^## (.*?)$", re.MULTILINE), r'<h2 class="text-xl font-bold mt-8 mb-4">\1</h2>'),
    (re.compile(r"^# (.*?)$", re.MULTILINE), r'<h1 class="text-2xl font-bold mt-10 mb-6">\1</h1>'),
    (re.compile(r"!\[(.*?)\]\((.*?)\)"), _image),
    (re.compile(r"\*\*(.*?)\*\*"), r'<strong class="font-bold text-foreground">\1</strong>'),
    (re.compile(r"\*(.*?)\*"), r'<em class="italic">\1</em>'),
    (re.compile(r"__(.*?)__"), r'<u class="underline">\1</u>'),
    (re.compile(r"~~(.*?)~~"), r'<s class="line-through">\1</s>'),
    (re.compile(r"`(.*?)`"), r'<code class="bg-primary/10 text-primary px-1.5 py-0.5 rounded text-sm font-mono">\1</code>'),
    (re.compile(r"\[(.*?)\]\((.*?)\)"), _link),
    # '>' has been escaped by the time quotes are matched
    (re.compile(r"^&gt; (.*?)$", re.MULTILINE), r'<blockquote class="border-l-4 border-primary/30 pl-4 italic text-muted-foreground my-4">\1</blockquote>'),
    (re.compile(r"\n- "), "<br />• "),
    (re.compile(r"\n(\d+)\. "), r"<br />\1. "),
    (re.compile(r"\n"), "<br />"),
]


def render_markup(text: str | None) -> str:
    """Render ``text`` to an HTML fragment; empty input gives an empty string."""
    if not text:
        return ""

    rendered = html.escape(text.replace("\r\n", "\n"), quote=True)
    for pattern, replacement in _RULES:
        rendered = pattern.sub(replacement, rendered)
    return rendered
