"""
Link rendering for theme contributed resources
Flow: aggregated URL → render strategy → one markup line on the output stream

URLs come from the portal (context paths of installed bundles plus portal
configuration), never from user input, so they are concatenated into the
markup as-is.
"""

from enum import Enum
from typing import Callable, Iterable, TextIO

from .exceptions import RenderWriteError

LinkRenderer = Callable[[TextIO, str], None]

# Marks the element for the client-side page navigation layer.
SENNA_TRACK_ATTRIBUTE = 'data-senna-track="temporary"'


def render_stylesheet_link(out: TextIO, href: str) -> None:
    _println(out, f'<link {SENNA_TRACK_ATTRIBUTE} href="{href}" rel="stylesheet" type="text/css" />', href)


def render_script(out: TextIO, src: str) -> None:
    _println(out, f'<script {SENNA_TRACK_ATTRIBUTE} src="{src}" type="text/javascript"></script>', src)


class LinkKind(str, Enum):
    """Resource kind; the value doubles as the combo ``minifierType``."""
    CSS = "css"
    JS = "js"
    
    @property
    def renderer(self) -> LinkRenderer:
        return _RENDERERS[self]


_RENDERERS = {
    LinkKind.CSS: render_stylesheet_link,
    LinkKind.JS: render_script,
}


def render_links(out: TextIO, urls: Iterable[str], renderer: LinkRenderer) -> int:
    """Render each URL in order. Returns the number of lines written."""
    count = 0
    for url in urls:
        renderer(out, url)
        count += 1
    return count


def _println(out: TextIO, line: str, url: str) -> None:
    try:
        out.write(line + "\n")
    except OSError as e:
        raise RenderWriteError(f"Failed to write resource link: {e}", url=url) from e
