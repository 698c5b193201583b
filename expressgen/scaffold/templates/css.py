"""Stylesheet templates, keyed by CSS engine (None = plain css)."""
from __future__ import annotations

from typing import Optional

_PLAIN = """\
body {
  padding: 50px;
  font: 14px "Lucida Grande", Helvetica, Arial, sans-serif;
}

a {
  color: #00B7FF;
}
"""

_INDENTED = """\
body
  padding: 50px
  font: 14px "Lucida Grande", Helvetica, Arial, sans-serif

a
  color: #00B7FF
"""

# engine -> (file name, content)
FILES: dict[Optional[str], tuple[str, str]] = {
    None: ("style.css", _PLAIN),
    "less": ("style.less", _PLAIN),
    "stylus": ("style.styl", _INDENTED),
    "compass": ("style.scss", _PLAIN),
    "sass": ("style.sass", _INDENTED),
}
