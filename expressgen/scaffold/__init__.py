"""
ScaffoldEngine — lays out the folder structure and files of a new Express app.

Usage:
    engine = ScaffoldEngine()
    entries = engine.scaffold("my-app", ScaffoldOptions(view="pug"), output_dir)
    # entries: list[Entry] in creation order; directories end with "/"
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from ..manifest import build_manifest, render_manifest
from .templates import css, js, views

logger = logging.getLogger(__name__)

VIEW_ENGINES = tuple(sorted(views.FILES))
CSS_ENGINES = ("less", "stylus", "compass", "sass")

MODE_0755 = 0o755


@dataclass(frozen=True)
class ScaffoldOptions:
    """What to generate. ``view=None`` means static HTML, ``css=None`` plain css."""

    view: Optional[str] = "jade"
    css: Optional[str] = None
    git: bool = False
    es5: bool = False

    def __post_init__(self) -> None:
        if self.view is not None and self.view not in views.FILES:
            raise ValueError(f"unknown view engine: {self.view!r}")
        if self.css is not None and self.css not in CSS_ENGINES:
            raise ValueError(f"unknown css engine: {self.css!r}")


@dataclass(frozen=True)
class Entry:
    """One created path. Directories carry no content and end with '/'."""

    path: str
    content: Optional[str] = None
    mode: Optional[int] = None

    @property
    def is_dir(self) -> bool:
        return self.path.endswith("/")


class ScaffoldEngine:
    """
    Builds the ordered list of entries for an app and writes them to disk.

    Existing files are overwritten; the caller decides beforehand whether a
    non-empty destination is acceptable.
    """

    def plan(self, name: str, options: ScaffoldOptions) -> list[Entry]:
        """Return every directory and file to create, in creation order."""
        style_name, style = css.FILES[options.css]
        entries = [
            Entry("public/"),
            Entry("public/javascripts/"),
            Entry("public/images/"),
            Entry("public/stylesheets/"),
            Entry(f"public/stylesheets/{style_name}", style),
            Entry("routes/"),
        ]
        for file_name, content in js.render_routes(options.es5).items():
            entries.append(Entry(f"routes/{file_name}", content))

        if options.view:
            entries.append(Entry("views/"))
            for file_name, content in sorted(views.FILES[options.view].items()):
                entries.append(Entry(f"views/{file_name}", content))
        else:
            entries.append(Entry("public/index.html", js.INDEX_HTML))

        manifest = build_manifest(name, options.view, options.css)
        entries += [
            Entry("app.js", js.render_app(options.view, options.css, options.es5)),
            Entry("package.json", render_manifest(manifest)),
            Entry("bin/"),
            Entry("bin/www", js.render_www(name, options.es5), MODE_0755),
        ]
        if options.git:
            entries.append(Entry(".gitignore", js.GITIGNORE))
        return entries

    def scaffold(
        self,
        name: str,
        options: ScaffoldOptions,
        output_dir: Path,
        on_create: Optional[Callable[[Entry], None]] = None,
    ) -> list[Entry]:
        """
        Write the app into *output_dir* (created if absent).

        *on_create* is called with each entry right after it exists on disk.
        Raises OSError when a path cannot be written.
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(mode=MODE_0755, parents=True, exist_ok=True)

        entries = self.plan(name, options)
        for entry in entries:
            dest = output_dir / entry.path
            if entry.is_dir:
                dest.mkdir(mode=MODE_0755, parents=True, exist_ok=True)
            else:
                dest.parent.mkdir(mode=MODE_0755, parents=True, exist_ok=True)
                dest.write_text(entry.content or "", encoding="utf-8")
                if entry.mode is not None:
                    os.chmod(dest, entry.mode)
            logger.debug("Scaffolded: %s", entry.path)
            if on_create is not None:
                on_create(entry)

        return entries
