"""Tests for package.json construction and schema validation."""
from __future__ import annotations

import json

import pytest

from expressgen.manifest import build_manifest, render_manifest, validate_manifest

DEFAULT_MANIFEST = """\
{
  "name": "hello-world",
  "version": "0.0.0",
  "private": true,
  "scripts": {
    "start": "node ./bin/www"
  },
  "dependencies": {
    "cookie-parser": "~1.4.4",
    "debug": "~2.6.9",
    "express": "~4.16.1",
    "http-errors": "~1.6.3",
    "jade": "~1.11.0",
    "morgan": "~1.9.1"
  }
}
"""


# ─────────────────────────────────────────────────────────────────────────────
# build_manifest
# ─────────────────────────────────────────────────────────────────────────────

def test_default_manifest_renders_exactly():
    """The default manifest renders byte-for-byte as npm writes it."""
    assert render_manifest(build_manifest("hello-world", "jade", None)) == DEFAULT_MANIFEST


def test_no_view_drops_http_errors():
    """Without a view engine only the base dependencies remain."""
    deps = build_manifest("app", None, None)["dependencies"]
    assert "http-errors" not in deps
    assert set(deps) == {"cookie-parser", "debug", "express", "morgan"}


@pytest.mark.parametrize("view,dep", [
    ("dust", "adaro"), ("ejs", "ejs"), ("hbs", "hbs"), ("hjs", "hjs"),
    ("pug", "pug"), ("twig", "twig"), ("vash", "vash"),
])
def test_view_dependency(view, dep):
    """Each view engine pulls in its npm module."""
    assert dep in build_manifest("app", view, None)["dependencies"]


@pytest.mark.parametrize("css,dep,version", [
    ("less", "less-middleware", "~2.2.1"),
    ("stylus", "stylus", "0.54.5"),
    ("compass", "node-compass", "0.2.3"),
    ("sass", "node-sass-middleware", "0.11.0"),
])
def test_css_dependency(css, dep, version):
    """Each css engine pulls in its middleware at the pinned version."""
    assert build_manifest("app", "jade", css)["dependencies"][dep] == version


def test_dependencies_sorted():
    """Dependencies are listed alphabetically."""
    deps = list(build_manifest("app", "vash", "sass")["dependencies"])
    assert deps == sorted(deps)


# ─────────────────────────────────────────────────────────────────────────────
# validation
# ─────────────────────────────────────────────────────────────────────────────

def test_generated_manifests_validate():
    """Every generated manifest satisfies the schema."""
    for view in (None, "jade", "dust"):
        for css in (None, "less"):
            assert validate_manifest(build_manifest("app", view, css)) == []


def test_validate_reports_bad_name():
    """An invalid package name is reported against the name field."""
    manifest = build_manifest("app", "jade", None)
    manifest["name"] = "Bad Name"
    errors = validate_manifest(manifest)
    assert errors and errors[0].startswith("name:")


def test_validate_reports_extra_keys_and_missing_start():
    """Unknown keys and a missing start script are both reported."""
    manifest = build_manifest("app", "jade", None)
    manifest["scripts"] = {}
    manifest["main"] = "index.js"
    errors = validate_manifest(manifest)
    assert any("start" in e for e in errors)
    assert any("main" in e for e in errors)


def test_render_rejects_invalid_manifest():
    """render_manifest() refuses to write an invalid manifest."""
    manifest = build_manifest("app", "jade", None)
    manifest["private"] = False
    with pytest.raises(ValueError, match="invalid package.json"):
        render_manifest(manifest)


def test_render_is_json_with_trailing_newline():
    """Rendered manifests are JSON ending in a newline."""
    text = render_manifest(build_manifest("app", None, "stylus"))
    assert text.endswith("}\n")
    assert json.loads(text)["dependencies"]["stylus"] == "0.54.5"
