"""
Package manifest (package.json) for generated applications.

The manifest is built as a plain dict, checked against MANIFEST_SCHEMA with
jsonschema and rendered the way npm itself writes it: two-space indent and a
trailing newline.
"""
from __future__ import annotations

import json
import logging
from typing import Optional

import jsonschema

from .naming import MAX_PACKAGE_NAME_LENGTH, PACKAGE_NAME_PATTERN

logger = logging.getLogger(__name__)

BASE_DEPENDENCIES: dict[str, str] = {
    "cookie-parser": "~1.4.4",
    "debug": "~2.6.9",
    "express": "~4.16.1",
    "morgan": "~1.9.1",
}

# Only needed when a view engine renders the 404/error pages.
HTTP_ERRORS_DEPENDENCY = ("http-errors", "~1.6.3")

VIEW_DEPENDENCIES: dict[str, dict[str, str]] = {
    "dust": {"adaro": "~1.0.4"},
    "ejs": {"ejs": "~2.6.1"},
    "hbs": {"hbs": "~4.0.4"},
    "hjs": {"hjs": "~0.0.6"},
    "jade": {"jade": "~1.11.0"},
    "pug": {"pug": "2.0.0-beta11"},
    "twig": {"twig": "~0.10.3"},
    "vash": {"vash": "~0.12.6"},
}

CSS_DEPENDENCIES: dict[str, dict[str, str]] = {
    "less": {"less-middleware": "~2.2.1"},
    "stylus": {"stylus": "0.54.5"},
    "compass": {"node-compass": "0.2.3"},
    "sass": {"node-sass-middleware": "0.11.0"},
}

MANIFEST_SCHEMA: dict = {
    "type": "object",
    "required": ["name", "version", "private", "scripts", "dependencies"],
    "additionalProperties": False,
    "properties": {
        "name": {
            "type": "string",
            "minLength": 1,
            "maxLength": MAX_PACKAGE_NAME_LENGTH,
            "pattern": PACKAGE_NAME_PATTERN,
        },
        "version": {"type": "string", "pattern": r"^\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?$"},
        "private": {"const": True},
        "scripts": {
            "type": "object",
            "required": ["start"],
            "additionalProperties": {"type": "string"},
        },
        "dependencies": {
            "type": "object",
            "additionalProperties": {"type": "string", "minLength": 1},
        },
    },
}


def build_manifest(name: str, view: Optional[str], css: Optional[str]) -> dict:
    """Return the package.json contents for an app using *view* and *css*."""
    deps = dict(BASE_DEPENDENCIES)
    if view:
        key, version = HTTP_ERRORS_DEPENDENCY
        deps[key] = version
        deps.update(VIEW_DEPENDENCIES[view])
    if css:
        deps.update(CSS_DEPENDENCIES[css])

    return {
        "name": name,
        "version": "0.0.0",
        "private": True,
        "scripts": {"start": "node ./bin/www"},
        "dependencies": {k: deps[k] for k in sorted(deps)},
    }


def validate_manifest(manifest: dict) -> list[str]:
    """Return schema violations for *manifest* (empty list when valid)."""
    validator = jsonschema.Draft7Validator(MANIFEST_SCHEMA)
    errors = []
    for error in sorted(validator.iter_errors(manifest), key=lambda e: list(e.path)):
        location = "/".join(str(p) for p in error.path) or "<root>"
        errors.append(f"{location}: {error.message}")
    return errors


def render_manifest(manifest: dict) -> str:
    """
    Serialize *manifest* for writing to disk.

    Raises ValueError when the manifest does not satisfy MANIFEST_SCHEMA.
    """
    errors = validate_manifest(manifest)
    if errors:
        logger.error("Invalid package manifest: %s", "; ".join(errors))
        raise ValueError("invalid package.json: " + "; ".join(errors))
    return json.dumps(manifest, indent=2) + "\n"
