"""
Scenario Matrix Loader — generator flag combinations as data
=============================================================
Schema (``name`` and ``files`` are required):

    scenarios:
      - name: "--view ejs"          # also the scenario directory name
        args: ["--view", "ejs"]      # default []
        files: 15                    # expected number of created entries
        expect:                      # paths that must be among them
          - views/index.ejs
        absent: [views/layout.ejs]   # paths that must not be
        dependency: ejs              # must appear in package.json
        stylesheet: true             # GET /stylesheets/style.css works
        start: true                  # worth an npm install + start
        not_found: "<h1>Not Found</h1>"   # expected 404 body fragment
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

_DEFAULT_NOT_FOUND = "<h1>Not Found</h1>"


@dataclass(frozen=True)
class Scenario:
    name: str
    files: int
    args: tuple[str, ...] = ()
    expect: tuple[str, ...] = ()
    absent: tuple[str, ...] = ()
    dependency: Optional[str] = None
    stylesheet: bool = False
    start: bool = False
    not_found: str = _DEFAULT_NOT_FOUND

    @property
    def id(self) -> str:
        return self.name


def load_matrix(path: str | Path) -> list[Scenario]:
    """
    Parse a scenario matrix YAML file.

    Raises
    ------
    FileNotFoundError  — file doesn't exist
    ValueError         — required fields missing, wrong types or duplicate names
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scenario matrix not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    entries = raw.get("scenarios")
    if not isinstance(entries, list) or not entries:
        raise ValueError(f"'{path}': 'scenarios' must be a non-empty list")

    scenarios: list[Scenario] = []
    seen: set[str] = set()
    for i, entry in enumerate(entries):
        where = f"'{path}': scenario #{i + 1}"
        if not isinstance(entry, dict):
            raise ValueError(f"{where} must be a mapping")

        name = str(entry.get("name", "")).strip()
        if not name:
            raise ValueError(f"{where}: 'name' field is required")
        if name in seen:
            raise ValueError(f"{where}: duplicate name {name!r}")
        seen.add(name)

        files = entry.get("files")
        if not isinstance(files, int) or isinstance(files, bool) or files < 0:
            raise ValueError(f"{where} ({name}): 'files' must be a non-negative integer")

        scenarios.append(Scenario(
            name=name,
            files=files,
            args=_str_tuple(entry.get("args"), where, "args"),
            expect=_str_tuple(entry.get("expect"), where, "expect"),
            absent=_str_tuple(entry.get("absent"), where, "absent"),
            dependency=entry.get("dependency") or None,
            stylesheet=bool(entry.get("stylesheet", False)),
            start=bool(entry.get("start", False)),
            not_found=str(entry.get("not_found") or _DEFAULT_NOT_FOUND),
        ))
    return scenarios


def _str_tuple(value: Any, where: str, key: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"{where}: '{key}' must be a list of strings")
    return tuple(value)
