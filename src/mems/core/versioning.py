"""Version helpers."""

from __future__ import annotations

import importlib.metadata

DISTRIBUTION = "mems"


def package_version() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0+local"
