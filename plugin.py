"""
Plugin manifest for the Galette host.

The host's plugin loader calls `register()` with its registry at startup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict


@dataclass(frozen=True)
class PluginManifest:
    name: str
    description: str
    author: str
    version: str
    compat_version: str
    route: str
    date: date
    permissions: Dict[str, Any] = field(default_factory=dict)


PLUGIN = PluginManifest(
    name="Galette Fullcard",
    description="Full member card as PDF",
    author="Johan Cwiklinski",
    version="2.0.0",
    compat_version="1.1.0",
    route="fullcard",
    date=date(2023, 12, 7),
)


def _version_tuple(version: str):
    parts = []
    for p in str(version).strip().split("."):
        digits = "".join(ch for ch in p if ch.isdigit())
        parts.append(int(digits) if digits else 0)
    return tuple(parts)


def is_compatible(host_version: str, manifest: PluginManifest = PLUGIN) -> bool:
    """True when the host is at least the version the plugin was written for."""
    host = _version_tuple(host_version)
    need = _version_tuple(manifest.compat_version)
    width = max(len(host), len(need))
    return host + (0,) * (width - len(host)) >= need + (0,) * (width - len(need))


def register(registry: Any, manifest: PluginManifest = PLUGIN) -> PluginManifest:
    """Register the plugin with the host's plugin loader."""
    registry.register(
        manifest.name,
        manifest.description,
        manifest.author,
        manifest.version,
        manifest.compat_version,
        manifest.route,
        manifest.date.isoformat(),
        dict(manifest.permissions),
    )
    return manifest
