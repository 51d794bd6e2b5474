"""
Translation lookup.

Every user-visible string is looked up by (message, domain). Plugin strings use the
"fullcard" domain; strings shared with the host use the default domain.
Without an installed catalog the message is returned unchanged.
"""

import gettext
from typing import Dict, Iterable, Optional

DEFAULT_DOMAIN = "galette"
PLUGIN_DOMAIN = "fullcard"

_catalogs: Dict[str, gettext.NullTranslations] = {}


def install(domain: str, localedir: str, languages: Optional[Iterable[str]] = None) -> gettext.NullTranslations:
    """Load a gettext catalog for a domain (falls back to identity when missing)."""
    catalog = gettext.translation(
        domain,
        localedir=localedir,
        languages=list(languages) if languages else None,
        fallback=True,
    )
    _catalogs[domain] = catalog
    return catalog


def reset() -> None:
    _catalogs.clear()


def translate(message: str, domain: Optional[str] = None) -> str:
    catalog = _catalogs.get(domain or DEFAULT_DOMAIN)
    if catalog is None:
        return message
    return catalog.gettext(message)
