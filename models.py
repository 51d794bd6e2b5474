"""
Member and preference records consumed by the card renderer.

Both are read-only inputs: rendering never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


def _text(value) -> str:
    if value is None or (isinstance(value, float) and str(value) == "nan"):
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class Title:
    """Politeness title (e.g. short 'Mr.', long 'Mister')."""

    short: str = ""
    long: str = ""


@dataclass(frozen=True)
class Member:
    name: str = ""
    surname: str = ""
    company_name: str = ""
    address: str = ""
    address_continuation: str = ""
    zipcode: str = ""
    town: str = ""
    country: str = ""
    email: str = ""
    login: str = ""
    status: int = 0
    title: Optional[Title] = None
    parent: Optional["Member"] = None
    id: Optional[int] = None

    def has_parent(self) -> bool:
        return self.parent is not None

    def _inherits_address(self) -> bool:
        # Family members without their own address use their parent's postal data
        return self.has_parent() and not _text(self.address)

    def get_address(self) -> str:
        if self._inherits_address():
            return self.parent.get_address()
        return _text(self.address)

    def get_address_continuation(self) -> str:
        if self._inherits_address():
            return self.parent.get_address_continuation()
        return _text(self.address_continuation)

    def get_zipcode(self) -> str:
        if self._inherits_address():
            return self.parent.get_zipcode()
        return _text(self.zipcode)

    def get_town(self) -> str:
        if self._inherits_address():
            return self.parent.get_town()
        return _text(self.town)

    def get_country(self) -> str:
        if self._inherits_address():
            return self.parent.get_country()
        return _text(self.country)

    def get_email(self) -> str:
        if self.has_parent() and not _text(self.email):
            return self.parent.get_email()
        return _text(self.email)

    def get_title(self) -> str:
        """Long form of the politeness title, or ''."""
        if self.title is None:
            return ""
        return _text(self.title.long)

    @property
    def sname(self) -> str:
        """Display name: surname name."""
        return " ".join(p for p in (_text(self.surname), _text(self.name)) if p)


@dataclass(frozen=True)
class Preferences:
    """Association-wide settings used to fill boilerplate text."""

    pref_nom: str = ""
    pref_adresse: str = ""
    pref_adresse2: str = ""
    pref_cp: str = ""
    pref_ville: str = ""
    pref_pays: str = ""
    postal_address: str = ""
    logo_path: Optional[str] = None

    def get_postal_address(self) -> str:
        """
        Postal address block printed on the card.
        A free-text override wins; otherwise the block is composed from the
        association name and address fields, skipping blank parts.
        """
        override = _text(self.postal_address)
        if override:
            return override
        town_line = " ".join(p for p in (_text(self.pref_cp), _text(self.pref_ville)) if p)
        lines = [
            _text(self.pref_nom),
            _text(self.pref_adresse),
            _text(self.pref_adresse2),
            town_line,
            _text(self.pref_pays),
        ]
        return "\n".join(line for line in lines if line)
