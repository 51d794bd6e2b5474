import re

import pytest

from models import Member, Preferences, Title
from surface import PdfSurface


class RecordingSurface(PdfSurface):
    """PdfSurface that remembers text and box draws with the cursor at draw time."""

    def __init__(self):
        self.calls = []
        super().__init__()

    def cell(self, w=None, h=None, text="", *args, **kwargs):
        self.calls.append(("cell", {"w": w, "h": h, "text": text, "x": self.x, "y": self.y, **kwargs}))
        return super().cell(w, h, text, *args, **kwargs)

    def multi_cell(self, w, h=None, text="", *args, **kwargs):
        self.calls.append(("multi_cell", {"w": w, "h": h, "text": text, "x": self.x, "y": self.y, **kwargs}))
        return super().multi_cell(w, h, text, *args, **kwargs)

    def write(self, h=None, text="", *args, **kwargs):
        self.calls.append(("write", {"h": h, "text": text, "x": self.x, "y": self.y}))
        return super().write(h, text, *args, **kwargs)

    def rect(self, x, y, w, h, *args, **kwargs):
        self.calls.append(("rect", {"x": x, "y": y, "w": w, "h": h}))
        return super().rect(x, y, w, h, *args, **kwargs)

    def of(self, kind):
        return [args for name, args in self.calls if name == kind]


def page_count(pdf_bytes: bytes) -> int:
    return len(re.findall(rb"/Type\s*/Page(?![a-zA-Z])", pdf_bytes))


@pytest.fixture
def prefs():
    return Preferences(
        pref_nom="Les Amis du Vélo",
        pref_adresse="12 rue des Lilas",
        pref_cp="75011",
        pref_ville="Paris",
        pref_pays="France",
    )


@pytest.fixture
def member():
    return Member(
        name="Doe",
        surname="John",
        company_name="ACME",
        address="1 Main Street",
        address_continuation="Building B",
        zipcode="12345",
        town="Springfield",
        country="USA",
        email="john@example.org",
        login="jdoe",
        status=4,
        title=Title(short="Mr.", long="Mister"),
    )
