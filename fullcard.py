"""
Member full card PDF.

One A4 page: membership declaration (type of membership, personal details, agreement,
signature), pre-filled with a member's data when one is given, blank otherwise.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional, Union

from config import FONT, FULLCARD_FONT, STATUS_ACTIVE_MEMBER, STATUS_BENEFACTOR_MEMBER
from i18n import PLUGIN_DOMAIN, translate
from models import Member, Preferences
from plugin import PLUGIN
from surface import PdfSurface

# Layout (mm)
ROW_HEIGHT = 7
LABEL_WIDTH = 30
RULE_END = 190
BOX_SIZE = 3
ZIP_RULE_WIDTH = 15
FOOTNOTES_Y = 260

# Cursor after a cell: to its right, or at the left margin of the next line
NEXT_TO = {"new_x": "RIGHT", "new_y": "TOP"}
NEXT_LINE = {"new_x": "LMARGIN", "new_y": "NEXT"}


class PdfFullcard:
    """Full member card; the constructor draws the whole page."""

    def __init__(
        self,
        member: Optional[Member],
        zdb: Any,
        prefs: Preferences,
        surface: Optional[PdfSurface] = None,
        translate_func: Optional[Callable[..., str]] = None,
    ):
        """
        Args:
            member: Member to pre-fill the card with, None for a blank template
            zdb: Database handle (kept for the host contract, not queried)
            prefs: Association preferences
            surface: Drawing surface (a new A4 PdfSurface by default)
            translate_func: Translation lookup (message, domain=None) -> str
        """
        self._T = translate_func or translate
        self.member = member
        self.zdb = zdb
        self.prefs = prefs
        self.filename = self._T("fullcard", PLUGIN_DOMAIN) + ".pdf"
        self.surface = surface if surface is not None else PdfSurface()
        self._init()
        self._draw_card()

    def _init(self) -> None:
        s = self.surface
        T = self._T
        # Document information
        s.set_title(T("Member's full card", PLUGIN_DOMAIN))
        s.set_subject(T("Generated by Galette", PLUGIN_DOMAIN))
        s.set_keywords(T("Labels", PLUGIN_DOMAIN))
        s.set_creator(f"{PLUGIN.name} {PLUGIN.version}")
        if self.prefs.pref_nom:
            s.set_author(self.prefs.pref_nom)

        s.set_margins(10, 10)
        s.set_display_mode("fullpage")
        # Fixed layout: content past the bottom runs off the page
        s.set_auto_page_break(False, 20)
        s.add_page()

    def _draw_card(self) -> None:
        s = self.surface
        T = self._T
        member = self.member

        s.set_font(FONT, "", FULLCARD_FONT)
        s.set_text_color(0, 0, 0)

        s.page_header(T("Adhesion form"), heading=self.prefs.pref_nom, logo_path=self.prefs.logo_path)

        s.set_draw_color(180, 180, 180)
        s.set_line_width(0.1)

        s.ln(10)
        s.line(s.get_x(), s.get_y(), 200, s.get_y())
        s.ln(2)
        s.set_font(FONT, "", FULLCARD_FONT - 1)
        s.multi_cell(
            0, 4,
            T("Complete the following form and send it with your funds, in order to complete your subscription."),
            align="L", **NEXT_LINE,
        )

        s.ln(2)
        s.set_font(FONT, "", FULLCARD_FONT)
        s.set_x(100)
        s.multi_cell(0, 4, self.prefs.get_postal_address(), align="L", **NEXT_LINE)
        s.ln(3)
        s.line(s.get_x(), s.get_y(), 200, s.get_y())

        s.ln(10)
        self._draw_membership()

        s.set_font(FONT, "", FULLCARD_FONT + 2)
        self._draw_fields()

        s.ln(10)
        agreement = T("Hereby, I agree to comply to %s association statutes and its rules.")
        s.write(4, agreement.replace("%s", self.prefs.pref_nom))
        s.ln(10)
        s.cell(64, 5, T("At ", PLUGIN_DOMAIN), **NEXT_TO)
        s.cell(0, 5, T("On            /            /            ", PLUGIN_DOMAIN), **NEXT_LINE)
        s.ln(1)
        s.cell(0, 5, T("Signature"), **NEXT_LINE)

        s.set_y(FOOTNOTES_Y)
        s.set_font(FONT, "", FULLCARD_FONT - 2)
        s.cell(0, 3, T("* Only for companies"), align="R", **NEXT_LINE)
        s.cell(0, 3, T("** Galette identifier, if applicable"), align="R", **NEXT_LINE)

    def _draw_membership(self) -> None:
        s = self.surface
        T = self._T
        status = self.member.status if self.member is not None else None

        s.set_font(FONT, "", FULLCARD_FONT + 2)
        box_y = s.get_y() + 1
        s.write(5, T("Required membership:"))
        self._checkbox(box_y, status == STATUS_ACTIVE_MEMBER)
        s.write(5, T("Active member"))
        self._checkbox(box_y, status == STATUS_BENEFACTOR_MEMBER)
        s.write(5, T("Benefactor member"))
        # Donations are never pre-checked
        self._checkbox(box_y, False)
        s.write(5, T("Donation"))
        s.ln()

        s.set_font(FONT, "", FULLCARD_FONT)
        s.write(
            4,
            T(
                "The minimum contribution for each type of membership are defined on the website of the "
                "association. The amount of donations are free to be decided by the generous donor."
            ),
        )
        s.ln(20)

    def _checkbox(self, y: float, checked: bool) -> None:
        s = self.surface
        s.set_x(s.get_x() + 5)
        s.rect(s.get_x(), y, BOX_SIZE, BOX_SIZE)
        s.cell(BOX_SIZE, 5, "X" if checked else "", align="C", **NEXT_TO)
        s.set_x(s.get_x() + 1)

    def _draw_fields(self) -> None:
        s = self.surface
        T = self._T
        member = self.member

        s.cell(LABEL_WIDTH, ROW_HEIGHT, T("Politeness"), **NEXT_TO)
        s.cell(0, ROW_HEIGHT, member.get_title() if member is not None else "", **NEXT_LINE)
        self._rule()

        self._field_row(T("Name"), lambda m: m.name)
        self._field_row(T("First name"), lambda m: m.surname)
        self._field_row(T("Company name") + " *", lambda m: m.company_name)
        self._field_row(T("Address"), lambda m: m.get_address())
        self._field_row("", lambda m: m.get_address_continuation())
        s.set_y(s.get_y() + ROW_HEIGHT)
        self._rule()

        # Zip code and city share one row
        y = s.get_y()
        self._label_and_value(T("Zip Code"), lambda m: m.get_zipcode())
        x = s.get_x()
        s.line(x + LABEL_WIDTH, s.get_y() - 1, x + LABEL_WIDTH + ZIP_RULE_WIDTH, s.get_y() - 1)
        s.set_y(y)
        s.set_x(s.get_x() + LABEL_WIDTH + ZIP_RULE_WIDTH + 5)
        self._label_and_value(T("City"), lambda m: m.get_town())
        s.line(s.get_x() + LABEL_WIDTH + ZIP_RULE_WIDTH + LABEL_WIDTH, s.get_y() - 1, RULE_END, s.get_y() - 1)

        self._field_row(T("Country"), lambda m: m.get_country())
        self._field_row(T("Email address"), lambda m: m.get_email())
        self._field_row(T("Username") + " **", lambda m: m.login)

        s.ln(6)
        s.cell(LABEL_WIDTH, ROW_HEIGHT, T("Amount"), **NEXT_LINE)
        self._rule()

    def _label_and_value(self, label: str, value: Callable[[Member], Any]) -> None:
        """
        Label cell, then the member's value on the same line. Without a member the
        label breaks the line itself, so blank rows take the same height.
        """
        s = self.surface
        member = self.member
        s.cell(LABEL_WIDTH, ROW_HEIGHT, label, **(NEXT_LINE if member is None else NEXT_TO))
        if member is not None:
            s.cell(0, ROW_HEIGHT, _text(value(member)), **NEXT_LINE)

    def _field_row(self, label: str, value: Callable[[Member], Any]) -> None:
        self._label_and_value(label, value)
        self._rule()

    def _rule(self) -> None:
        s = self.surface
        y = s.get_y() - 1
        s.line(s.get_x() + LABEL_WIDTH, y, RULE_END, y)

    def output(self) -> bytes:
        return self.surface.output()

    def write_to(self, target: Union[str, Path]) -> Path:
        """Save the PDF; a directory target uses the card's filename."""
        path = Path(target)
        if path.is_dir():
            path = path / self.filename
        path.write_bytes(self.output())
        return path


def _text(value: Any) -> str:
    return "" if value is None else str(value)
