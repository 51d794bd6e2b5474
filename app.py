#!/usr/bin/env python3
"""
Galette Fullcard generator
Generates one-page "full member card" PDFs (membership form pre-filled with the
member's details) for each member of a CSV or Excel export, or a blank template.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional

from data_loaders import MemberStore
from fullcard import PdfFullcard
from i18n import PLUGIN_DOMAIN, translate
from models import Member, Preferences
from utils import member_pdf_filename


def _log(msg: str) -> None:
    print(f"[fullcard] {msg}", flush=True)


class FullcardGenerator:
    """Renders full member cards for the members of a store."""

    def __init__(self, prefs: Preferences, store: Optional[MemberStore] = None, output_dir: str = "output"):
        """
        Initialize the generator.

        Args:
            prefs: Association preferences (name, postal address, logo)
            store: Members source; also handed to the cards as their database handle
            output_dir: Directory to save generated cards
        """
        self.prefs = prefs
        self.store = store if store is not None else MemberStore()
        # Don't mkdir here; UI may not want any output folder created.
        self.output_dir = Path(output_dir)

    def card(self, member: Optional[Member]) -> PdfFullcard:
        return PdfFullcard(member, self.store, self.prefs)

    def render(self, member: Optional[Member]) -> bytes:
        """Render one card (None: blank template) to PDF bytes."""
        return self.card(member).output()

    def filename_for(self, member: Optional[Member]) -> str:
        """'fullcard.pdf' for the blank template, 'fullcard_<Surname_Name>.pdf' otherwise."""
        base = translate("fullcard", PLUGIN_DOMAIN) + ".pdf"
        if member is None:
            return base
        return member_pdf_filename(base, member.sname)

    def generate_blank(self) -> Path:
        """Write the blank template into the output directory."""
        self.output_dir.mkdir(exist_ok=True, parents=True)
        card = self.card(None)
        path = card.write_to(self.output_dir)
        _log(f"Blank template written to {path}")
        return path

    def generate_all(self, members: Optional[List[Member]] = None) -> List[Path]:
        """Generate cards for the given members (default: the whole store)."""
        members = list(self.store) if members is None else members
        _log(f"Found {len(members)} member(s)")

        self.output_dir.mkdir(exist_ok=True, parents=True)
        written = []
        for i, member in enumerate(members, 1):
            _log(f"Generating card {i}/{len(members)}: {member.sname} ({member.login or '-'})")
            try:
                pdf_path = self.output_dir / self.filename_for(member)
                pdf_path.write_bytes(self.render(member))
                written.append(pdf_path)
            except Exception as e:
                _log(f"Error generating card for {member.sname}: {e}")
                continue

        _log(f"Completed! Generated {len(written)} card(s) in '{self.output_dir}' directory")
        return written


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Generate Galette full member cards (PDF)")
    parser.add_argument("data", nargs="?", help="Path to Excel (.xlsx) or CSV with member data")
    parser.add_argument("-o", "--output", default="output", help="Output directory (default: output)")
    parser.add_argument("-l", "--login", help="Only generate the card of this member login")
    parser.add_argument("--blank", action="store_true", help="Generate a blank template")
    parser.add_argument("--association-name", default="", help="Association display name")
    parser.add_argument("--postal-address", default="", help="Association postal address (use \\n for new lines)")
    parser.add_argument("--logo", help="Path to the association logo")

    args = parser.parse_args(argv)
    if not args.data and not args.blank:
        parser.error("a members file is required unless --blank is given")

    prefs = Preferences(
        pref_nom=args.association_name,
        postal_address=args.postal_address.replace("\\n", "\n"),
        logo_path=args.logo,
    )
    if args.logo and not Path(args.logo).exists():
        _log(f"Error: logo not found at {args.logo}")
        return 1

    store = None
    if args.data:
        try:
            store = MemberStore.from_file(args.data)
        except (FileNotFoundError, OSError, ValueError, ImportError) as e:
            _log(f"Error reading members: {e}")
            return 1

    generator = FullcardGenerator(prefs, store, args.output)
    if args.blank:
        generator.generate_blank()
    if store is None:
        return 0

    if args.login:
        member = store.get(args.login)
        if member is None:
            _log(f"Error: no member with login '{args.login}'")
            return 1
        generator.generate_all([member])
    else:
        generator.generate_all()
    return 0


if __name__ == "__main__":
    sys.exit(main())
