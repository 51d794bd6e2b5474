import re


def safe_pdf_filename(name: str, fallback: str = "fullcard") -> str:
    """
    Convert a display name into a safe PDF filename.
    - Uses only letters/numbers/spaces/_/-
    - Collapses whitespace to underscores
    - Falls back to '<fallback>.pdf'
    """
    raw = "" if name is None else str(name)
    if raw.lower().endswith(".pdf"):
        raw = raw[:-4]
    safe = re.sub(r"[^A-Za-z0-9 _-]+", "", raw).strip()
    safe = re.sub(r"\s+", "_", safe)
    if not safe:
        safe = fallback
    return f"{safe}.pdf"


def member_pdf_filename(card_filename: str, member_name: str) -> str:
    """'fullcard.pdf' + 'John Doe' -> 'fullcard_John_Doe.pdf'."""
    base = safe_pdf_filename(card_filename)[:-4]
    if not str(member_name or "").strip():
        return f"{base}.pdf"
    return safe_pdf_filename(f"{base} {member_name}", fallback=base)
