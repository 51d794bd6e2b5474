"""
Member data loading helpers.

Members come from a CSV or Excel export of the members list (Galette export column
names and plain English headers are both understood).

Important: Keep imports light at module import time (Streamlit Cloud startup).
We import pandas only inside functions.
"""

from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from models import Member, Title

MEMBER_COLUMNS = [
    "ID",
    "Name",
    "Surname",
    "Company",
    "Address",
    "Address_Continuation",
    "Zipcode",
    "Town",
    "Country",
    "Email",
    "Login",
    "Status",
    "Title",
    "Parent_Login",
]

# Canonical column -> accepted headers (case-insensitive), most specific first
_ALIASES: Dict[str, List[str]] = {
    "ID": ["ID", "id_adh", "Member ID"],
    "Name": ["Name", "nom_adh", "Last Name", "Last name", "Family Name"],
    "Surname": ["Surname", "prenom_adh", "First Name", "First name", "Firstname"],
    "Company": ["Company", "societe_adh", "Company Name", "Company name"],
    "Address": ["Address", "adresse_adh", "Street"],
    "Address_Continuation": ["Address_Continuation", "adresse2_adh", "Address 2", "Address continuation"],
    "Zipcode": ["Zipcode", "cp_adh", "Zip Code", "Zip", "Postal Code", "Postcode"],
    "Town": ["Town", "ville_adh", "City"],
    "Country": ["Country", "pays_adh"],
    "Email": ["Email", "email_adh", "Email address", "E-mail"],
    "Login": ["Login", "login_adh", "Username"],
    "Status": ["Status", "id_statut", "Status code"],
    "Title": ["Title", "titre_adh", "Politeness"],
    "Parent_Login": ["Parent_Login", "Parent login", "Parent"],
}


def _find_column(df: Any, exact: Optional[str], *subs) -> Optional[str]:
    """Find column by exact name or by substrings (all must match, case-insensitive)."""
    df_cols = [str(c).strip() for c in df.columns]
    if exact and exact in df_cols:
        return exact
    low = exact.lower() if exact else ""
    for c in df.columns:
        cs = str(c).strip()
        if exact and cs.lower() == low:
            return c
        if subs and all(s.lower() in cs.lower() for s in subs):
            return c
    return None


def _clean(v) -> str:
    if v is None or (isinstance(v, float) and str(v) == "nan"):
        return ""
    s = str(v).strip()
    if s.lower() == "nan":
        return ""
    # Spreadsheets turn zip codes and ids into floats
    if isinstance(v, float) and v.is_integer():
        s = str(int(v))
    return s


def _to_int(v) -> int:
    try:
        s = _clean(v)
        return int(float(s)) if s else 0
    except (ValueError, OverflowError):
        return 0


def load_members_dataframe(path: str, sheet: Any = 0) -> Any:
    """
    Load members from Excel or CSV into a DataFrame with the MEMBER_COLUMNS columns.
    Rows without a name are skipped; rows sharing a login are de-duplicated.
    """
    import pandas as pd

    p = Path(path)
    suf = p.suffix.lower()
    if suf in (".xlsx", ".xls"):
        try:
            df = pd.read_excel(path, sheet_name=sheet, dtype=str)
        except ImportError as e:
            if "openpyxl" in str(e).lower():
                raise ImportError(
                    "Reading Excel requires openpyxl. Install it with:\n  pip install openpyxl"
                ) from e
            raise
    else:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)

    df.columns = [str(c).strip() for c in df.columns]
    columns = {}
    for canonical, aliases in _ALIASES.items():
        col = next((c for c in (_find_column(df, a) for a in aliases) if c is not None), None)
        if col is not None:
            columns[canonical] = col
    if "Name" not in columns:
        raise ValueError(
            "Could not find a name column in the members file. "
            "Expected something like 'Name' or 'nom_adh'. "
            f"Columns: {list(df.columns)}"
        )

    total_rows = len(df)
    missing_name = 0
    rows = []
    for _, r in df.iterrows():
        row = {c: _clean(r.get(columns[c], "")) if c in columns else "" for c in MEMBER_COLUMNS}
        if not row["Name"]:
            missing_name += 1
            continue
        row["Status"] = _to_int(row["Status"])
        rows.append(row)

    out = pd.DataFrame(rows, columns=MEMBER_COLUMNS)
    before_dedup = len(out)
    has_login = out["Login"] != ""
    out = pd.concat([out[has_login].drop_duplicates(subset=["Login"]), out[~has_login]])
    out = out.sort_index().reset_index(drop=True)
    out.attrs["load_stats"] = {
        "source_rows": total_rows,
        "kept_rows_before_dedup": before_dedup,
        "loaded_rows": len(out),
        "skipped_missing_name": missing_name,
        "dropped_duplicate_login": before_dedup - len(out),
    }
    return out


def members_from_dataframe(df: Any) -> List[Member]:
    """Convert loaded rows to Member records, linking parents by login."""
    records = df.to_dict("records")

    def _build(row, parent=None) -> Member:
        title = _clean(row.get("Title"))
        member_id = _clean(row.get("ID"))
        return Member(
            id=int(member_id) if member_id.isdigit() else None,
            name=_clean(row.get("Name")),
            surname=_clean(row.get("Surname")),
            company_name=_clean(row.get("Company")),
            address=_clean(row.get("Address")),
            address_continuation=_clean(row.get("Address_Continuation")),
            zipcode=_clean(row.get("Zipcode")),
            town=_clean(row.get("Town")),
            country=_clean(row.get("Country")),
            email=_clean(row.get("Email")),
            login=_clean(row.get("Login")),
            status=_to_int(row.get("Status")),
            title=Title(long=title) if title else None,
            parent=parent,
        )

    by_login = {}
    for row in records:
        if not _clean(row.get("Parent_Login")) and _clean(row.get("Login")):
            by_login[_clean(row["Login"])] = _build(row)

    members = []
    for row in records:
        login = _clean(row.get("Login"))
        parent_login = _clean(row.get("Parent_Login"))
        if not parent_login and login in by_login:
            members.append(by_login[login])
        else:
            members.append(_build(row, parent=by_login.get(parent_login)))
    return members


class MemberStore:
    """In-memory members source handed to the renderer as its database handle."""

    def __init__(self, members: Optional[List[Member]] = None):
        self._members = list(members or [])

    @classmethod
    def from_file(cls, path: str) -> "MemberStore":
        store = cls(members_from_dataframe(load_members_dataframe(path)))
        return store

    def __iter__(self) -> Iterator[Member]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def get(self, login: str) -> Optional[Member]:
        login = (login or "").strip()
        if not login:
            return None
        return next((m for m in self._members if m.login == login), None)
