"""Field values printed on letters and the helpers that format them."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from zoneinfo import ZoneInfo

MONTHS_PT = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_BR_DATE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_MULTI_SPACE_RE = re.compile(r"\s{2,}")


def only_digits(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def format_cnpj(raw: str) -> str:
    """Mask up to 14 digits as ``00.000.000/0000-00``; partial input is masked progressively."""
    d = only_digits(raw)[:14]
    out = d[:2]
    for start, end, sep in ((2, 5, "."), (5, 8, "."), (8, 12, "/"), (12, 14, "-")):
        if d[start:end]:
            out += sep + d[start:end]
    return out


def parse_date_to_iso(raw: str) -> date | None:
    """Parse ``YYYY-MM-DD`` or ``DD/MM/YYYY``; None when absent or not a real date."""
    value = (raw or "").strip()
    if not value:
        return None
    iso = _ISO_DATE_RE.match(value)
    if iso:
        year, month, day = (int(g) for g in iso.groups())
    else:
        br = _BR_DATE_RE.match(value)
        if not br:
            return None
        day, month, year = (int(g) for g in br.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def today_in(timezone: str) -> date:
    return datetime.now(ZoneInfo(timezone)).date()


def resolve_date(raw: str, timezone: str) -> date:
    return parse_date_to_iso(raw) or today_in(timezone)


def format_date_line(city: str, when: date) -> str:
    return f"{city}, {when.day:02d} de {MONTHS_PT[when.month - 1]} de {when.year}"


@dataclass(frozen=True)
class TitleRow:
    """One overdue title: invoice number, installment, due date, amount."""

    note_number: str
    installment: str = ""
    due_date: str = ""
    amount: str = ""

    def cells(self) -> tuple[str, str, str, str]:
        return (self.note_number, self.installment, self.due_date, self.amount)


def _split_title_line(line: str) -> list[str]:
    parts = line.split("\t") if "\t" in line else _MULTI_SPACE_RE.split(line)
    parts = [p.strip() for p in parts if p.strip()]
    if len(parts) < 4:
        parts = line.split()
    return parts


def parse_titles(raw: str) -> list[TitleRow]:
    """Parse pasted title rows, one per line.

    Columns are tab separated or separated by two or more spaces; lines with
    fewer than four such columns are split on any whitespace. Rows with five
    or more columns carry an extra column at position 2 that is dropped. A
    leading header row mentioning NOTA is skipped.
    """
    rows: list[TitleRow] = []
    for line in (raw or "").splitlines():
        line = line.strip()
        if not line:
            continue
        parts = _split_title_line(line)
        if len(parts) >= 5:
            parts = [parts[0], parts[1], parts[3], parts[4]]
        parts += [""] * (4 - len(parts))
        rows.append(TitleRow(*parts[:4]))
    if rows and "NOTA" in " ".join(rows[0].cells()).upper():
        rows = rows[1:]
    return rows


@dataclass(frozen=True)
class ClientFields:
    """Flat record of the values overlaid on a template."""

    company_name: str = ""
    tax_id: str = ""
    date: str = ""
    titles: list[TitleRow] = field(default_factory=list)

    @property
    def tax_id_digits(self) -> str:
        return only_digits(self.tax_id)

    @property
    def company_line(self) -> str:
        return self.company_name.strip().upper()

    @property
    def formatted_tax_id(self) -> str:
        digits = self.tax_id_digits
        return format_cnpj(digits) if len(digits) == 14 else self.tax_id.strip()

    @property
    def tax_id_line(self) -> str:
        formatted = self.formatted_tax_id
        return f"CNPJ: {formatted}" if formatted else ""
