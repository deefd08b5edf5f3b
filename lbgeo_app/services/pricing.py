from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional


_NON_DIGIT_RE = re.compile(r"[^\d]")
CENT = Decimal("0.01")


def _decimal_separator(text: str) -> Optional[str]:
    last_dot = text.rfind(".")
    last_comma = text.rfind(",")
    if last_dot >= 0 and last_comma >= 0:
        return "." if last_dot > last_comma else ","

    sep = "." if last_dot >= 0 else ("," if last_comma >= 0 else None)
    if sep is None:
        return None
    parts = text.split(sep)
    if len(parts) > 2:
        # "1.234.567" is grouping unless the last chunk is short
        return sep if len(parts[-1]) <= 2 else None
    before, after = parts
    if not after:
        return None
    # "1.234" reads as thousands, "1.5" / "120,50" as decimals
    if len(after) == 3 and before.lstrip("-") not in ("", "0"):
        return None
    return sep


def parse_number(value: Any) -> Optional[Decimal]:
    """Parse user or wire input into a Decimal; None when blank or invalid."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value)) if math.isfinite(value) else None

    raw = str(value).strip().replace("\u00a0", "").replace(" ", "").replace("$", "")
    if not raw:
        return None
    negative = raw.startswith("-")
    raw = raw.lstrip("+-")
    if not any(ch.isdigit() for ch in raw):
        return None

    sep = _decimal_separator(raw)
    if sep:
        int_raw, frac_raw = raw.rsplit(sep, 1)
        int_digits = _NON_DIGIT_RE.sub("", int_raw) or "0"
        frac_digits = _NON_DIGIT_RE.sub("", frac_raw)
        text = f"{int_digits}.{frac_digits}" if frac_digits else int_digits
    else:
        text = _NON_DIGIT_RE.sub("", raw)

    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None
    return -parsed if negative else parsed


def parse_int(value: Any) -> Optional[int]:
    parsed = parse_number(value)
    if parsed is None:
        return None
    return int(parsed.to_integral_value(rounding=ROUND_HALF_UP))


def to_money(value: Any) -> Decimal:
    parsed = parse_number(value)
    if parsed is None:
        return Decimal("0.00")
    return parsed.quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(cantidad: Any, precio_unitario: Any) -> Decimal:
    """cantidad × precio_unitario, rounded half-up to cents."""
    qty = parse_number(cantidad) or Decimal(0)
    unit = parse_number(precio_unitario) or Decimal(0)
    return (qty * unit).quantize(CENT, rounding=ROUND_HALF_UP)


def round_half_up(value: Any) -> int:
    parsed = parse_number(value)
    if parsed is None:
        return 0
    return int(parsed.to_integral_value(rounding=ROUND_HALF_UP))


def to_wire(value: Decimal) -> float:
    return float(value)


def format_money(value: Any, row: Optional[dict] = None) -> str:
    parsed = parse_number(value)
    if parsed is None:
        return "—"
    return f"${parsed.quantize(CENT, rounding=ROUND_HALF_UP):,.2f}"


def format_date(value: Any, row: Optional[dict] = None) -> str:
    if value is None or value == "":
        return "—"
    if isinstance(value, (date, datetime)):
        return value.strftime("%d/%m/%Y")
    text = str(value)
    try:
        return datetime.strptime(text[:10], "%Y-%m-%d").strftime("%d/%m/%Y")
    except ValueError:
        return text


def today_iso() -> str:
    return date.today().isoformat()
