# This project was developed with assistance from AI tools.
"""Heuristic slot parsing for the planning conversation.

Pure functions that pull one slot value out of a free-text utterance. Value
parsers return ``(is_valid, error_message, value)`` so the engine can re-prompt
with the message; intent detectors return a plain bool. Matching is keyword
and pattern based (English and Turkish), not language understanding.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from ..enums import ConversationStep, RateUnit
from ..schemas.property import PROPERTY_ID_PATTERN

_PROPERTY_ID_RE = re.compile(rf"\b({PROPERTY_ID_PATTERN})\b")
_PROPERTY_ID_FULL_RE = re.compile(rf"^\s*{PROPERTY_ID_PATTERN}\s*$")
_YEAR_RE = re.compile(r"\b(\d{4})\b")
_INT_RE = re.compile(r"\d+")
_MONTH_NUMBER_RE = re.compile(r"\b(\d{1,2})\b")
_RATE_NUMBER_RE = re.compile(r"(\d+(?:[.,]\d+)?)")
_TERM_RE = re.compile(r"(\d+)\s*(?:months?|mos?\b|ay\b|taksit)", re.IGNORECASE)
_ORDINAL_RE = re.compile(r"^\s*(\d+)\.?\s*$")

_MONTH_NAMES: dict[str, int] = {
    # English
    "january": 1, "february": 2, "march": 3, "april": 4, "may": 5, "june": 6,
    "july": 7, "august": 8, "september": 9, "october": 10, "november": 11, "december": 12,
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "jun": 6, "jul": 7, "aug": 8,
    "sep": 9, "sept": 9, "oct": 10, "nov": 11, "dec": 12,
    # Turkish
    "ocak": 1, "şubat": 2, "subat": 2, "mart": 3, "nisan": 4, "mayıs": 5, "mayis": 5,
    "haziran": 6, "temmuz": 7, "ağustos": 8, "agustos": 8, "eylül": 9, "eylul": 9,
    "ekim": 10, "kasım": 11, "kasim": 11, "aralık": 12, "aralik": 12,
}  # fmt: skip

_ANNUAL_KEYWORDS = ("annual", "annually", "yearly", "per year", "a year", "yıllık", "yillik")
_MONTHLY_KEYWORDS = ("monthly", "per month", "a month", "aylık", "aylik")
_YES_WORDS = ("yes", "y", "ok", "okay", "sure", "accept", "agree", "evet", "e", "tamam", "kabul")
_NO_WORDS = ("no", "n", "nope", "hayır", "hayir", "h")

_GREETING_KEYWORDS = (
    "hello", "hi", "hey", "restart", "reset", "start over", "new plan", "new calculation",
    "merhaba", "selam", "başla", "basla", "baştan", "yeni",
)  # fmt: skip
_HELP_KEYWORDS = ("help", "yardım", "yardim", "nasıl", "nasil")
_LOWER_INSTALLMENT_KEYWORDS = (
    "lower installment", "lower payment", "lower monthly", "smaller installment",
    "too high", "too much", "too expensive", "cheaper", "reduce", "can't afford",
    "daha düşük", "düşük taksit", "taksit fazla", "taksit çok", "daha az taksit",
    "düşük ödeme", "azaltmak",
)  # fmt: skip
_DOWN_PAYMENT_WORDS = ("down payment", "down-payment", "downpayment", "peşinat", "pesinat")
_RAISE_WORDS = ("raise", "increase", "higher", "more", "how much", "artır", "yükselt", "ne kadar")


@dataclass(frozen=True)
class ParsedRate:
    """A discount rate as a decimal fraction plus the unit the text named, if any."""

    rate: float
    unit: RateUnit | None


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    """Whole-word (or whole-phrase) keyword match, case-insensitive."""
    lowered = text.lower()
    return any(re.search(rf"(?<!\w){re.escape(kw)}(?!\w)", lowered) for kw in keywords)


# ---------------------------------------------------------------------------
# Slot value parsers
# ---------------------------------------------------------------------------


def parse_property_id(value: str) -> tuple[bool, str, str | None]:
    """Find a property identifier such as GZP-H04-001 anywhere in the text."""
    match = _PROPERTY_ID_RE.search(value)
    if not match:
        return False, "No property id found. Ids look like GZP-H04-001.", None
    return True, "", match.group(1).upper()


def parse_year(value: str) -> tuple[bool, str, int | None]:
    """Four-digit year between 2001 and 2099."""
    match = _YEAR_RE.search(value.strip())
    if match:
        year = int(match.group(1))
        if 2000 < year < 2100:
            return True, "", year
    return False, "Please write the year as YYYY, for example 2027.", None


def parse_month(value: str) -> tuple[bool, str, int | None]:
    """Month as a number (1-12) or an English/Turkish month name."""
    lowered = value.strip().lower()
    match = _MONTH_NUMBER_RE.search(lowered)
    if match:
        month = int(match.group(1))
        if 1 <= month <= 12:
            return True, "", month
        return False, "Month must be between 1 and 12.", None
    for word in re.findall(r"\w+", lowered):
        if word in _MONTH_NAMES:
            return True, "", _MONTH_NAMES[word]
    return False, "Please write the month as a number (1-12) or its name, e.g. 3 or March.", None


def parse_amount(value: str) -> tuple[bool, str, float | None]:
    """Currency amount; dots, commas and spaces are read as thousands separators.

    "300.000", "300,000" and "300 000 TL" all give 300000. A bare property id is
    never read as an amount.
    """
    stripped = value.strip()
    if _PROPERTY_ID_FULL_RE.match(stripped):
        return False, "That looks like a property id, not an amount.", None
    digits = re.sub(r"\D", "", stripped)
    if not digits:
        return False, "Please write the amount as a number, e.g. 500000.", None
    return True, "", float(digits)


def parse_installment_count(value: str) -> tuple[bool, str, int | None]:
    """First positive integer in the text ("24", "36 months", "48 ay")."""
    match = _INT_RE.search(value)
    if match:
        count = int(match.group(0))
        if count > 0:
            return True, "", count
    return False, "Please write the number of installments, e.g. 24 or 36.", None


def detect_rate_unit(value: str) -> RateUnit | None:
    """Unit named by the text, or None when it names neither or both."""
    annual = _contains_any(value, _ANNUAL_KEYWORDS)
    monthly = _contains_any(value, _MONTHLY_KEYWORDS)
    if annual == monthly:
        return None
    return RateUnit.ANNUAL if annual else RateUnit.MONTHLY


def parse_rate_unit_answer(value: str) -> tuple[bool, str, RateUnit | None]:
    """Answer to "is the rate annual?": unit keywords, yes/no, or empty for monthly."""
    unit = detect_rate_unit(value)
    if unit is not None:
        return True, "", unit
    stripped = value.strip()
    if _contains_any(stripped, _YES_WORDS):
        return True, "", RateUnit.ANNUAL
    if not stripped or _contains_any(stripped, _NO_WORDS):
        return True, "", RateUnit.MONTHLY
    return False, 'Please answer "annual" or "monthly".', None


def parse_rate(value: str) -> tuple[bool, str, ParsedRate | None]:
    """Discount rate with an optional unit keyword.

    "%2", "2%" and "2" mean two percent (0.02). A bare number below 1 without a
    percent sign is taken as already being a decimal fraction ("0.02").
    Decimal commas are accepted ("26,8").
    """
    match = _RATE_NUMBER_RE.search(value)
    if not match:
        return False, "Please write the rate as a number, e.g. 2 or %2.", None
    number = float(match.group(1).replace(",", "."))
    if "%" in value or number >= 1:
        rate = number / 100
    else:
        rate = number
    if not 0 < rate < 10:
        return False, "The rate must be greater than 0 % and below 1000 %.", None
    return True, "", ParsedRate(rate=rate, unit=detect_rate_unit(value))


def parse_list_ordinal(value: str, count: int) -> tuple[bool, str, int | None]:
    """1-based position in a list of ``count`` items ("2" or "2."); returns a 0-based index."""
    match = _ORDINAL_RE.match(value)
    if not match:
        return False, "Please pick a number from the list.", None
    position = int(match.group(1))
    if not 1 <= position <= count:
        return False, f"Please pick a number between 1 and {count}.", None
    return True, "", position - 1


def parse_term_request(value: str) -> tuple[bool, str, int | None]:
    """Installment count asked about in a question like "what about 36 months?"."""
    match = _TERM_RE.search(value)
    if not match:
        return False, "No installment count mentioned.", None
    count = int(match.group(1))
    if count <= 0:
        return False, "Installment count must be positive.", None
    return True, "", count


# ---------------------------------------------------------------------------
# Intent detectors
# ---------------------------------------------------------------------------


def is_greeting(value: str) -> bool:
    return _contains_any(value, _GREETING_KEYWORDS)


def is_help_request(value: str) -> bool:
    return _contains_any(value, _HELP_KEYWORDS)


def wants_lower_installment(value: str) -> bool:
    return _contains_any(value, _LOWER_INSTALLMENT_KEYWORDS)


def is_affirmative(value: str) -> bool:
    return _contains_any(value, _YES_WORDS)


def is_negative(value: str) -> bool:
    return _contains_any(value, _NO_WORDS)


def asks_down_payment_increase(value: str) -> bool:
    return _contains_any(value, _DOWN_PAYMENT_WORDS) and _contains_any(value, _RAISE_WORDS)


_SLOT_PARSERS: dict[ConversationStep, Callable[[str], tuple[bool, str, object]]] = {
    ConversationStep.COLLECTING_PROPERTY: parse_property_id,
    ConversationStep.COLLECTING_RATE: parse_rate,
    ConversationStep.COLLECTING_DOWN_AMOUNT: parse_amount,
    ConversationStep.COLLECTING_DOWN_YEAR: parse_year,
    ConversationStep.COLLECTING_DOWN_MONTH: parse_month,
    ConversationStep.COLLECTING_INSTALLMENT_COUNT: parse_installment_count,
    ConversationStep.AWAITING_LOWER_INSTALLMENT: parse_amount,
}


def parse_slot(step: ConversationStep, value: str) -> tuple[bool, str, object]:
    """Parse ``value`` for the slot ``step`` collects.

    Returns (is_valid, error_message, value). Steps without a slot never parse.
    """
    parser = _SLOT_PARSERS.get(step)
    if parser is None:
        return False, "Nothing to fill in at this step.", None
    return parser(value)
