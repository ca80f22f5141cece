"""Turn free-text form entries into simulation parameters."""

from __future__ import annotations

import math
import re
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from core.simulation import SimulationParams

MAX_AMOUNT_DIGITS = 12

_FULL_WIDTH_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")
_NON_DIGITS = re.compile(r"\D", re.ASCII)
_LEADING_INT = re.compile(r"^\s*[+-]?\d+", re.ASCII)
_LEADING_FLOAT = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


class RatePreset(BaseModel):
    """Shortcut button for a common annual rate."""

    model_config = ConfigDict(frozen=True)

    label: str
    value: float


def to_half_width(text: str) -> str:
    return text.translate(_FULL_WIDTH_DIGITS)


def group_digits(value: int) -> str:
    return f"{value:,}"


def normalize_amount_text(value: str, previous: str = "", max_digits: int = MAX_AMOUNT_DIGITS) -> str:
    """
    Reformat an amount field after each keystroke.

    Full-width digits become ASCII, anything else is dropped and the result is
    comma-grouped. Input longer than max_digits is refused: the previous text
    is returned unchanged.
    """
    digits = _NON_DIGITS.sub("", to_half_width(value))
    if not digits:
        return ""
    if len(digits) > max_digits:
        return previous
    return group_digits(int(digits))


def _clean(text: Optional[str]) -> str:
    if text is None:
        return ""
    return to_half_width(str(text)).replace(",", "")


def parse_amount(text: Optional[str]) -> int:
    """Leading integer of the text; missing, malformed or negative -> 0."""
    match = _LEADING_INT.match(_clean(text))
    if not match:
        return 0
    return max(int(match.group(0)), 0)


def parse_years(text: Optional[str]) -> int:
    return parse_amount(text)


def parse_rate(text: Optional[str]) -> float:
    """Leading decimal of the text; missing, malformed, non-finite or negative -> 0."""
    match = _LEADING_FLOAT.match(_clean(text))
    if not match:
        return 0.0
    value = float(match.group(0))
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def params_from_form(
    form: Mapping[str, Optional[str]],
    max_digits: int = MAX_AMOUNT_DIGITS,
) -> SimulationParams:
    """
    Assemble a full parameter set from form text.

    Amount fields go through the same digit filter as live input, so text over
    max_digits digits resolves to 0 rather than an oversized number.
    """
    initial_text = normalize_amount_text(form.get("initialAmount") or "", max_digits=max_digits)
    monthly_text = normalize_amount_text(form.get("monthlyAmount") or "", max_digits=max_digits)

    return SimulationParams(
        initialAmount=parse_amount(initial_text),
        monthlyAmount=parse_amount(monthly_text),
        annualRate=parse_rate(form.get("annualRate")),
        durationYears=parse_years(form.get("durationYears")),
    )
