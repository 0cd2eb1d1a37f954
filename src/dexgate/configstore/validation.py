"""Validation and normalization applied to config values before they are stored.

Rules are matched by path suffix, so a rule for ``allowedSlippage`` covers
``uniswap.allowedSlippage`` and ``raydium.networks.x.allowedSlippage`` alike.
"""

import logging
import re
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Callable, Optional

from dexgate.errors import InvalidRange

logger = logging.getLogger(__name__)

INVALID_ALLOWED_SLIPPAGE = (
    "allowedSlippage should be a number between 0.0 and 1.0 or a string of a fraction."
)

_FLOAT_RE = re.compile(r"-?([0-9]+(\.[0-9]*)?|\.[0-9]+)")
_FRACTION_RE = re.compile(r"[0-9]+/[0-9]+")


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid percentage
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_float_string(value: str) -> bool:
    """Check for a plain decimal numeral such as '0.01' or '-3'."""
    return bool(_FLOAT_RE.fullmatch(value))


def is_fraction_string(value: str) -> bool:
    """Check for an 'a/b' string of non-negative integers."""
    return bool(_FRACTION_RE.fullmatch(value))


def from_fraction_string(value: str) -> Optional[Fraction]:
    """Parse 'a/b' into a Fraction, or None if malformed or b == 0."""
    if not is_fraction_string(value):
        return None
    numerator, denominator = (int(part) for part in value.split("/"))
    if denominator == 0:
        return None
    return Fraction(numerator, denominator)


def to_fraction_string(value: int | float | str) -> str:
    """Render a number or numeric string as a reduced 'a/b' string.

    Uses the decimal text of the value so 0.005 becomes '1/200' rather than
    the binary float's exact ratio.
    """
    fraction = Fraction(str(value))
    return f"{fraction.numerator}/{fraction.denominator}"


def is_allowed_percentage(value: Any) -> bool:
    """Accept fractions in [0.0, 1.0) given as number, numeral string or 'a/b'."""
    if isinstance(value, str):
        if is_float_string(value):
            number = float(value)
            return 0.0 <= number < 1.0
        fraction = from_fraction_string(value)
        return fraction is not None and 0 <= fraction < 1
    if _is_number(value):
        return 0.0 <= value < 1.0
    return False


def validate_allowed_slippage(value: Any) -> None:
    """Raise InvalidRange unless value is an allowed slippage percentage."""
    if not is_allowed_percentage(value):
        raise InvalidRange(INVALID_ALLOWED_SLIPPAGE)


def normalize_allowed_slippage(value: Any) -> Any:
    """Store slippage as a fraction string; fraction strings pass through."""
    if _is_number(value) or (isinstance(value, str) and not is_fraction_string(value)):
        return to_fraction_string(value)
    return value


@dataclass(frozen=True)
class ConfigRule:
    """Validation/normalization applied to paths ending with ``suffix``."""

    suffix: str
    validate: Callable[[Any], None]
    normalize: Callable[[Any], Any] = lambda value: value

    def matches(self, path: str) -> bool:
        return path.endswith(self.suffix)


CONFIG_RULES: tuple[ConfigRule, ...] = (
    ConfigRule(
        suffix="allowedSlippage",
        validate=validate_allowed_slippage,
        normalize=normalize_allowed_slippage,
    ),
)


def prepare_config_value(
    path: str,
    value: Any,
    rules: tuple[ConfigRule, ...] = CONFIG_RULES,
) -> Any:
    """Validate and normalize a value for storage at path.

    Every matching rule validates first, then normalizes the value handed to
    the next rule.

    Raises:
        InvalidRange: A rule rejected the value.
    """
    for rule in rules:
        if rule.matches(path):
            rule.validate(value)
            normalized = rule.normalize(value)
            if normalized != value:
                logger.debug(f"Normalized {path}: {value!r} -> {normalized!r}")
            value = normalized
    return value
