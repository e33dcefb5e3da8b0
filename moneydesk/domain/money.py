"""Currency formatting and percentage helpers shared by every instrument"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from functools import lru_cache

from babel import Locale
from babel.numbers import NumberPattern, format_currency as babel_format_currency, parse_pattern

DEFAULT_CURRENCY = "INR"
DEFAULT_LOCALE = "en_IN"


@lru_cache(maxsize=None)
def _whole_unit_pattern(locale_name: str) -> NumberPattern:
    """Locale's standard currency pattern with the fraction digits dropped"""
    locale = Locale.parse(locale_name)
    # Parse a fresh copy; the pattern on the Locale object is shared CLDR data
    pattern = parse_pattern(locale.currency_formats["standard"].pattern)
    pattern.frac_prec = (0, 0)
    return pattern


def format_currency(amount: float, currency: str = DEFAULT_CURRENCY, locale: str = DEFAULT_LOCALE) -> str:
    """
    Format an amount in whole currency units using locale conventions.

    Rounds half away from zero before formatting, so 107763.50 renders as
    ₹1,07,764 in en_IN. Negative amounts keep the locale's minus sign.

    Example:
        >>> format_currency(107763.26)
        '₹1,07,763'
    """
    whole_units = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return babel_format_currency(
        whole_units,
        currency,
        format=_whole_unit_pattern(locale),
        locale=locale,
        currency_digits=False,
    )


def percentage(numerator: float, denominator: float) -> float:
    """Share of numerator in denominator, in percent; 0.0 when denominator is not positive"""
    if denominator > 0:
        return numerator * 100 / denominator
    return 0.0


@dataclass(frozen=True)
class DisplayOptions:
    """Currency and locale every formatted amount is rendered in"""

    currency: str = DEFAULT_CURRENCY
    locale: str = DEFAULT_LOCALE

    def format(self, amount: float) -> str:
        return format_currency(amount, self.currency, self.locale)
