"""Amount parsing and formatting utilities."""

from decimal import Decimal, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")
CURRENCY_SYMBOL = "R$"

# "1.234", "12.345.678": every group after the first has three digits
_GROUPED_THOUSANDS = re.compile(r"^[0-9]{1,3}(\.[0-9]{3})+$")
_DIGITS = re.compile(r"^[0-9]*$")


def quantize_amount(amount: Decimal) -> Decimal:
    """Round an amount to two fractional digits."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal with two fractional digits.

    Handles various formats:
    - "123.45", "7.5" (a single dot followed by one or two digits is decimal)
    - "1234,56"
    - "1.234,56" (dots group thousands when a comma is present)
    - "R$ 1.234,56"
    - "1.234" and "1.234.567" (dots followed by three-digit groups are
      thousands separators, so "1.234" is 1234.00)
    - "(123,45)" (negative in parentheses)

    Input is never rounded. More than two fractional digits, a dot after the
    decimal comma ("1,234.56") or misplaced thousands separators are errors.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount with exactly two fractional digits

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    original = amount_str
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and whitespace
    amount_str = amount_str.replace(CURRENCY_SYMBOL, "")
    amount_str = re.sub(r"[$€£¥\s]", "", amount_str)

    sign = ""
    if amount_str[:1] in ("-", "+"):
        sign, amount_str = amount_str[0], amount_str[1:]

    if "," in amount_str:
        integer, _, fraction = amount_str.rpartition(",")
        if "." in fraction:
            raise ValueError(f"Could not parse amount '{original}': dot after the decimal comma")
        if not fraction:
            raise ValueError(f"Could not parse amount '{original}': missing digits after the comma")
    elif _GROUPED_THOUSANDS.match(amount_str):
        integer, fraction = amount_str, ""
    elif amount_str.count(".") == 1:
        integer, _, fraction = amount_str.partition(".")
    else:
        integer, fraction = amount_str, ""

    if "." in integer:
        if not _GROUPED_THOUSANDS.match(integer):
            raise ValueError(f"Could not parse amount '{original}': misplaced thousands separator")
        integer = integer.replace(".", "")

    if not integer or not _DIGITS.match(integer) or not _DIGITS.match(fraction):
        raise ValueError(f"Could not parse amount '{original}'")
    if len(fraction) > 2:
        raise ValueError(
            f"Could not parse amount '{original}': more than two fractional digits"
        )

    amount = Decimal(f"{sign}{integer}.{fraction or '0'}")
    if is_negative:
        amount = -amount
    return quantize_amount(amount)


def format_currency(value: Decimal | int | float | str | None) -> str:
    """Format an amount for display, e.g. ``R$ 1.234,56``.

    None renders as zero. Strings are run through :func:`parse_amount`.
    """
    if value is None:
        amount = Decimal("0")
    elif isinstance(value, str):
        amount = parse_amount(value)
    else:
        amount = Decimal(str(value))

    amount = quantize_amount(amount)
    sign = "-" if amount < 0 else ""
    # Format with US separators, then swap them
    grouped = f"{abs(amount):,.2f}"
    grouped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{CURRENCY_SYMBOL} {grouped}"
