"""Presentation helpers for rupee amounts and percentages.

Amounts are rounded only here, never inside the estimator.
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext

CENT = Decimal("0.01")


def group_indian(whole: int) -> str:
    """Group an integer the Indian way: 12345678 -> '1,23,45,678'."""
    digits = str(abs(whole))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups: list[str] = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"-{digits}" if whole < 0 else digits


def format_amount(amount: Decimal) -> str:
    """Round half-up to paise and group digits: Decimal('82110') -> '82,110.00'."""
    with localcontext() as ctx:
        # quantize needs every integer digit plus two for paise
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        rounded = amount.quantize(CENT, rounding=ROUND_HALF_UP)
        whole, _, fraction = f"{abs(rounded):f}".partition(".")
    sign = "-" if rounded < 0 else ""
    return f"{sign}{group_indian(int(whole))}.{fraction or '00'}"


def format_inr(amount: Decimal) -> str:
    return f"₹ {format_amount(amount)}"


def format_number(value: Decimal) -> str:
    """Whole numbers without paise ('5,00,000'), anything else via format_amount."""
    if value == value.to_integral_value():
        return group_indian(int(value))
    return format_amount(value)


def plain(value: Decimal) -> str:
    """Shortest non-scientific rendering: Decimal('2.00') -> '2', Decimal('2.50') -> '2.5'."""
    normalized = value.normalize()
    if normalized == 0:
        return "0"
    return f"{normalized:f}"


def format_percent(rate: Decimal) -> str:
    """Decimal('0.14') -> '14%'."""
    return f"{plain(rate * 100)}%"
