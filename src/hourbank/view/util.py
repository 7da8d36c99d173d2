# SPDX-License-Identifier: MIT

from decimal import ROUND_DOWN, Decimal, localcontext

ONE_PLACE = Decimal("0.1")


def format_amount(amount: Decimal) -> str:
    """Render hours with one fractional digit, truncating rather than rounding."""
    with localcontext() as context:
        # room for every integer digit plus the one kept fractional digit
        context.prec = max(context.prec, amount.adjusted() + 2)
        truncated = amount.quantize(ONE_PLACE, rounding=ROUND_DOWN)
    if truncated.is_zero():
        # -0.05 truncates to -0.0
        truncated = Decimal("0.0")
    return f"{truncated:.1f}"


def amount_color(amount: Decimal) -> str:
    if amount < 0:
        return "red"
    if amount > 0:
        return "green"
    return "white"


def colored_amount(amount: Decimal) -> str:
    color = amount_color(amount)
    return f"[{color}]{format_amount(amount)}[/{color}]"
