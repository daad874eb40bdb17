"""Display helpers for amounts, percentages and statuses."""

from typing import Optional

from rich.theme import Theme

from tradejournal.models import DayStatus

STATUS_COLORS = {
    DayStatus.LOSING: "red",
    DayStatus.TARGET_FAILED: "dark_orange",
    DayStatus.MARKET_HOLIDAY: "grey50",
    DayStatus.SPECIAL_OCCASION: "grey50",
    DayStatus.NO_TRADE: "grey50",
    DayStatus.TARGET_ACHIEVED: "green",
    DayStatus.UNKNOWN: "magenta",
}

THEMES = {
    "light": Theme({
        "profit": "green4",
        "loss": "red3",
        "muted": "grey42",
        "header": "bold blue",
        "today": "on light_sky_blue1",
    }),
    "dark": Theme({
        "profit": "bright_green",
        "loss": "bright_red",
        "muted": "grey62",
        "header": "bold cyan",
        "today": "on dark_blue",
    }),
}
THEMES["system"] = THEMES["dark"]


def group_indian(number: int) -> str:
    """Group digits the Indian way: 12,34,567."""
    digits = str(abs(number))
    if len(digits) <= 3:
        grouped = digits
    else:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        grouped = ",".join(pairs) + "," + tail
    return f"-{grouped}" if number < 0 else grouped


def format_inr(value: Optional[float], signed: bool = False) -> str:
    """Format an amount in rupees without decimals, e.g. ``₹1,00,000``.

    Args:
        value: Amount, or None for a blank.
        signed: Prefix positive amounts with ``+``.
    """
    if value is None:
        return ""
    rounded = int(round(value))
    sign = "-" if rounded < 0 else ("+" if signed and rounded > 0 else "")
    return f"{sign}₹{group_indian(abs(rounded))}"


def pnl_style(value: float) -> str:
    """Theme style for a profit figure."""
    if value > 0:
        return "profit"
    if value < 0:
        return "loss"
    return ""


def styled_inr(value: float, signed: bool = True) -> str:
    """Rupee amount wrapped in rich markup for its sign."""
    text = format_inr(value, signed=signed)
    style = pnl_style(value)
    return f"[{style}]{text}[/{style}]" if style else text


def status_markup(status: Optional[DayStatus]) -> str:
    """Status label coloured by status."""
    if status is None:
        return ""
    color = STATUS_COLORS[status]
    return f"[{color}]● {status.label}[/{color}]"
