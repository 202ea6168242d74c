from typing import Optional


def format_currency(amount: Optional[int]) -> str:
    """Whole US dollars with thousands separators: 1250 -> "$1,250"."""
    value = amount or 0
    if value < 0:
        return f"-${abs(value):,.0f}"
    return f"${value:,.0f}"
