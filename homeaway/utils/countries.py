"""Country lookups for listing cards."""

from dataclasses import dataclass
from typing import Optional

import pycountry

NAME_DISPLAY_LIMIT = 20

# Offset from an ASCII capital letter to its regional indicator symbol
_REGIONAL_INDICATOR_OFFSET = 0x1F1E6 - ord("A")


@dataclass(frozen=True)
class Country:
    code: str
    name: str
    flag: str


def flag_emoji(code: str) -> str:
    """Two-letter ISO code to flag emoji, e.g. "US" -> "🇺🇸"."""
    return "".join(chr(ord(ch) + _REGIONAL_INDICATOR_OFFSET) for ch in code.upper())


def find_country_by_code(code: Optional[str]) -> Optional[Country]:
    if not code or len(code.strip()) != 2:
        return None
    match = pycountry.countries.get(alpha_2=code.strip().upper())
    if match is None:
        return None
    # common_name is shorter where pycountry carries one ("Bolivia" vs "Bolivia, Plurinational State of")
    name = getattr(match, "common_name", None) or match.name
    return Country(code=match.alpha_2, name=name, flag=flag_emoji(match.alpha_2))


def truncate_name(name: str, limit: int = NAME_DISPLAY_LIMIT) -> str:
    if len(name) > limit:
        return f"{name[:limit]}..."
    return name


def format_country_name(code: str, limit: int = NAME_DISPLAY_LIMIT) -> str:
    country = find_country_by_code(code)
    if country is None:
        return code
    return truncate_name(country.name, limit)


def country_flag_and_name(code: str) -> str:
    """Flag followed by the (possibly truncated) country name."""
    country = find_country_by_code(code)
    if country is None:
        return code
    return f"{country.flag} {truncate_name(country.name)}"
