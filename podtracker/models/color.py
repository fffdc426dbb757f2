"""
Color identity naming and normalization.

Maps all 32 WUBRG subsets to their community names. Keys are in
canonical WUBRG order; "C" stands for colorless.
"""

from typing import Literal

ManaColor = Literal["W", "U", "B", "R", "G"]

WUBRG = "WUBRG"
COLORLESS = "C"

COLOR_IDENTITY_NAMES: dict[str, str] = {
    # Colorless
    "C": "Colorless",
    # Mono
    "W": "Mono White",
    "U": "Mono Blue",
    "B": "Mono Black",
    "R": "Mono Red",
    "G": "Mono Green",
    # Guilds
    "WU": "Azorius",
    "WB": "Orzhov",
    "WR": "Boros",
    "WG": "Selesnya",
    "UB": "Dimir",
    "UR": "Izzet",
    "UG": "Simic",
    "BR": "Rakdos",
    "BG": "Golgari",
    "RG": "Gruul",
    # Shards and wedges
    "WUB": "Esper",
    "WUR": "Jeskai",
    "WUG": "Bant",
    "WBR": "Mardu",
    "WBG": "Abzan",
    "WRG": "Naya",
    "UBR": "Grixis",
    "UBG": "Sultai",
    "URG": "Temur",
    "BRG": "Jund",
    # Four color
    "WUBR": "Non-Green",
    "WUBG": "Non-Red",
    "WURG": "Non-Black",
    "WBRG": "Non-Blue",
    "UBRG": "Non-White",
    # Five color
    "WUBRG": "5-Color",
}

MTG_COLOR_HEX: dict[str, str] = {
    "W": "#F9FAF4",
    "U": "#0E68AB",
    "B": "#150B00",
    "R": "#D3202A",
    "G": "#00733E",
}

COLORLESS_HEX = "#71717a"


def normalize_color_identity(ci: str | None) -> str:
    """
    Sort color characters into canonical WUBRG order.

    Characters outside W/U/B/R/G are dropped. Empty, "C", or fully
    invalid input normalizes to "C".
    """
    if not ci or ci == COLORLESS:
        return COLORLESS
    letters = sorted({c for c in ci if c in WUBRG}, key=WUBRG.index)
    return "".join(letters) or COLORLESS


def color_identity_to_string(colors: list[str] | tuple[str, ...]) -> str:
    """Join a color list into the stored identity string ("C" when empty)."""
    return normalize_color_identity("".join(colors))


def get_color_identity_name(ci: str | None) -> str:
    """Get the community name for a color identity string."""
    normalized = normalize_color_identity(ci)
    return COLOR_IDENTITY_NAMES.get(normalized, normalized)


def format_color_identity_label(ci: str | None) -> str:
    """Format as "Name (COLORS)", e.g. "Jeskai (WUR)"."""
    normalized = normalize_color_identity(ci)
    if normalized == COLORLESS:
        return COLOR_IDENTITY_NAMES[COLORLESS]
    return f"{get_color_identity_name(normalized)} ({normalized})"


# --- Chart fills ---


def get_color_gradient_id(ci: str | None) -> str:
    """SVG gradient element id for a color identity."""
    return f"mtg-grad-{normalize_color_identity(ci)}"


def get_color_gradient_fill(ci: str | None) -> str:
    """
    Fill value for a chart bar.

    Solid hex for mono and colorless, a gradient reference otherwise.
    """
    normalized = normalize_color_identity(ci)
    if normalized == COLORLESS:
        return COLORLESS_HEX
    if len(normalized) == 1:
        return MTG_COLOR_HEX.get(normalized, COLORLESS_HEX)
    return f"url(#{get_color_gradient_id(normalized)})"


def _format_percent(value: float) -> str:
    """Render 0.0 as "0" and 50.0 as "50", keeping full precision otherwise."""
    return str(int(value)) if value.is_integer() else repr(value)


def build_color_gradient_defs(color_identities: list[str]) -> list[dict[str, object]]:
    """
    Build linear gradient definitions for multicolor identities.

    Returns one entry per multicolor identity with evenly spaced stops.
    Mono and colorless identities are skipped (they use solid fills).
    """
    defs: list[dict[str, object]] = []
    for ci in color_identities:
        normalized = normalize_color_identity(ci)
        if len(normalized) <= 1 or normalized == COLORLESS:
            continue
        last = len(normalized) - 1
        stops = [
            {
                "offset": f"{_format_percent(i / last * 100)}%",
                "color": MTG_COLOR_HEX.get(c, COLORLESS_HEX),
            }
            for i, c in enumerate(normalized)
        ]
        defs.append({"id": get_color_gradient_id(normalized), "stops": stops})
    return defs
