"""
Preset Registry

Static catalog of the instruction presets a user can toggle instead of, or
alongside, free-text instructions. Each preset has a stable identifier, the
human-readable label that goes into the synthesis prompt and, for some, a
literal sub-pattern fragment shown as a hint.

Usage:
    from patternsmith.presets import PresetId, lookup, all_presets

    email = lookup(PresetId.EMAIL)
    email.label        # "Email"
    lookup("url")      # string ids coming from external state also work
    all_presets()      # fixed catalog order
"""

from dataclasses import dataclass
from enum import Enum

from patternsmith.errors import PresetNotFoundError


class PresetId(str, Enum):
    """Closed set of preset identifiers."""

    EMAIL = "email"
    PHONE = "phone"
    URL = "url"
    DATE = "date"
    TIME = "time"
    IP_ADDRESS = "ip_address"
    HEX_COLOR = "hex_color"
    ZIP_CODE = "zip_code"
    UUID = "uuid"


@dataclass(frozen=True)
class Preset:
    """A named instruction fragment.

    Attributes:
        id: Registry identifier
        label: Text placed in the synthesis prompt
        fragment: Optional literal sub-pattern for display
    """

    id: PresetId
    label: str
    fragment: str | None = None


_CATALOG: tuple[Preset, ...] = (
    Preset(PresetId.EMAIL, "Email", r"[\w.%+-]+@[\w.-]+\.[a-z]{2,}"),
    Preset(PresetId.PHONE, "Phone number"),
    Preset(PresetId.URL, "URL", r"https?://[^\s/$.?#].[^\s]*"),
    Preset(PresetId.DATE, "Date", r"\d{4}-\d{2}-\d{2}"),
    Preset(PresetId.TIME, "Time", r"(?:[01]?\d|2[0-3]):[0-5]\d"),
    Preset(PresetId.IP_ADDRESS, "IP address"),
    Preset(PresetId.HEX_COLOR, "Hex color", r"#(?:[0-9a-f]{3}){1,2}\b"),
    Preset(PresetId.ZIP_CODE, "ZIP code", r"\b\d{5}(?:-\d{4})?\b"),
    Preset(PresetId.UUID, "UUID"),
)

_BY_ID: dict[PresetId, Preset] = {preset.id: preset for preset in _CATALOG}


def lookup(preset_id: PresetId | str) -> Preset:
    """Return the preset registered under ``preset_id``.

    Args:
        preset_id: A :class:`PresetId` or its string value

    Raises:
        PresetNotFoundError: If the id is not in the catalog
    """
    try:
        key = PresetId(preset_id)
    except ValueError:
        available = ", ".join(p.value for p in PresetId)
        raise PresetNotFoundError(
            f"Preset '{preset_id}' not found. Available presets: {available}"
        ) from None
    return _BY_ID[key]


def all_presets() -> tuple[Preset, ...]:
    """Return every preset in catalog order."""
    return _CATALOG
