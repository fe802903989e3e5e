"""Drink entries, quick presets and list editing helpers.

Volumes are stored in mL; the screen shows and edits them in cL.
"""

import random
import string
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from bacchus.estimator import ETHANOL_DENSITY

DEFAULT_LABEL = "Boisson"
DEFAULT_VOLUME_ML = 500.0
DEFAULT_ABV = 5.0

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 7

EDITABLE_FIELDS = ("label", "volume_ml", "abv")


def new_id() -> str:
    """Random base-36 key for a list entry."""
    return "".join(random.choices(_ID_ALPHABET, k=_ID_LENGTH))


def cl_to_ml(volume_cl: float) -> float:
    return volume_cl * 10


def ml_to_cl(volume_ml: float) -> float:
    return volume_ml / 10


@dataclass
class Drink:
    """One consumed drink."""

    label: str = DEFAULT_LABEL
    volume_ml: float = DEFAULT_VOLUME_ML
    abv: float = DEFAULT_ABV  # % vol, e.g. 5 for 5%
    id: str = field(default_factory=new_id)

    @property
    def grams(self) -> float:
        """Grams of pure alcohol in this drink alone."""
        return self.volume_ml * (self.abv / 100) * ETHANOL_DENSITY

    def to_dict(self) -> dict:
        return {"id": self.id, "label": self.label, "volume_ml": self.volume_ml, "abv": self.abv}

    @classmethod
    def from_dict(cls, raw: dict) -> "Drink":
        return cls(
            id=str(raw.get("id") or new_id()),
            label=str(raw.get("label", DEFAULT_LABEL)),
            volume_ml=float(raw.get("volume_ml", DEFAULT_VOLUME_ML)),
            abv=float(raw.get("abv", DEFAULT_ABV)),
        )


@dataclass(frozen=True)
class Preset:
    key: str
    label: str  # label given to the drink
    button: str  # text of the quick-add button
    volume_ml: float
    abv: float


# Quick presets, in button order.
PRESETS: Dict[str, Preset] = {
    p.key: p
    for p in (
        Preset("beer-25", "Bière 25 cL (5%)", "🍺 Bière 25 cL", 250.0, 5.0),
        Preset("beer-33", "Bière 33 cL (5%)", "🍺 Bière 33 cL", 330.0, 5.0),
        Preset("beer-50", "Bière 50 cL (5%)", "🍺 Bière 50 cL", 500.0, 5.0),
        Preset("wine", "Vin 12 cL (12%)", "🍷 Verre de vin", 120.0, 12.0),
        Preset("shot", "Shot 4 cL (40%)", "🥃 Shot 4 cL", 40.0, 40.0),
        Preset("cocktail", "Cocktail 20 cL (10%)", "🍹 Cocktail", 200.0, 10.0),
    )
}


def list_presets() -> List[Tuple[str, str]]:
    """Return list of (key, button text) for the preset buttons."""
    return [(p.key, p.button) for p in PRESETS.values()]


def make_drink(label: Optional[str] = None, volume_ml: Optional[float] = None, abv: Optional[float] = None) -> Drink:
    return Drink(
        label=DEFAULT_LABEL if label is None else label,
        volume_ml=DEFAULT_VOLUME_ML if volume_ml is None else volume_ml,
        abv=DEFAULT_ABV if abv is None else abv,
    )


def drink_from_preset(key: str) -> Drink:
    preset = PRESETS[key]
    return Drink(label=preset.label, volume_ml=preset.volume_ml, abv=preset.abv)


def default_drinks() -> List[Drink]:
    """Starting list of a fresh calculator."""
    return [Drink(label="Bière (50 cL, 5%)", volume_ml=500.0, abv=5.0)]


def find_drink(drinks: List[Drink], drink_id: str) -> Optional[Drink]:
    return next((d for d in drinks if d.id == drink_id), None)


def add_drink(drinks: List[Drink], drink: Drink) -> List[Drink]:
    return [*drinks, drink]


def update_drink(drinks: List[Drink], drink_id: str, **patch) -> List[Drink]:
    """Return a new list with the matching drink's fields replaced."""
    unknown = set(patch) - set(EDITABLE_FIELDS)
    if unknown:
        raise TypeError(f"cannot update drink fields: {', '.join(sorted(unknown))}")
    return [replace(d, **patch) if d.id == drink_id else d for d in drinks]


def remove_drink(drinks: List[Drink], drink_id: str) -> List[Drink]:
    return [d for d in drinks if d.id != drink_id]
