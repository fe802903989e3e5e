"""Widmark BAC estimation with linear elimination.

Model:
- Pure alcohol: grams = volume_ml * (abv / 100) * 0.789
- Peak: BAC (g/L) = grams / (weight_kg * r)
- r = 0.68 (male), 0.55 (female)
- Elimination: 0.15 g/L per hour, floored at 0
- Legal driving limit: 0.5 g/L
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Mapping, Union

logger = logging.getLogger(__name__)

# Ethanol density (g/mL) for volume x ABV -> grams.
ETHANOL_DENSITY = 0.789

# Elimination rate (g/L per hour).
BETA = 0.15

# Legal driving limit (g/L).
LEGAL_LIMIT = 0.5


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: Union["Sex", str]) -> "Sex":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"sex must be 'male' or 'female', got {value!r}") from None


# Distribution ratio (Widmark r)
R_BY_SEX: Dict[Sex, float] = {
    Sex.MALE: 0.68,
    Sex.FEMALE: 0.55,
}


def r_for(sex: Union[Sex, str]) -> float:
    return R_BY_SEX[Sex.parse(sex)]


@dataclass(frozen=True)
class EstimationResult:
    grams_pure_alcohol: float
    peak_bac: float
    current_bac: float
    hours_to_legal: float
    hours_to_zero: float

    def to_dict(self) -> dict:
        """Result keyed the way the screen reads it."""
        return {
            "gramsPureAlcohol": self.grams_pure_alcohol,
            "peakBAC": self.peak_bac,
            "currentBAC": self.current_bac,
            "hoursToLegalThreshold": self.hours_to_legal,
            "hoursToZero": self.hours_to_zero,
        }


def _volume_and_abv(drink) -> tuple:
    if isinstance(drink, (tuple, list)):
        volume_ml, abv = drink
        return volume_ml, abv
    if isinstance(drink, Mapping):
        return drink.get("volume_ml", drink.get("volumeMl")), drink["abv"]
    return drink.volume_ml, drink.abv


def pure_alcohol_grams(drinks: Iterable) -> float:
    """Grams of ethanol in drinks given as Drink objects, (volume_ml, abv) pairs,
    or mappings with volume_ml (or volumeMl) and abv keys.
    """
    grams = 0.0
    for drink in drinks:
        volume_ml, abv = _volume_and_abv(drink)
        grams += volume_ml * (abv / 100) * ETHANOL_DENSITY
    return grams


def peak_bac(grams_alcohol: float, weight_kg: float, sex: Union[Sex, str] = Sex.MALE) -> float:
    """BAC (g/L) if all alcohol were absorbed at once. Zero for weight <= 0."""
    if weight_kg <= 0:
        return 0.0
    return grams_alcohol / (weight_kg * r_for(sex))


def current_bac(peak: float, elapsed_hours: float) -> float:
    """Peak BAC minus linear elimination since the first drink."""
    return max(0.0, peak - BETA * max(0.0, elapsed_hours))


def hours_to_legal_threshold(bac: float) -> float:
    """Hours until BAC is at or below the legal limit (0 if already there)."""
    if bac <= LEGAL_LIMIT:
        return 0.0
    return (bac - LEGAL_LIMIT) / BETA


def hours_to_zero(bac: float) -> float:
    return bac / BETA


def estimate(
    drinks: Iterable,
    sex: Union[Sex, str],
    weight_kg: float,
    elapsed_hours: float,
) -> EstimationResult:
    """Run the full estimation: grams -> peak -> current -> time estimates."""
    grams = pure_alcohol_grams(drinks)
    peak = peak_bac(grams, weight_kg, sex)
    now = current_bac(peak, elapsed_hours)
    result = EstimationResult(
        grams_pure_alcohol=grams,
        peak_bac=peak,
        current_bac=now,
        hours_to_legal=hours_to_legal_threshold(now),
        hours_to_zero=hours_to_zero(now),
    )
    logger.debug("estimate sex=%s weight_kg=%s elapsed=%s -> %s", sex, weight_kg, elapsed_hours, result)
    return result
