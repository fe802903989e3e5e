"""
Calculator session: subject parameters, drink list, and the derived estimate.
The drink list is replaced on every edit, never mutated in place.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from bacchus import drinks as drink_ops
from bacchus.advice import legal_status
from bacchus.drinks import Drink
from bacchus.estimator import LEGAL_LIMIT, EstimationResult, Sex, estimate, r_for
from bacchus.formatting import fmt, fmt_hm

DEFAULT_WEIGHT_KG = 75.0


@dataclass
class CalculatorSession:
    sex: Sex = Sex.MALE
    weight_kg: float = DEFAULT_WEIGHT_KG
    hours_since_start: float = 0.0
    drinks: List[Drink] = field(default_factory=drink_ops.default_drinks)

    def __post_init__(self) -> None:
        self.sex = Sex.parse(self.sex)

    @property
    def r(self) -> float:
        return r_for(self.sex)

    def add_drink(self, drink: Optional[Drink] = None) -> Drink:
        drink = drink or drink_ops.make_drink()
        self.drinks = drink_ops.add_drink(self.drinks, drink)
        return drink

    def add_preset(self, preset_key: str) -> Drink:
        return self.add_drink(drink_ops.drink_from_preset(preset_key))

    def update_drink(self, drink_id: str, **patch) -> Optional[Drink]:
        self.drinks = drink_ops.update_drink(self.drinks, drink_id, **patch)
        return drink_ops.find_drink(self.drinks, drink_id)

    def remove_drink(self, drink_id: str) -> bool:
        before = len(self.drinks)
        self.drinks = drink_ops.remove_drink(self.drinks, drink_id)
        return len(self.drinks) < before

    def clear_drinks(self) -> None:
        self.drinks = []

    def result(self) -> EstimationResult:
        return estimate(self.drinks, self.sex, self.weight_kg, self.hours_since_start)

    def summary(self) -> dict:
        res = self.result()
        return {
            "sex": self.sex.value,
            "r": self.r,
            "weight_kg": self.weight_kg,
            "hours_since_start": self.hours_since_start,
            "legal_limit": LEGAL_LIMIT,
            "drinks": [
                {**d.to_dict(), "volume_cl": drink_ops.ml_to_cl(d.volume_ml), "grams": d.grams, "grams_display": fmt(d.grams, 1)}
                for d in self.drinks
            ],
            "result": res.to_dict(),
            "display": {
                "grams": f"{fmt(res.grams_pure_alcohol, 1)} g",
                "peak_bac": f"{fmt(res.peak_bac, 2)} g/L",
                "current_bac": f"{fmt(res.current_bac, 2)} g/L",
                "elapsed": fmt_hm(self.hours_since_start),
                "hours_to_legal": fmt_hm(res.hours_to_legal),
                "hours_to_zero": fmt_hm(res.hours_to_zero),
            },
            "legal_status": legal_status(res.current_bac, res.hours_to_legal, res.hours_to_zero),
        }

    def to_dict(self) -> dict:
        return {
            "sex": self.sex.value,
            "weight_kg": self.weight_kg,
            "hours_since_start": self.hours_since_start,
            "drinks": [d.to_dict() for d in self.drinks],
        }

    @classmethod
    def from_dict(cls, raw: dict) -> "CalculatorSession":
        return cls(
            sex=Sex.parse(raw.get("sex", Sex.MALE)),
            weight_kg=float(raw.get("weight_kg", DEFAULT_WEIGHT_KG)),
            hours_since_start=float(raw.get("hours_since_start", 0.0)),
            drinks=[Drink.from_dict(d) for d in raw.get("drinks", [])],
        )
