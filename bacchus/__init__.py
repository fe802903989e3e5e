"""
Bacchus: Widmark-based BAC estimate, drink list, formatting, and graph.
Run the web calculator from project root: python app.py
"""

from bacchus.estimator import (
    BETA,
    ETHANOL_DENSITY,
    LEGAL_LIMIT,
    R_BY_SEX,
    EstimationResult,
    Sex,
    current_bac,
    estimate,
    hours_to_legal_threshold,
    hours_to_zero,
    peak_bac,
    pure_alcohol_grams,
)
from bacchus.drinks import PRESETS, Drink, list_presets
from bacchus.formatting import fmt, fmt_hm, parse_hm
from bacchus.session import CalculatorSession
from bacchus.graph import curve_data, render_bac_graph, save_bac_graph

__all__ = [
    "CalculatorSession",
    "Drink",
    "EstimationResult",
    "Sex",
    "estimate",
    "pure_alcohol_grams",
    "peak_bac",
    "current_bac",
    "hours_to_legal_threshold",
    "hours_to_zero",
    "fmt",
    "fmt_hm",
    "parse_hm",
    "curve_data",
    "render_bac_graph",
    "save_bac_graph",
    "list_presets",
    "PRESETS",
    "BETA",
    "ETHANOL_DENSITY",
    "LEGAL_LIMIT",
    "R_BY_SEX",
]
