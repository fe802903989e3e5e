"""Legal-limit status for the current BAC estimate.

Messaging is informative only: an estimate never replaces a breathalyser.
"""

from bacchus.estimator import BETA, LEGAL_LIMIT
from bacchus.formatting import fmt_hm

DISCLAIMER = (
    "Outil informatif qui ne remplace pas un éthylotest. "
    "Les calculs sont des estimations et peuvent varier selon de nombreux facteurs "
    "(absorption, métabolisme, médicaments). Ne conduisez pas si vous avez bu."
)


def legal_status(current_bac: float, hours_to_legal: float, hours_to_zero: float) -> dict:
    """Return display status for the current BAC against the legal limit."""
    if current_bac >= LEGAL_LIMIT:
        return {
            "status": "over_limit",
            "title": "Au-dessus du seuil légal",
            "message": f"Taux estimé au-dessus de {LEGAL_LIMIT} g/L. Ne conduisez pas.",
            "action": f"Attendez au moins {fmt_hm(hours_to_legal)} avant de repasser sous le seuil.",
            "legal_limit": LEGAL_LIMIT,
            "disclaimer": DISCLAIMER,
        }

    if current_bac > 0:
        return {
            "status": "alcohol_present",
            "title": "Alcool encore présent",
            "message": "Taux estimé sous le seuil légal mais pas nul.",
            "action": f"Retour à 0 estimé dans {fmt_hm(hours_to_zero)} ({BETA} g/L/h).",
            "legal_limit": LEGAL_LIMIT,
            "disclaimer": DISCLAIMER,
        }

    return {
        "status": "ok",
        "title": "Aucun alcool estimé",
        "message": "Taux estimé à 0 g/L.",
        "action": "Aucune attente estimée.",
        "legal_limit": LEGAL_LIMIT,
        "disclaimer": DISCLAIMER,
    }
