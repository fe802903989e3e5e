"""
BAC-over-time graph. Produces PNG bytes/file or returns data for the screen.
"""

import io
from pathlib import Path
from typing import List, Optional, Tuple

from bacchus.estimator import LEGAL_LIMIT, current_bac, hours_to_zero
from bacchus.session import CalculatorSession


def curve_data(peak: float, step_hours: float = 0.25, max_hours: Optional[float] = None) -> List[Tuple[float, float]]:
    """(hours_since_start, bac_g_per_l) from the first drink until BAC is back to 0."""
    if step_hours <= 0:
        raise ValueError("step_hours must be > 0")

    end = hours_to_zero(peak)
    if max_hours is not None:
        end = min(end, max_hours)

    points: List[Tuple[float, float]] = []
    i = 0
    t = 0.0
    while t < end:
        points.append((t, current_bac(peak, t)))
        i += 1
        t = i * step_hours
    points.append((end, current_bac(peak, end)))
    return points


def _plot(session: CalculatorSession, output, step_hours: float, title: str) -> None:
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib is required for BAC graphs. pip install matplotlib")

    result = session.result()
    points = curve_data(result.peak_bac, step_hours=step_hours)
    times, bacs = zip(*points)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(times, bacs, color="#1e3a8a", linewidth=2, label="TA estimé")
    ax.fill_between(times, bacs, alpha=0.2, color="#1e3a8a")
    ax.axhline(y=LEGAL_LIMIT, color="#dc2626", linestyle="--", linewidth=1, label=f"Seuil légal ({LEGAL_LIMIT} g/L)")
    ax.plot([max(0.0, session.hours_since_start)], [result.current_bac], "o", color="#047857", label="Maintenant")
    ax.set_xlabel("Heures depuis la 1re boisson")
    ax.set_ylabel("TA (g/L)")
    ax.set_title(title)
    ax.legend(loc="upper right")
    ax.set_ylim(bottom=0)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(output, dpi=150, format="png")
    plt.close(fig)


def render_bac_graph(session: CalculatorSession, step_hours: float = 0.25, title: str = "Taux d'alcool estimé") -> bytes:
    """Plot the session's BAC curve and return it as PNG bytes."""
    buf = io.BytesIO()
    _plot(session, buf, step_hours, title)
    return buf.getvalue()


def save_bac_graph(
    session: CalculatorSession,
    output_path: str = "bac_graph.png",
    step_hours: float = 0.25,
    title: str = "Taux d'alcool estimé",
) -> str:
    """
    Plot the session's BAC curve and save it to file.
    Returns path to saved file. Requires: pip install matplotlib
    """
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    _plot(session, output_path, step_hours, title)
    return output_path
