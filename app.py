"""Bacchus BAC calculator Flask app.

Run from project root:
    python app.py
"""

import logging
import math
import os
from typing import Any

from flask import Flask, Response, jsonify, render_template, request, session as flask_session

from bacchus.drinks import PRESETS, Drink, cl_to_ml, list_presets, make_drink
from bacchus.estimator import BETA, LEGAL_LIMIT, Sex
from bacchus.graph import render_bac_graph
from bacchus.session import CalculatorSession

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SECRET_KEY"] = os.environ.get("APP_SECRET_KEY", "dev-only-change-me")
app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
app.config["SESSION_COOKIE_HTTPONLY"] = True
app.config["SESSION_COOKIE_SECURE"] = os.environ.get("SESSION_COOKIE_SECURE", "0") == "1"

# Input bounds of the screen's form controls.
MIN_WEIGHT_KG = 30.0
MAX_WEIGHT_KG = 200.0
MAX_HOURS_SINCE_START = 48.0
MAX_VOLUME_ML = 5000.0
MAX_DRINKS = 50
SESSION_KEY = "bacchus_session"


def _clamp_float(value: Any, default: float, min_value: float, max_value: float) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        parsed = default
    if not math.isfinite(parsed):
        parsed = default
    return max(min_value, min(max_value, parsed))


def _json_object() -> dict[str, Any] | None:
    """Request body as a dict; None when the body is JSON but not an object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def _bad_body():
    return jsonify({"error": "request body must be a JSON object"}), 400


def _parse_sex(value: Any, default: Sex | None = None) -> Sex | None:
    if value is None and default is not None:
        return default
    try:
        return Sex.parse(value)
    except ValueError:
        return None


def _volume_ml_from(data: dict[str, Any], default: float) -> float:
    """Volume in mL from a payload giving either mL or display cL."""
    if data.get("volume_cl") is not None:
        volume_cl = _clamp_float(data["volume_cl"], default / 10, 0.0, MAX_VOLUME_ML / 10)
        return cl_to_ml(volume_cl)
    raw = data.get("volume_ml", data.get("volumeMl"))
    return _clamp_float(raw, default, 0.0, MAX_VOLUME_ML)


def _abv_from(data: dict[str, Any], default: float) -> float:
    return _clamp_float(data.get("abv"), default, 0.0, 100.0)


def _session_from_cookie(raw: Any) -> CalculatorSession | None:
    if not isinstance(raw, dict):
        return None
    try:
        model = CalculatorSession.from_dict(raw)
    except (TypeError, ValueError, AttributeError) as exc:
        logger.warning("Discarding unreadable calculator state: %s", exc)
        return None
    model.weight_kg = _clamp_float(model.weight_kg, 75.0, MIN_WEIGHT_KG, MAX_WEIGHT_KG)
    model.hours_since_start = _clamp_float(model.hours_since_start, 0.0, 0.0, MAX_HOURS_SINCE_START)
    model.drinks = model.drinks[:MAX_DRINKS]
    return model


def get_session() -> CalculatorSession:
    model = _session_from_cookie(flask_session.get(SESSION_KEY))
    return model if model is not None else CalculatorSession()


def set_session(model: CalculatorSession) -> None:
    flask_session[SESSION_KEY] = model.to_dict()


def _not_found(what: str):
    return jsonify({"error": f"{what} not found"}), 404


@app.route("/")
def index():
    return render_template(
        "index.html",
        presets=list_presets(),
        legal_limit=LEGAL_LIMIT,
        beta=BETA,
    )


@app.route("/healthz")
def healthz():
    return jsonify({"ok": True})


@app.route("/api/presets")
def api_presets():
    return jsonify({
        "presets": [
            {"key": p.key, "label": p.label, "button": p.button, "volume_ml": p.volume_ml, "abv": p.abv}
            for p in PRESETS.values()
        ]
    })


@app.route("/api/estimate", methods=["POST"])
def api_estimate():
    """Stateless estimate from a full set of inputs."""
    data = _json_object()
    if data is None:
        return _bad_body()
    sex = _parse_sex(data.get("sex"), default=Sex.MALE)
    if sex is None:
        return jsonify({"error": "sex must be male or female"}), 400

    drinks_raw = data.get("drinks", [])
    if not isinstance(drinks_raw, list):
        return jsonify({"error": "drinks must be a list"}), 400
    if len(drinks_raw) > MAX_DRINKS:
        return jsonify({"error": f"at most {MAX_DRINKS} drinks"}), 400

    drinks = []
    for raw in drinks_raw:
        if not isinstance(raw, dict):
            return jsonify({"error": "each drink must be an object"}), 400
        drinks.append(
            Drink(
                label=str(raw.get("label", "Boisson"))[:80],
                volume_ml=_volume_ml_from(raw, 0.0),
                abv=_abv_from(raw, 0.0),
            )
        )

    model = CalculatorSession(
        sex=sex,
        weight_kg=_clamp_float(data.get("weight_kg", data.get("weightKg")), 75.0, -math.inf, MAX_WEIGHT_KG),
        hours_since_start=_clamp_float(
            data.get("hours_since_start", data.get("elapsedHours")), 0.0, -math.inf, math.inf
        ),
        drinks=drinks,
    )
    return jsonify(model.summary())


@app.route("/api/state")
def api_state():
    return jsonify(get_session().summary())


@app.route("/api/setup", methods=["POST"])
def api_setup():
    model = get_session()
    data = _json_object()
    if data is None:
        return _bad_body()

    if "sex" in data:
        sex = _parse_sex(data["sex"])
        if sex is None:
            return jsonify({"error": "sex must be male or female"}), 400
        model.sex = sex
    if "weight_kg" in data:
        model.weight_kg = _clamp_float(data["weight_kg"], model.weight_kg, MIN_WEIGHT_KG, MAX_WEIGHT_KG)
    if "hours_since_start" in data:
        model.hours_since_start = _clamp_float(
            data["hours_since_start"], model.hours_since_start, 0.0, MAX_HOURS_SINCE_START
        )

    set_session(model)
    logger.info("Setup sex=%s weight_kg=%s hours=%s", model.sex.value, model.weight_kg, model.hours_since_start)
    return jsonify(model.summary())


@app.route("/api/drinks", methods=["POST"])
def api_drink_add():
    model = get_session()
    if len(model.drinks) >= MAX_DRINKS:
        return jsonify({"error": f"at most {MAX_DRINKS} drinks"}), 400

    data = _json_object()
    if data is None:
        return _bad_body()
    preset_key = data.get("preset")
    if preset_key:
        if not isinstance(preset_key, str):
            return jsonify({"error": "preset must be a string"}), 400
        if preset_key not in PRESETS:
            return _not_found("Preset")
        drink = model.add_preset(preset_key)
    else:
        label = data.get("label")
        drink = model.add_drink(
            make_drink(
                label=None if label is None else str(label)[:80],
                volume_ml=_volume_ml_from(data, 500.0),
                abv=_abv_from(data, 5.0),
            )
        )

    set_session(model)
    logger.info("Added drink %s (%s mL, %s%%)", drink.id, drink.volume_ml, drink.abv)
    return jsonify({"ok": True, "drink": drink.to_dict(), **model.summary()})


@app.route("/api/drinks/<drink_id>", methods=["PATCH"])
def api_drink_update(drink_id: str):
    model = get_session()
    current = next((d for d in model.drinks if d.id == drink_id), None)
    if current is None:
        return _not_found("Drink")

    data = _json_object()
    if data is None:
        return _bad_body()
    patch: dict[str, Any] = {}
    if "label" in data:
        patch["label"] = str(data["label"])[:80]
    if any(k in data for k in ("volume_ml", "volumeMl", "volume_cl")):
        patch["volume_ml"] = _volume_ml_from(data, current.volume_ml)
    if "abv" in data:
        patch["abv"] = _abv_from(data, current.abv)

    drink = model.update_drink(drink_id, **patch)
    set_session(model)
    return jsonify({"ok": True, "drink": drink.to_dict(), **model.summary()})


@app.route("/api/drinks/<drink_id>", methods=["DELETE"])
def api_drink_remove(drink_id: str):
    model = get_session()
    if not model.remove_drink(drink_id):
        return _not_found("Drink")
    set_session(model)
    logger.info("Removed drink %s", drink_id)
    return jsonify({"ok": True, **model.summary()})


@app.route("/api/reset", methods=["POST"])
def api_reset():
    model = get_session()
    model.clear_drinks()
    set_session(model)
    return jsonify({"ok": True, **model.summary()})


@app.route("/api/graph.png")
def api_graph():
    png = render_bac_graph(get_session())
    return Response(png, mimetype="image/png")


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "0") == "1")
