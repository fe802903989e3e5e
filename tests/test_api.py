"""API-level tests for the Flask app."""

import pytest

from app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def state(client):
    res = client.get("/api/state")
    assert res.status_code == 200
    return res.get_json()


def test_healthz(client):
    res = client.get("/healthz")
    assert res.status_code == 200
    assert res.get_json() == {"ok": True}


def test_index_renders_presets(client):
    res = client.get("/")
    assert res.status_code == 200
    body = res.get_data(as_text=True)
    assert "Bacchus" in body
    assert "Verre de vin" in body


def test_presets(client):
    res = client.get("/api/presets")
    presets = res.get_json()["presets"]
    assert [p["key"] for p in presets][:3] == ["beer-25", "beer-33", "beer-50"]


def test_fresh_state_has_default_beer(client):
    data = state(client)
    assert data["sex"] == "male"
    assert data["weight_kg"] == 75
    assert len(data["drinks"]) == 1
    assert data["result"]["gramsPureAlcohol"] == pytest.approx(19.725)
    assert data["display"]["hours_to_zero"] == "2h 35m"
    assert data["legal_status"]["status"] == "alcohol_present"


def test_estimate_stateless(client):
    res = client.post(
        "/api/estimate",
        json={
            "drinks": [{"volumeMl": 500, "abv": 5}, {"volume_cl": 50, "abv": 5}],
            "sex": "male",
            "weightKg": 75,
            "elapsedHours": 0,
        },
    )
    assert res.status_code == 200
    data = res.get_json()
    assert data["result"]["peakBAC"] == pytest.approx(0.7735, abs=1e-4)
    assert data["display"]["hours_to_legal"] == "1h 49m"
    assert data["legal_status"]["status"] == "over_limit"


def test_estimate_empty_drinks(client):
    res = client.post("/api/estimate", json={"drinks": [], "sex": "female", "weightKg": 60, "elapsedHours": 2})
    assert res.status_code == 200
    assert res.get_json()["result"] == {
        "gramsPureAlcohol": 0,
        "peakBAC": 0,
        "currentBAC": 0,
        "hoursToLegalThreshold": 0,
        "hoursToZero": 0,
    }


def test_estimate_clamps_drink_values(client):
    res = client.post("/api/estimate", json={"drinks": [{"volumeMl": -100, "abv": 250}], "sex": "male"})
    assert res.status_code == 200
    drink = res.get_json()["drinks"][0]
    assert drink["volume_ml"] == 0
    assert drink["abv"] == 100


def test_estimate_rejects_bad_input(client):
    assert client.post("/api/estimate", json={"sex": "robot"}).status_code == 400
    assert client.post("/api/estimate", json={"drinks": "beer"}).status_code == 400
    assert client.post("/api/estimate", json={"drinks": [42]}).status_code == 400


@pytest.mark.parametrize("weight", [0, -5])
def test_estimate_non_positive_weight_gives_zero_bac(client, weight):
    res = client.post(
        "/api/estimate",
        json={"drinks": [{"volumeMl": 500, "abv": 5}], "sex": "male", "weightKg": weight, "elapsedHours": 0},
    )
    assert res.status_code == 200
    data = res.get_json()
    assert data["weight_kg"] == weight
    assert data["result"]["gramsPureAlcohol"] == pytest.approx(19.725)
    assert data["result"]["peakBAC"] == 0
    assert data["result"]["hoursToZero"] == 0


def test_estimate_keeps_long_elapsed_hours(client):
    res = client.post(
        "/api/estimate",
        json={"drinks": [{"volumeMl": 500, "abv": 5}], "sex": "male", "weightKg": 75, "elapsedHours": 72},
    )
    data = res.get_json()
    assert data["hours_since_start"] == 72
    assert data["result"]["currentBAC"] == 0


@pytest.mark.parametrize("url", ["/api/estimate", "/api/setup", "/api/drinks"])
def test_non_object_body_is_rejected(client, url):
    res = client.post(url, json=[1, 2])
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_patch_non_object_body_is_rejected(client):
    drink_id = client.post("/api/drinks", json={"preset": "wine"}).get_json()["drink"]["id"]
    res = client.patch(f"/api/drinks/{drink_id}", json="abv")
    assert res.status_code == 400


def test_add_drink_rejects_non_string_preset(client):
    res = client.post("/api/drinks", json={"preset": ["beer-50"]})
    assert res.status_code == 400
    assert "preset" in res.get_json()["error"]
    assert len(state(client)["drinks"]) == 1


def test_setup_clamps_and_parses(client):
    res = client.post("/api/setup", json={"sex": "Female", "weight_kg": "999", "hours_since_start": -3})
    assert res.status_code == 200
    data = res.get_json()
    assert data["sex"] == "female"
    assert data["r"] == 0.55
    assert data["weight_kg"] == 200
    assert data["hours_since_start"] == 0
    assert state(client)["sex"] == "female"


def test_setup_rejects_unknown_sex(client):
    res = client.post("/api/setup", json={"sex": "x"})
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_add_update_remove_drink(client):
    client.post("/api/reset")
    assert state(client)["drinks"] == []

    add = client.post("/api/drinks", json={"preset": "shot"})
    assert add.status_code == 200
    drink_id = add.get_json()["drink"]["id"]

    manual = client.post("/api/drinks", json={"label": "Cidre", "volume_cl": 33, "abv": 4.5})
    assert manual.get_json()["drink"]["volume_ml"] == 330
    assert len(state(client)["drinks"]) == 2

    upd = client.patch(f"/api/drinks/{drink_id}", json={"volume_cl": 8})
    assert upd.status_code == 200
    assert upd.get_json()["drink"]["volume_ml"] == 80
    assert upd.get_json()["drink"]["abv"] == 40

    rm = client.delete(f"/api/drinks/{drink_id}")
    assert rm.status_code == 200
    labels = [d["label"] for d in state(client)["drinks"]]
    assert labels == ["Cidre"]


def test_unknown_drink_and_preset(client):
    assert client.post("/api/drinks", json={"preset": "absinthe"}).status_code == 404
    assert client.patch("/api/drinks/nope", json={"abv": 10}).status_code == 404
    assert client.delete("/api/drinks/nope").status_code == 404


def test_reset_keeps_parameters(client):
    client.post("/api/setup", json={"sex": "female", "weight_kg": 60, "hours_since_start": 1})
    client.post("/api/drinks", json={"preset": "wine"})
    res = client.post("/api/reset")
    assert res.status_code == 200
    data = state(client)
    assert data["drinks"] == []
    assert data["weight_kg"] == 60
    assert data["result"]["currentBAC"] == 0


def test_corrupt_cookie_state_is_replaced(client):
    with client.session_transaction() as sess:
        sess["bacchus_session"] = {"sex": "unknown", "drinks": "nope"}
    data = state(client)
    assert data["sex"] == "male"
    assert len(data["drinks"]) == 1


def test_graph_png(client):
    pytest.importorskip("matplotlib")
    res = client.get("/api/graph.png")
    assert res.status_code == 200
    assert res.mimetype == "image/png"
    assert res.data[:8] == b"\x89PNG\r\n\x1a\n"
