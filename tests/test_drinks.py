"""Drink list and preset tests."""
import pytest

from bacchus.drinks import (
    PRESETS,
    Drink,
    add_drink,
    cl_to_ml,
    default_drinks,
    drink_from_preset,
    list_presets,
    make_drink,
    ml_to_cl,
    new_id,
    remove_drink,
    update_drink,
)


def test_new_id_shape():
    ids = {new_id() for _ in range(200)}
    assert len(ids) == 200
    assert all(len(i) == 7 and i.isalnum() and i == i.lower() for i in ids)


def test_unit_conversion():
    assert cl_to_ml(50) == 500
    assert ml_to_cl(330) == 33


def test_drink_grams():
    assert Drink(volume_ml=40, abv=40).grams == pytest.approx(12.624)


def test_make_drink_defaults():
    d = make_drink()
    assert (d.label, d.volume_ml, d.abv) == ("Boisson", 500.0, 5.0)
    assert make_drink(abv=0).abv == 0


def test_presets_in_button_order():
    keys = [k for k, _ in list_presets()]
    assert keys == ["beer-25", "beer-33", "beer-50", "wine", "shot", "cocktail"]
    wine = drink_from_preset("wine")
    assert (wine.label, wine.volume_ml, wine.abv) == ("Vin 12 cL (12%)", 120.0, 12.0)
    with pytest.raises(KeyError):
        drink_from_preset("absinthe")
    assert len(PRESETS) == 6


def test_default_drinks():
    (d,) = default_drinks()
    assert d.volume_ml == 500 and d.abv == 5


def test_add_drink_returns_new_list():
    drinks = default_drinks()
    extra = make_drink(volume_ml=330)
    updated = add_drink(drinks, extra)
    assert len(drinks) == 1
    assert updated[-1] is extra
    assert len(updated) == 2


def test_update_drink_patches_only_target():
    a, b = Drink(label="a"), Drink(label="b")
    drinks = [a, b]
    updated = update_drink(drinks, b.id, volume_ml=250, label="petite")
    assert drinks[1].volume_ml == 500
    assert updated[0] is a
    assert (updated[1].label, updated[1].volume_ml, updated[1].id) == ("petite", 250, b.id)


def test_update_unknown_id_or_field():
    drinks = [Drink()]
    assert update_drink(drinks, "missing", abv=12) == drinks
    with pytest.raises(TypeError):
        update_drink(drinks, drinks[0].id, id="new")


def test_remove_drink():
    a, b = Drink(), Drink()
    drinks = [a, b]
    assert remove_drink(drinks, a.id) == [b]
    assert remove_drink(drinks, "missing") == drinks
    assert len(drinks) == 2


def test_drink_dict_roundtrip():
    d = Drink(label="Shot", volume_ml=40, abv=40)
    assert Drink.from_dict(d.to_dict()) == d
