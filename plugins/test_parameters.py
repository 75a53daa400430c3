"""
Tests for the parameter store, its bindings and the field selector.
"""

import pytest

from nivis.errors import MissingBoundElement, UnknownField
from nivis.fields import FieldSelector
from nivis.parameters import (
    PARAM_DEFAULTS, PARAM_DEFS, ChoiceBinding, FieldKind, NumericBinding, ParameterStore,
)
from nivis.presets import PRESETS, PRESET_ORDER, get_preset, list_presets


def test_defaults(store):
    assert store.kappa == 1.8
    assert store.delta == 0.02
    assert store.field is FieldKind.PHI


def test_defaults_come_from_param_defs(store):
    assert PARAM_DEFAULTS == {d["key"]: d["default"] for d in PARAM_DEFS}
    assert store.kappa == PARAM_DEFAULTS["kappa"]
    assert store.delta == PARAM_DEFAULTS["delta"]


def test_setters_clamp(store):
    store.set_kappa(5)
    assert store.kappa == 2.0
    store.set_kappa(0.1)
    assert store.kappa == 0.8
    store.set_delta(1)
    assert store.delta == 0.05
    store.set_delta(-0.2)
    assert store.delta == 0.0


def test_constructor_clamps():
    store = ParameterStore(kappa=3, delta=-1, field="temperature")
    assert (store.kappa, store.delta, store.field) == (2.0, 0.0, FieldKind.TEMPERATURE)


def test_bindings_shape(store):
    bindings = store.bindings()
    assert set(bindings) == {"kappa", "delta", "field"}

    kappa = bindings["kappa"]
    assert isinstance(kappa, NumericBinding)
    assert (kappa.min, kappa.max) == (0.8, 2.0)
    delta = bindings["delta"]
    assert (delta.min, delta.max) == (0.0, 0.05)
    assert delta.step

    field = bindings["field"]
    assert isinstance(field, ChoiceBinding)
    assert field.options == [FieldKind.TEMPERATURE, FieldKind.PHI]


def test_binding_round_trip(store):
    bindings = store.bindings()
    bindings["kappa"].set(1.5)
    assert bindings["kappa"].get() == 1.5 == store.kappa
    bindings["delta"].set(0.9)
    assert bindings["delta"].get() == 0.05
    bindings["field"].set(FieldKind.TEMPERATURE)
    assert bindings["field"].get() is FieldKind.TEMPERATURE


def test_missing_binding(store):
    with pytest.raises(MissingBoundElement):
        store.binding("sigma")


def test_toggle_twice_restores(store):
    original = store.field
    assert store.toggle_field() is not original
    assert store.toggle_field() is original


def test_field_coercion():
    assert FieldKind.coerce("Phi") is FieldKind.PHI
    assert FieldKind.coerce(FieldKind.TEMPERATURE) is FieldKind.TEMPERATURE
    with pytest.raises(UnknownField):
        FieldKind.coerce("pressure")
    with pytest.raises(UnknownField):
        FieldKind.coerce(3)


def test_apply_preset(store):
    store.apply_preset(get_preset("heat"))
    assert store.field is FieldKind.TEMPERATURE
    store.apply_preset({"kappa": 9.0})
    assert store.kappa == 2.0
    assert store.field is FieldKind.TEMPERATURE


def test_presets_in_range():
    assert [k for k, _, _ in list_presets()] == PRESET_ORDER
    for key in PRESET_ORDER:
        p = PRESETS[key]
        assert 0.8 <= p["kappa"] <= 2.0
        assert 0.0 <= p["delta"] <= 0.05
        FieldKind.coerce(p["field"])
    assert get_preset("nope") is None


def test_selector_dispatch(engine):
    selector = FieldSelector()
    assert selector.fetch(FieldKind.PHI, engine)[:4] == bytes(engine.PHI_COLOR)
    assert selector.fetch("temperature", engine)[:4] == bytes(engine.TEMPERATURE_COLOR)
    assert engine.call_names() == ["phi", "temperature"]


def test_selector_unknown_field(engine):
    with pytest.raises(UnknownField):
        FieldSelector().fetch("velocity", engine)
    assert engine.calls == []


def test_selector_requires_every_field():
    with pytest.raises(UnknownField):
        FieldSelector({FieldKind.PHI: lambda e: b""})
