"""
User-adjustable simulation parameters and their panel bindings.

The store is the only writer-facing view of kappa, delta and the active
field. Panel widgets talk to it through bindings, which clamp every value
into range before it is stored.
"""

import enum

from .errors import MissingBoundElement, UnknownField


class FieldKind(enum.Enum):
    TEMPERATURE = "temperature"
    PHI = "phi"

    @property
    def label(self):
        return self.value.capitalize()

    @classmethod
    def coerce(cls, value):
        """Accept a FieldKind or its string tag ("phi", "Temperature", ...)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise UnknownField(f"unknown field: {value!r}")


# Slider definitions, same shape as the control panel expects
PARAM_DEFS = [
    {"key": "kappa", "label": "kappa (latent heat)",
     "min": 0.8, "max": 2.0, "default": 1.8, "step": 0.01, "fmt": ".2f"},
    {"key": "delta", "label": "delta (anisotropy)",
     "min": 0.0, "max": 0.05, "default": 0.02, "step": 0.001, "fmt": ".3f"},
]

PARAM_RANGES = {d["key"]: (d["min"], d["max"]) for d in PARAM_DEFS}
PARAM_DEFAULTS = {d["key"]: d["default"] for d in PARAM_DEFS}


def clamp(value, lo, hi):
    return max(lo, min(hi, float(value)))


class NumericBinding:
    """Slider-facing accessor for one numeric parameter."""

    def __init__(self, key, label, get, set, min_val, max_val, step=None, fmt=".3f"):
        self.key = key
        self.label = label
        self.get = get
        self.set = set
        self.min = min_val
        self.max = max_val
        self.step = step
        self.fmt = fmt


class ChoiceBinding:
    """Button-row-facing accessor for an enumerated parameter."""

    def __init__(self, key, label, get, set, options):
        self.key = key
        self.label = label
        self.get = get
        self.set = set
        self.options = list(options)


class ParameterStore:
    """Mutable mirror of kappa, delta and the selected field."""

    def __init__(self, kappa=PARAM_DEFAULTS["kappa"], delta=PARAM_DEFAULTS["delta"],
                 field=FieldKind.PHI):
        self._kappa = clamp(kappa, *PARAM_RANGES["kappa"])
        self._delta = clamp(delta, *PARAM_RANGES["delta"])
        self._field = FieldKind.coerce(field)

    @property
    def kappa(self):
        return self._kappa

    @property
    def delta(self):
        return self._delta

    @property
    def field(self):
        return self._field

    def set_kappa(self, value):
        self._kappa = clamp(value, *PARAM_RANGES["kappa"])

    def set_delta(self, value):
        self._delta = clamp(value, *PARAM_RANGES["delta"])

    def set_field(self, value):
        self._field = FieldKind.coerce(value)

    def toggle_field(self):
        """Switch between the two fields; toggling twice is a no-op."""
        self._field = (FieldKind.TEMPERATURE if self._field is FieldKind.PHI
                       else FieldKind.PHI)
        return self._field

    def apply_preset(self, preset):
        """Load kappa/delta/field from a preset dict (missing keys are kept)."""
        if "kappa" in preset:
            self.set_kappa(preset["kappa"])
        if "delta" in preset:
            self.set_delta(preset["delta"])
        if "field" in preset:
            self.set_field(preset["field"])

    def bindings(self):
        """Return {name: binding} for the control panel."""
        setters = {"kappa": self.set_kappa, "delta": self.set_delta}
        out = {}
        for d in PARAM_DEFS:
            key = d["key"]
            out[key] = NumericBinding(
                key, d["label"],
                get=lambda key=key: getattr(self, key),
                set=setters[key],
                min_val=d["min"], max_val=d["max"],
                step=d["step"], fmt=d["fmt"],
            )
        out["field"] = ChoiceBinding(
            "field", "Field",
            get=lambda: self._field,
            set=self.set_field,
            options=list(FieldKind),
        )
        return out

    def binding(self, name):
        try:
            return self.bindings()[name]
        except KeyError:
            raise MissingBoundElement(f"no parameter named {name!r}") from None
