"""
Snowflake Parameter Presets

Each preset sets the latent heat (kappa), anisotropy strength (delta)
and the field shown at startup. Values follow the parameter sweeps in
Kobayashi (1993).
"""

PRESETS = {
    "classic": {
        "name": "Classic Dendrite",
        "description": "Six sharp arms with side branches",
        "kappa": 1.8, "delta": 0.02, "field": "phi",
    },
    "fern": {
        "name": "Fern",
        "description": "High latent heat, thin heavily branched arms",
        "kappa": 2.0, "delta": 0.04, "field": "phi",
    },
    "plate": {
        "name": "Plate",
        "description": "Low latent heat, compact hexagonal plate",
        "kappa": 1.2, "delta": 0.03, "field": "phi",
    },
    "blob": {
        "name": "Isotropic",
        "description": "No anisotropy, round unstable front",
        "kappa": 1.6, "delta": 0.0, "field": "phi",
    },
    "heat": {
        "name": "Heat Halo",
        "description": "Classic parameters, showing the temperature field",
        "kappa": 1.8, "delta": 0.02, "field": "temperature",
    },
}

PRESET_ORDER = ["classic", "fern", "plate", "blob", "heat"]

DEFAULT_PRESET = "classic"


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) in display order."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"]) for k in PRESET_ORDER]
