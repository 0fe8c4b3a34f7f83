"""
Blob Field Parameter Presets

Each preset is a starting point for the three frame controls plus the
generator seed. "default" matches the engine slider defaults.
"""

PRESETS = {
    "default": {
        "name": "Default",
        "description": "Moderate stamping, mid decay",
        "stamp_count": 10, "contrast": 1.0, "attenuation": 0.5,
        "seed": (100, 100, 100),
    },
    "drizzle": {
        "name": "Drizzle",
        "description": "A few blobs per frame that fade almost at once",
        "stamp_count": 2, "contrast": 1.0, "attenuation": 0.2,
        "seed": (100, 100, 100),
    },
    "trails": {
        "name": "Trails",
        "description": "Slow decay, blobs accumulate into long-lived clouds",
        "stamp_count": 5, "contrast": 1.5, "attenuation": 0.9,
        "seed": (12, 345, 6789),
    },
    "storm": {
        "name": "Storm",
        "description": "Heavy stamping with a hard contrast curve",
        "stamp_count": 60, "contrast": 3.0, "attenuation": 0.7,
        "seed": (29999, 17, 4242),
    },
    "haze": {
        "name": "Haze",
        "description": "Flattened contrast, almost no decay",
        "stamp_count": 20, "contrast": 0.35, "attenuation": 0.98,
        "seed": (1, 1, 1),
    },
}

PRESET_ORDER = ["default", "drizzle", "trails", "storm", "haze"]


def get_preset(name):
    """Get a preset by name. Returns None if not found."""
    return PRESETS.get(name)


def list_presets():
    """Return list of (key, name, description) for presets."""
    return [(k, PRESETS[k]["name"], PRESETS[k]["description"])
            for k in PRESET_ORDER if k in PRESETS]
