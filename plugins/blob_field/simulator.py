"""
BlobFieldSimulator - Preset-driven wrapper around BlobFieldEngine

Holds the engine plus smoothed versions of the continuous controls so a
driver can push raw slider values every frame and call advance(dt).

Usage:
    from blob_field.simulator import BlobFieldSimulator
    sim = BlobFieldSimulator("trails", 256, 256)
    frame = sim.advance(0.016)   # Grid, values in [0, 1] once stamped
"""

from .engine import BlobFieldEngine
from .presets import PRESETS, get_preset
from .smoothing import SmoothedParameter

SMOOTHED_KEYS = ("contrast", "attenuation")


class BlobFieldSimulator:

    def __init__(self, preset="default", width=256, height=256,
                 seed=None, smoothing_tau=0.5):
        """
        Args:
            preset: Key into PRESETS
            width, height: World size in cells
            seed: Overrides the preset's seed triple
            smoothing_tau: Time constant for contrast/attenuation drift
        """
        p = get_preset(preset)
        if p is None:
            raise ValueError(f"Unknown preset: {preset!r}. "
                             f"Available: {list(PRESETS.keys())}")
        self.preset_key = preset
        self.engine = BlobFieldEngine(
            width=width,
            height=height,
            seed=seed if seed is not None else p["seed"],
            stamp_count=p["stamp_count"],
            contrast=p["contrast"],
            attenuation=p["attenuation"],
        )
        self.smoothed_params = {
            key: SmoothedParameter(p[key], time_constant=smoothing_tau)
            for key in SMOOTHED_KEYS
        }

    def set_param(self, key, value):
        """Route a driver control change; smoothed keys drift toward value."""
        if key in self.smoothed_params:
            self.smoothed_params[key].set_target(float(value))
        else:
            self.engine.set_params(**{key: value})

    def advance(self, dt):
        """Update smoothed controls by dt seconds, then step the engine once."""
        for sp in self.smoothed_params.values():
            sp.update(dt)
        self.engine.set_params(**{key: sp.get_value()
                                  for key, sp in self.smoothed_params.items()})
        return self.engine.step()

    def reset_contrast(self):
        """The driver's "reset" button: renormalize the persistent world."""
        self.engine.renormalize()

    @property
    def stats(self):
        return self.engine.stats
