"""
EMA-Smoothed Parameters

Driver controls (contrast, attenuation) are routed through a
SmoothedParameter so a slider jump drifts in over a couple of seconds
instead of snapping the output. Attenuation matters most: its eighth-power
easing turns a small step near 1 into a large change in trail length, so
an unsmoothed jump visibly wipes or floods the field in one frame.
Smoothing is frame-rate independent via delta-time integration.
"""

import math


class SmoothedParameter:
    """EMA-smoothed frame control (contrast exponent or raw attenuation).

    The simulator keeps one per continuous control and writes the
    smoothed value into the engine before every step. stamp_count is
    an integer and bypasses this.

    tau is the time in seconds to cover ~63% of a jump; the simulator
    uses 0.5s. tau <= 0 disables smoothing.
    """

    def __init__(self, initial_value, time_constant=2.0):
        """
        Args:
            initial_value: Starting value (both current and target)
            time_constant: Time in seconds to reach ~63% of target (tau)
        """
        self.target = initial_value
        self.current = initial_value
        self.tau = time_constant

    def set_target(self, new_target):
        self.target = new_target

    def update(self, dt):
        """Advance EMA by dt seconds.

        alpha = 1 - exp(-dt / tau)
        current += alpha * (target - current)
        """
        if dt <= 0:
            return
        if self.tau <= 0:
            self.current = self.target
            return
        alpha = 1.0 - math.exp(-dt / self.tau)
        self.current += alpha * (self.target - self.current)

    def get_value(self):
        return self.current

    def snap(self, value):
        """Immediately set both target and current (for reset)."""
        self.target = value
        self.current = value
