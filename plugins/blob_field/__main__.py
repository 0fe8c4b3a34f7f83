"""
Blob Field - Headless Runner

Usage:
    python -m blob_field [preset] [--size WxH] [--steps N] [--seed a,b,c]

Examples:
    python -m blob_field
    python -m blob_field trails --steps 500
    python -m blob_field storm --size 320x200 --seed 1,2,3

Runs the simulation for N frames and prints world statistics.
Use --list to see all available presets.
"""

import sys
import time
import numpy as np

from .errors import BlobFieldError
from .presets import PRESET_ORDER, list_presets
from .simulator import BlobFieldSimulator


def run(preset, width, height, steps, seed=None, report_every=100):
    """Advance a simulator `steps` frames, printing progress. Returns final frame."""
    sim = BlobFieldSimulator(preset, width, height, seed=seed)
    frame = None
    start = time.perf_counter()
    for i in range(steps):
        frame = sim.advance(1.0 / 60)
        if report_every and (i + 1) % report_every == 0:
            s = sim.stats
            print(f"[blob] frame {s['generation']:6d}  mass={s['mass']:.3f}  "
                  f"max={s['max']:.4f}  lit={s['lit_pct']:.1f}%")
    elapsed = time.perf_counter() - start

    s = sim.stats
    print(f"[blob] {preset}: {steps} frames in {elapsed:.2f}s, "
          f"{s['stamps']} stamps, mass={s['mass']:.3f}")
    if frame is not None:
        finite = np.isfinite(frame.data)
        mean = float(frame.data[finite].mean()) if finite.any() else float("nan")
        print(f"[blob] output: {int(finite.sum())}/{frame.data.size} finite cells, "
              f"mean={mean:.4f}")
    return frame


def _parse_size(text):
    width, height = text.lower().split("x")
    return int(width), int(height)


def _parse_seed(text):
    return tuple(int(p) for p in text.split(","))


def main(argv=None):
    preset = "default"
    width, height = 256, 256
    steps = 300
    seed = None

    args = sys.argv[1:] if argv is None else list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        try:
            if arg == "--size" and i + 1 < len(args):
                width, height = _parse_size(args[i + 1])
                i += 2
                continue
            if arg == "--steps" and i + 1 < len(args):
                steps = int(args[i + 1])
                i += 2
                continue
            if arg == "--seed" and i + 1 < len(args):
                seed = _parse_seed(args[i + 1])
                i += 2
                continue
        except ValueError:
            print(f"Unknown argument: {arg} {args[i + 1]}")
            print("Use --help for usage")
            return 2

        if arg == "--list":
            print("\nAvailable presets:")
            for key, name, desc in list_presets():
                print(f"    {key:12s} {name:10s} {desc}")
            print()
            return 0
        elif arg in ("--help", "-h"):
            print(__doc__)
            return 0
        elif arg in PRESET_ORDER:
            preset = arg
            i += 1
        else:
            print(f"Unknown argument: {arg}")
            print("Use --list to see available presets")
            return 2

    print(f"[blob] preset={preset} size={width}x{height} steps={steps}")
    try:
        run(preset, width, height, steps, seed=seed)
    except BlobFieldError as e:
        print(f"[blob] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
