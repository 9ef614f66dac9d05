# scripts/main.py

from __future__ import annotations

from pathlib import Path
from dataclasses import asdict

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from gravity_well.core import run_simulation
from gravity_well.utils.random import seed_all
from gravity_well.presets.basic import make_config, make_world
from gravity_well.utils.cli import build_parser
from gravity_well.utils.io import unique_path

PROJECT_ROOT = Path(__file__).parent.parent


def main():
    parser = build_parser()
    args = parser.parse_args()
    sim_config = make_config(args)

    seed_all(args.seed)

    # 1. Build world
    world = make_world(sim_config)

    # 2. Run simulation and record
    dt = 1 / args.physics_rate
    n_steps = int(args.duration * args.physics_rate)
    log_interval = args.log_interval or args.physics_rate
    recording = run_simulation(world, n_steps, dt, log_interval=log_interval)
    counts = world.counts()
    print(f"Simulation completed: {counts['satellite']} satellites, {counts['moon']} moons alive.")

    recording.meta = {
        "sim_config": asdict(sim_config),
        "seed": args.seed,
        "preset": args.preset,
        "engine_version": "0.1.0",
    }

    # 3. Output paths
    exp_dir = PROJECT_ROOT / args.outdir / args.exp_name
    exp_dir.mkdir(exist_ok=True, parents=True)

    recording_path = unique_path(exp_dir / "recording.pkl.xz")
    recording.save(recording_path)
    print(f"Wrote recording to {str(recording_path)!r}")

    if args.plot_final:
        fig, ax = world.plot(delta=sim_config.satellite_radius)
        ax.invert_yaxis()
        png_path = unique_path(exp_dir / "final.png")
        fig.savefig(png_path, dpi=150)
        plt.close(fig)
        print(f"Wrote final frame to {str(png_path)!r}")


if __name__ == "__main__":
    main()
