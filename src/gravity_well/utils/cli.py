import argparse
import json


def build_parser():
    parser = argparse.ArgumentParser(description='Gravity well: satellites falling onto a primary')
    parser.add_argument('--exp_name', type=str, default='', metavar='N',
                        help='experiment_name')
    parser.add_argument('--seed', type=int, default=1, metavar='N',
                        help='random seed (default: 1)')
    parser.add_argument('--preset', type=str, default='default', metavar='N',
                        help='bundled preset name or path to a preset YAML (default: default)')
    parser.add_argument('--duration', type=float, default=60.0, metavar='N',
                        help='duration of the simulation in seconds (default: 60.0)')
    parser.add_argument('--physics_rate', type=int, default=60, metavar='N',
                        help='physics ticks per simulated second (default: 60)')
    parser.add_argument('--outdir', type=str, default='results', metavar='N',
                        help='directory to save the recording (default: results)')
    parser.add_argument('--log_interval', type=int, default=None, metavar='N',
                        help='print progress every N ticks (default: once per simulated second)')
    # overrides on top of the preset; None keeps the preset value
    parser.add_argument('--width', type=float, default=None, metavar='N',
                        help='region width')
    parser.add_argument('--height', type=float, default=None, metavar='N',
                        help='region height')
    parser.add_argument('--spawn_interval', type=float, default=None, metavar='N',
                        help='seconds between satellite spawns')
    parser.add_argument('--max_speed', type=float, default=None, metavar='N',
                        help='maximum initial speed per axis of a satellite')
    parser.add_argument('--max_angular_speed', type=float, default=None, metavar='N',
                        help='maximum initial spin of a satellite in rad/s')
    parser.add_argument('--primary_mass', type=float, default=None, metavar='N',
                        help='mass of the primary')
    parser.add_argument('--primary_radius', type=float, default=None, metavar='N',
                        help='radius of the primary')
    parser.add_argument('--satellite_radius', type=float, default=None, metavar='N',
                        help='radius of every satellite')
    parser.add_argument(
        "--satellite_sprites",
        type=json.loads,
        default=None,
        help='JSON list of sprite keys for satellites, e.g. \'["rock_a", "rock_b"]\'',
    )
    parser.add_argument(
        "--moon_sprites",
        type=json.loads,
        default=None,
        help='JSON list of sprite keys for moons',
    )
    parser.add_argument(
        "--plot_final",
        action='store_true',
        help="save a PNG of the final world state next to the recording"
    )
    return parser

'''
usage: python scripts/main.py --exp_name quick --seed 42 --duration 30 \
    --physics_rate 120 --width 800 --height 800 --spawn_interval 0.5 --plot_final
'''
