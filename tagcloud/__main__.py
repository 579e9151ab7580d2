#!/usr/bin/env python3
"""
Print the layout of a tag cloud as text, back to front.

  python -m tagcloud --items 12 --size 400 400 --rotate 0.5 0 1 0
"""
import argparse
import sys

from tagcloud.config import CONFIG_FILE, load_config
from tagcloud.tag_cloud import TagCloud
from tagcloud.utilities import Vector3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tagcloud", description=__doc__.strip().splitlines()[0])
    parser.add_argument("--items", type=int, default=16, help="number of items to distribute")
    parser.add_argument("--size", type=int, nargs=2, default=[400, 400],
                        metavar=("WIDTH", "HEIGHT"), help="cloud bounds in pixels")
    parser.add_argument("--config", default=CONFIG_FILE, help="settings file")
    parser.add_argument("--rotate", type=float, nargs=4, metavar=("ANGLE", "X", "Y", "Z"),
                        help="extra rotation applied before layout")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.items <= 0:
        print("Error: --items must be positive", file=sys.stderr)
        return 2

    settings = load_config(args.config, log_callback=lambda m, level: print(f"{level}: {m}", file=sys.stderr))
    cloud = TagCloud(settings)
    cloud.build(lambda scope: scope.distribute([f"tag-{i}" for i in range(args.items)]))
    cloud.measure(*args.size)

    if args.rotate:
        angle, x, y, z = args.rotate
        cloud.rotate_by_angle(angle, Vector3(x, y, z).normalized())

    print(f"{'item':<10} {'x':>6} {'y':>6} {'depth':>8} {'alpha':>6} {'scale':>6}")
    for placement in cloud.draw_list():
        print(f"{placement.item.content:<10} {placement.offset_x:>6} {placement.offset_y:>6} "
              f"{placement.depth:>8.3f} {cloud.alpha(placement):>6.2f} {cloud.scale(placement):>6.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
