#!/usr/bin/env python3
import argparse, csv, logging, os, sys

from blockfield.config import DEFAULT_MAPS, GeneratorSettings, footprint, load_maps
from blockfield.errors import MapError
from blockfield.mapgen.generator import MapGenerator
from blockfield.mapgen.reachability import reachable_count
from blockfield.render.preview import save_preview


def make_generator(args):
    maps = load_maps(args.maps) if args.maps else DEFAULT_MAPS
    settings = GeneratorSettings(tile_size=args.tile_size, outline_percent=args.outline,
                                 max_map_size=footprint(maps))
    return MapGenerator(maps, settings)


def write_mask(mask, path):
    with open(path, 'w', newline='') as f:
        w = csv.writer(f, delimiter='\t')
        for row in mask.as_rows():
            w.writerow([int(v) for v in row])


def cmd_list(args):
    gen = make_generator(args)
    for i, m in enumerate(gen.maps):
        print(f"{i:2d}  {m.name:<12} {m.size.x}x{m.size.y}  obstacles={m.obstacle_percent:.2f} "
              f"seed={m.seed}  attempts={m.obstacle_attempts}")


def cmd_emit(args):
    gm = make_generator(args).generate(args.map)
    write_mask(gm.mask, args.out)
    print(f"Wrote {args.out}")


def cmd_render(args):
    gen = make_generator(args)
    indices = range(len(gen.maps)) if args.map is None else [args.map]
    for i in indices:
        gm = gen.generate(i)
        png = os.path.join(args.outdir, f"map_{i + 1:02d}.png")
        save_preview(gm, png, tile_px=args.tile, outline_percent=args.outline)
    print(f"Wrote PNGs to {args.outdir}")


def cmd_check(args):
    gen = make_generator(args)
    bad = 0
    for i, m in enumerate(gen.maps):
        gm = gen.generate(i)
        again = gen.generate(i)
        placed = len(gm.obstacles)
        ok = (
            not gm.mask.get(m.center.x, m.center.y)
            and reachable_count(gm.mask, m.center) == m.tile_count - placed
            and placed <= m.obstacle_attempts
            and again.mask == gm.mask
        )
        bad += not ok
        print(f"{i:2d}  {m.name:<12} placed={placed:3d}/{m.obstacle_attempts:<3d} "
              f"open={len(gm.open_coords):3d}  {'ok' if ok else 'FAIL'}")
    return 1 if bad else 0


def main():
    p = argparse.ArgumentParser()
    p.add_argument('--maps', type=str, help='YAML map list (default: built-in maps)')
    p.add_argument('--tile-size', type=float, default=1.0, help='World units per tile')
    p.add_argument('--outline', type=float, default=0.0, help='Tile inset (0..1)')
    p.add_argument('-v', '--verbose', action='store_true')
    sub = p.add_subparsers(dest='cmd', required=True)
    sub.add_parser('list').set_defaults(func=cmd_list)
    p1 = sub.add_parser('emit')
    p1.add_argument('--map', type=int, required=True, help='0-based map index')
    p1.add_argument('--out', type=str, required=True)
    p1.set_defaults(func=cmd_emit)
    p2 = sub.add_parser('render')
    p2.add_argument('--map', type=int, help='0-based map index (default: all)')
    p2.add_argument('--outdir', type=str, default='out/png')
    p2.add_argument('--tile', type=int, default=16, help='Tile size in pixels')
    p2.set_defaults(func=cmd_render)
    sub.add_parser('check').set_defaults(func=cmd_check)
    args = p.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        sys.exit(args.func(args) or 0)
    except MapError as e:
        raise SystemExit(f"maptool: {e}")


if __name__ == '__main__':
    main()
