#!/usr/bin/env python3
# Interactive map viewer (no gameplay).
# - Wave cycle: LEFT / RIGHT
# - Obstacle percent: UP / DOWN (+-5%), seed: S (+1) ; both regenerate at once
# - Spawn preview (next random open tile): SPACE
# - Click a tile: world position -> tile lookup, highlighted
# - 60 Hz fixed loop

import argparse, dataclasses, logging
import pygame

from blockfield.config import DEFAULT_MAPS, GeneratorSettings, footprint, load_maps
from blockfield.errors import ConfigurationError, EmptyMapError
from blockfield.mapgen.generator import MapGenerator

FLOOR = (220, 220, 220)
GAP = (24, 24, 24)
CENTER = (230, 60, 60)
SPAWN = (255, 200, 0)
PICK = (60, 140, 255)


def cell_rect(x, y, h, tile, inset):
    return pygame.Rect(x * tile + inset, (h - 1 - y) * tile + inset, tile - 2 * inset, tile - 2 * inset)


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--maps", type=str, help="YAML map list (default: built-in maps)")
    ap.add_argument("--wave", type=int, default=1, help="Wave number (1-based)")
    ap.add_argument("--tile", type=int, default=32, help="Tile size in pixels")
    ap.add_argument("--outline", type=float, default=0.1, help="Tile inset (0..1)")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    maps = load_maps(args.maps) if args.maps else list(DEFAULT_MAPS)
    max_size = footprint(maps)
    gen = MapGenerator(maps, GeneratorSettings(outline_percent=args.outline, max_map_size=max_size))

    pygame.init()
    clock = pygame.time.Clock()
    screen = pygame.display.set_mode((max_size.x * args.tile, max_size.y * args.tile))
    inset = int(args.tile * args.outline / 2)

    wave = max(1, min(len(maps), args.wave))
    gm = gen.on_new_wave(wave)
    spawn = pick = None

    def tweak(**changes):
        nonlocal gm, spawn, pick
        try:
            gen.maps[wave - 1] = dataclasses.replace(gen.maps[wave - 1], **changes)
        except ConfigurationError as e:
            logging.getLogger("viewer").warning("%s", e)
            return
        gm = gen.on_new_wave(wave)
        spawn = pick = None

    running = True
    while running:
        cfg = gm.config
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.key in (pygame.K_RIGHT, pygame.K_LEFT):
                    step = 1 if ev.key == pygame.K_RIGHT else -1
                    wave = (wave - 1 + step) % len(gen.maps) + 1
                    gm = gen.on_new_wave(wave)
                    spawn = pick = None
                elif ev.key == pygame.K_UP:
                    tweak(obstacle_percent=round(min(1.0, cfg.obstacle_percent + 0.05), 2))
                elif ev.key == pygame.K_DOWN:
                    tweak(obstacle_percent=round(max(0.0, cfg.obstacle_percent - 0.05), 2))
                elif ev.key == pygame.K_s:
                    tweak(seed=cfg.seed + 1)
                elif ev.key == pygame.K_SPACE:
                    try:
                        spawn = gen.random_open_tile().coord
                    except EmptyMapError:
                        spawn = None
            elif ev.type == pygame.MOUSEBUTTONDOWN:
                mx, my = ev.pos
                # screen px -> world units; row 0 sits at the bottom of the drawn map
                wx = mx / args.tile - cfg.size.x / 2
                wz = (cfg.size.y * args.tile - my) / args.tile - cfg.size.y / 2
                pick = gen.tile_from_position((wx, 0.0, wz)).coord

        cfg = gm.config
        screen.fill(GAP)
        for x in range(cfg.size.x):
            for y in range(cfg.size.y):
                pygame.draw.rect(screen, FLOOR, cell_rect(x, y, cfg.size.y, args.tile, inset))
        for ob in gm.obstacles:
            pygame.draw.rect(screen, ob.color[:3], cell_rect(ob.coord.x, ob.coord.y, cfg.size.y, args.tile, inset))
        for c, color in ((cfg.center, CENTER), (spawn, SPAWN), (pick, PICK)):
            if c is not None:
                r = cell_rect(c.x, c.y, cfg.size.y, args.tile, inset)
                pygame.draw.circle(screen, color, r.center, max(2, r.width // 4))

        pygame.display.set_caption(
            f"blockfield - wave {wave} {cfg.name}  {cfg.size.x}x{cfg.size.y}  "
            f"obstacles {len(gm.obstacles)}/{cfg.obstacle_attempts} ({cfg.obstacle_percent:.2f})  seed {cfg.seed}"
        )
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()


if __name__ == "__main__":
    main()
