#!/usr/bin/env python3
import argparse, csv, logging, os, sys

from sidescroll.config import configure_logging
from sidescroll.mapgen.generator import generate_level
from sidescroll.render.preview import save_preview
from sidescroll.tiles import LevelType, TileBehaviorError, TileBehaviorTable, default_behaviors

logger = logging.getLogger("sstool")

TYPES = {t.name.lower(): t for t in LevelType}


def write_tsv(mat, path, include_header=False):
    with open(path, 'w', newline='') as f:
        w = csv.writer(f, delimiter='\t')
        if include_header:
            w.writerow(list(range(len(mat[0]))))
        for r in mat:
            w.writerow(r)


def load_behaviors(path):
    if path is None:
        return default_behaviors()
    return TileBehaviorTable.load(path)


def build(args, seed=None, level_type=None):
    return generate_level(
        seed if seed is not None else args.seed,
        args.width, args.height, args.difficulty,
        level_type if level_type is not None else TYPES[args.type],
        behaviors=args.table,
    )


def cmd_emit(args):
    level = build(args)
    write_tsv(level.as_rows(), args.out, include_header=args.header)
    logger.info("Wrote %s (exit at %d,%d)", args.out, level.x_exit, level.y_exit)


def cmd_golden(args):
    os.makedirs(args.outdir, exist_ok=True)
    for name, t in TYPES.items():
        for seed in args.seeds:
            level = build(args, seed=seed, level_type=t)
            path = os.path.join(args.outdir, f"{name}_{seed}_d{args.difficulty}.tsv")
            write_tsv(level.as_rows(), path)
    logger.info("Wrote golden pack to %s", args.outdir)


def cmd_behaviors(args):
    default_behaviors().save(args.out)
    logger.info("Wrote tile behaviors to %s", args.out)


def cmd_render(args):
    level = build(args)
    save_preview(level, args.out, tile_size=args.tile)
    logger.info("Wrote %s", args.out)


def add_level_args(p):
    p.add_argument('--seed', type=int, default=0)
    p.add_argument('--width', type=int, default=320)
    p.add_argument('--height', type=int, default=15)
    p.add_argument('--difficulty', type=int, default=0)
    p.add_argument('--type', choices=sorted(TYPES), default='overground')
    p.add_argument('--behaviors', type=str, default=None, help="256-byte tiles.dat (default: built-in table)")


def main(argv=None):
    p = argparse.ArgumentParser()
    p.add_argument('-v', '--verbose', action='store_true')
    sub = p.add_subparsers(dest='cmd', required=True)

    p1 = sub.add_parser('emit')
    add_level_args(p1)
    p1.add_argument('--out', type=str, required=True)
    p1.add_argument('--header', action='store_true')
    p1.set_defaults(func=cmd_emit)

    p2 = sub.add_parser('golden')
    add_level_args(p2)
    p2.add_argument('--seeds', type=int, nargs='+', default=[0, 1, 12345])
    p2.add_argument('--outdir', type=str, required=True)
    p2.set_defaults(func=cmd_golden)

    p3 = sub.add_parser('behaviors')
    p3.add_argument('--out', type=str, required=True)
    p3.set_defaults(func=cmd_behaviors)

    p4 = sub.add_parser('render')
    add_level_args(p4)
    p4.add_argument('--out', type=str, required=True)
    p4.add_argument('--tile', type=int, default=4, help="Tile size in pixels")
    p4.set_defaults(func=cmd_render)

    args = p.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    try:
        # Loaded once per run and shared by every level built.
        args.table = load_behaviors(getattr(args, "behaviors", None))
        args.func(args)
    except TileBehaviorError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
