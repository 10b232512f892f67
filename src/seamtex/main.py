"""Main entry point for seamtex."""

import argparse
import logging
import sys
from pathlib import Path

from .config import DEFAULT_PRESET, FIELD_SOURCES, PRESETS, ConfigLoader, TextureConfig, get_preset
from .core.field import CHANNELS
from .pipeline import RefinementPipeline


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="seamtex",
        description="Seamtex - Seamless Procedural Texture Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "-p", "--preset",
        choices=list(PRESETS.keys()),
        default=None,
        help=f"Pipeline preset (default: {DEFAULT_PRESET})",
    )
    source.add_argument(
        "-c", "--config",
        metavar="PATH",
        help="YAML config file (may set its own preset); command line options override it",
    )
    parser.add_argument(
        "-o", "--output-dir",
        metavar="DIR",
        default=".",
        help="Directory to write images to (default: current directory)",
    )
    parser.add_argument("--size", type=int, help="Texture edge length in pixels")
    parser.add_argument("--points", type=int, help="Number of Voronoi sites")
    parser.add_argument("--radius", type=int, help="Blur radius of the first round")
    parser.add_argument("--rounds", type=int, help="Number of refinement rounds")
    parser.add_argument("--octaves", type=int, help="Noise octaves")
    parser.add_argument("--persistence", type=float, help="Noise persistence")
    parser.add_argument("--lacunarity", type=float, help="Noise lacunarity")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--base",
        choices=FIELD_SOURCES,
        help="Field the refinement starts from",
    )
    parser.add_argument(
        "--direction",
        choices=FIELD_SOURCES,
        help="Field that steers the blur direction",
    )
    parser.add_argument(
        "--no-normalize",
        action="store_true",
        help="Skip contrast stretching after each blur round",
    )
    parser.add_argument(
        "--tileable-noise",
        action="store_true",
        help="Use integer-periodic noise so the noise field tiles",
    )
    parser.add_argument(
        "--channel",
        choices=["rgb", *CHANNELS],
        help="Write RGB images with the value in one channel or all (default: grayscale)",
    )
    parser.add_argument(
        "--save-rounds",
        action="store_true",
        help="Also write the field after every refinement round",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress of each stage",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> TextureConfig:
    """Combine preset, config file and command line overrides."""
    if args.config:
        config = ConfigLoader().load(args.config)
    else:
        config = get_preset(args.preset or DEFAULT_PRESET)

    return config.with_overrides(
        size=args.size,
        num_points=args.points,
        blur_radius=args.radius,
        rounds=args.rounds,
        octaves=args.octaves,
        persistence=args.persistence,
        lacunarity=args.lacunarity,
        seed=args.seed,
        base_field=args.base,
        direction_field=args.direction,
        normalize=False if args.no_normalize else None,
        tileable_noise=True if args.tileable_noise else None,
    )


def main(argv: list[str] | None = None) -> int:
    """Run the seamtex generator."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )

    try:
        config = build_config(args)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print("Seamtex - Seamless Procedural Texture Generator")
    print("=" * 40)
    print(f"Size: {config.size}x{config.size}, sites: {config.num_points}")
    print(f"Refinement: {config.rounds} rounds from radius {config.blur_radius}"
          f" ({config.base_field} along {config.direction_field})")

    try:
        result = RefinementPipeline(config).run()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    for name, field in result.fields().items():
        if name.startswith("round_") and not args.save_rounds:
            continue
        path = output_dir / f"{name}.png"
        field.save(path, channel=args.channel)
        print(f"Saved {name} to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
