import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, TextIO

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException
from tqdm import tqdm

from .config import PARAMETER_RANGES, load_config, validate_config, setup_paths
from .random_source import get_random_seed
from .render import render_to
from .renderer import create_surface
from .session import ParameterSession
from .utils import output_filename, save_png, save_svg


def parse_seed(value: str) -> Optional[int]:
    if value == 'random':
        return None
    return int(value)


def add_render_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--grid-size', type=int, help='Override rows/columns')
    parser.add_argument('--distortion', type=float, help='Override distortion percent')
    parser.add_argument('--grid-gap', type=float, help='Override grid gap')
    parser.add_argument('--minimum-angle', type=float, help='Override minimum triangle angle')
    parser.add_argument('--hatch', dest='hatch', action='store_true', default=None,
                        help='Add hatch lines')
    parser.add_argument('--no-hatch', dest='hatch', action='store_false', default=None,
                        help='Disable hatch lines')
    parser.add_argument('--hatch-layers', type=int, help='Override maximum hatch layers')
    parser.add_argument('--library', type=str, help='Override color library')
    parser.add_argument('--size', type=int, help='Override canvas width and height')
    parser.add_argument('overrides', nargs='*', help='Additional config overrides')


def build_overrides(args: argparse.Namespace) -> List[str]:
    overrides = []
    if getattr(args, 'grid_size', None) is not None:
        overrides.append(f'mesh.grid_size={args.grid_size}')
    if getattr(args, 'distortion', None) is not None:
        overrides.append(f'mesh.distortion={args.distortion}')
    if getattr(args, 'grid_gap', None) is not None:
        overrides.append(f'mesh.grid_gap={args.grid_gap}')
    if getattr(args, 'minimum_angle', None) is not None:
        overrides.append(f'mesh.minimum_angle={args.minimum_angle}')
    if getattr(args, 'hatch', None) is not None:
        overrides.append(f'hatch.enabled={args.hatch}')
    if getattr(args, 'hatch_layers', None) is not None:
        overrides.append(f'hatch.layers={args.hatch_layers}')
    if getattr(args, 'library', None):
        overrides.append(f'palette.library={args.library}')
    if getattr(args, 'size', None) is not None:
        overrides.append(f'canvas.width={args.size}')
        overrides.append(f'canvas.height={args.size}')
    if getattr(args, 'output_dir', None):
        overrides.append(f'paths.output_dir={args.output_dir}')
    if getattr(args, 'overrides', None):
        overrides.extend(args.overrides)
    return overrides


def render_outputs(cfg: DictConfig, output: Optional[str], svg: Optional[str]) -> None:
    """Render the configured mosaic to PNG and, optionally, SVG."""
    seed = cfg.random_seed
    png_path = output or str(Path(cfg.paths.output_dir) / output_filename('mosaic', seed, 'png'))

    print(f"Rendering seed {seed} ({cfg.mesh.grid_size}x{cfg.mesh.grid_size} grid, "
          f"{cfg.canvas.width}x{cfg.canvas.height} canvas)")
    start_time = time.time()
    result = render_to('raster', cfg)
    print(f"Rendered {len(result.mosaic.triangles)} triangles, "
          f"{len(result.mosaic.hatch_layers)} hatch layers "
          f"in {time.time() - start_time:.2f} seconds")
    print(f"Palette: {result.mosaic.palette.name}")

    print(f"Saving PNG to {png_path}")
    save_png(result, png_path)

    if svg:
        print(f"Saving SVG to {svg}")
        save_svg(render_to('svg', cfg), svg)


def batch_render(cfg: DictConfig, count: int, start_seed: Optional[int], save_vector: bool) -> None:
    """Render count consecutive seeds into the output directory."""
    if start_seed is None:
        start_seed = get_random_seed()
    output_dir = Path(cfg.paths.output_dir)

    print(f"Rendering {count} mosaics starting at seed {start_seed}")
    for seed in tqdm(range(start_seed, start_seed + count), desc='Rendering'):
        cfg.random_seed = seed
        save_png(render_to('raster', cfg), output_dir / output_filename('mosaic', seed, 'png'))
        if save_vector:
            save_svg(render_to('svg', cfg), output_dir / output_filename('mosaic', seed, 'svg'))

    print(f"\nBatch rendering complete! Results saved to {output_dir}")


def print_parameters(cfg: DictConfig) -> None:
    print(OmegaConf.to_yaml(cfg))
    print("Adjustable parameters:")
    for param in PARAMETER_RANGES:
        print(f"  {param.describe()}")


def live_session(cfg: DictConfig, output: Optional[str], stream: TextIO = sys.stdin) -> int:
    """
    Re-render whenever parameter changes arrive on stream.

    Each line holds one or more key=value pairs; all of them are applied
    before a single re-render. 'quit' ends the session.

    Returns:
        Number of renders performed
    """
    png_path = output or str(Path(cfg.paths.output_dir) / 'live.png')
    session = ParameterSession(cfg, lambda width, height: create_surface('raster', width, height))
    session.subscribe(lambda result: save_png(result, png_path))

    session.flush()
    print(f"Rendered seed {session.config.random_seed} to {png_path}")

    for line in stream:
        line = line.strip()
        if not line:
            continue
        if line == 'quit':
            break
        try:
            changes = OmegaConf.from_dotlist(line.split())
            for key, value in _flatten(OmegaConf.to_container(changes)).items():
                session.set(key, value)
        except (AssertionError, OmegaConfBaseException, ValueError) as e:
            print(f"Rejected '{line}': {e}")
            continue
        session.flush()
        print(f"Rendered seed {session.config.random_seed} to {png_path}")

    return session.render_count


def _flatten(tree: dict, prefix: str = '') -> dict:
    flat = {}
    for key, value in tree.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point for trimosaic."""
    parser = argparse.ArgumentParser(
        description="trimosaic - Procedural triangle mosaic artwork",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Render command
    render_parser = subparsers.add_parser('render', help='Render a single mosaic')
    add_render_options(render_parser)
    render_parser.add_argument('--seed', type=parse_seed,
                               help="Random seed, or 'random' for a fresh one")
    render_parser.add_argument('--output', type=str, help='Output PNG path')
    render_parser.add_argument('--svg', type=str, help='Output SVG path')

    # Batch command
    batch_parser = subparsers.add_parser('batch', help='Render a series of seeds')
    add_render_options(batch_parser)
    batch_parser.add_argument('--count', type=int, required=True, help='Number of mosaics')
    batch_parser.add_argument('--start-seed', type=int, help='First seed (random by default)')
    batch_parser.add_argument('--output-dir', type=str, help='Override output directory')
    batch_parser.add_argument('--svg', action='store_true', help='Also save SVG files')

    # Params command
    params_parser = subparsers.add_parser('params', help='Show configuration and parameter ranges')
    add_render_options(params_parser)

    # Live command
    live_parser = subparsers.add_parser('live', help='Re-render on key=value lines from stdin')
    add_render_options(live_parser)
    live_parser.add_argument('--seed', type=parse_seed,
                             help="Random seed, or 'random' for a fresh one")
    live_parser.add_argument('--output', type=str, help='Output PNG path')

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    overrides = build_overrides(args)
    if hasattr(args, 'seed'):
        seed = get_random_seed() if args.seed is None else args.seed
        overrides.append(f'random_seed={seed}')

    # Load config with overrides
    cfg = load_config(args.config, overrides)

    # Validate configuration
    validate_config(cfg)

    # Execute command
    if args.command == 'render':
        setup_paths(cfg)
        render_outputs(cfg, args.output, args.svg)
    elif args.command == 'batch':
        setup_paths(cfg)
        batch_render(cfg, args.count, args.start_seed, args.svg)
    elif args.command == 'params':
        print_parameters(cfg)
    elif args.command == 'live':
        setup_paths(cfg)
        live_session(cfg, args.output)


if __name__ == '__main__':
    main()
