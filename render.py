import sys
from argparse import ArgumentParser
from pathlib import Path

from mandelbrot import (
    EncoderSettings,
    RenderError,
    RenderParameters,
    default_pool_size,
    render_to_file,
    tile_count,
)
from mandelbrot.encoder import STRATEGIES

VERBOSE = False


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


def build_parser():
    parser = ArgumentParser(description='Render the Mandelbrot set to a PNG, one tile per worker task.')

    parser.add_argument('--width', type=int,
                        dest='width', help='width of the output image in pixels',
                        metavar='WIDTH', default=1000)

    parser.add_argument('--height', type=int,
                        dest='height', help='height of the output image in pixels',
                        metavar='HEIGHT', default=1000)

    parser.add_argument('--tile-edge', type=int,
                        dest='tile_edge', help='edge length of the square tiles each worker renders',
                        metavar='TILE_EDGE', default=100)

    parser.add_argument('--viewport-width', type=float,
                        dest='viewport_width', help='width of the viewed region of the complex plane before zooming',
                        metavar='VIEWPORT_WIDTH', default=4.0)

    parser.add_argument('--viewport-height', type=float,
                        dest='viewport_height', help='height of the viewed region of the complex plane before zooming',
                        metavar='VIEWPORT_HEIGHT', default=4.0)

    parser.add_argument('--zoom', type=float,
                        dest='zoom', help='factor by which the viewport is shrunk',
                        metavar='ZOOM', default=200.0)

    parser.add_argument('--anchor-re', type=float,
                        dest='anchor_re', help='real coordinate of the top-left pixel',
                        metavar='ANCHOR_RE', default=-0.76)

    parser.add_argument('--anchor-im', type=float,
                        dest='anchor_im', help='imaginary coordinate of the top-left pixel',
                        metavar='ANCHOR_IM', default=-0.05)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='iterations after which a point is considered inside the set',
                        metavar='MAX_ITERATIONS', default=1000)

    parser.add_argument('--escape-radius', type=float,
                        dest='escape_radius', help='magnitude beyond which an orbit has escaped',
                        metavar='ESCAPE_RADIUS', default=2.0)

    parser.add_argument('--workers', type=int,
                        dest='workers', help='number of worker processes (default: available CPUs minus one)',
                        metavar='WORKERS', default=None)

    parser.add_argument('--compress-level', type=int,
                        dest='compress_level', help='PNG compression level from 0 (none) to 9 (best)',
                        metavar='COMPRESS_LEVEL', default=9)

    parser.add_argument('--strategy', choices=sorted(STRATEGIES), default='filtered',
                        help='zlib strategy used to compress the filtered PNG rows.')

    parser.add_argument('--output-dir', type=str,
                        dest='output_dir', help='directory in which mandelbrot-<width>x<height>.png is written',
                        metavar='OUTPUT_DIR', default='.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print a line for every dispatched and composited tile.')

    return parser


def params_from_args(opt, parser: ArgumentParser) -> RenderParameters:
    try:
        return RenderParameters(
            width=opt.width,
            height=opt.height,
            tile_edge=opt.tile_edge,
            viewport_width=opt.viewport_width,
            viewport_height=opt.viewport_height,
            zoom=opt.zoom,
            anchor_re=opt.anchor_re,
            anchor_im=opt.anchor_im,
            max_iterations=opt.max_iterations,
            escape_radius=opt.escape_radius,
        )
    except ValueError as exc:
        parser.error(str(exc))


def settings_from_args(opt, parser: ArgumentParser) -> EncoderSettings:
    try:
        return EncoderSettings(compress_level=opt.compress_level, strategy=opt.strategy)
    except ValueError as exc:
        parser.error(str(exc))


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    params = params_from_args(opt, parser)
    settings = settings_from_args(opt, parser)
    if opt.workers is not None and opt.workers < 1:
        parser.error('--workers must be at least 1.')
    workers = opt.workers if opt.workers is not None else default_pool_size()

    log("canvas {0}x{1}, {2} tiles of edge {3}, {4} workers".format(
        params.width, params.height, tile_count(params.width, params.height, params.tile_edge), params.tile_edge, workers))

    try:
        output_path = render_to_file(
            params,
            Path(opt.output_dir).expanduser(),
            settings=settings,
            workers=workers,
            log=log,
        )
    except RenderError as exc:
        print(f"render failed: {exc}", file=sys.stderr)
        return 1

    print(f"saved {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
