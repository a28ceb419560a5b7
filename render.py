import logging
import os
import re
import sys
import time
from argparse import ArgumentParser
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])

# TensorFlow is only loaded by the tensor backend; keep its start-up noise
# out of the way unless asked for.
if not _cli_verbose and os.environ.get("TF_CPP_MIN_LOG_LEVEL") is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


from mandelbrot import (
    DEFAULT_DEPTH,
    DEFAULT_WORKERS,
    RenderConfig,
    Viewport,
    band_height,
    new_buffer,
    parse_bounds,
    parse_complex,
    render_parallel,
    write_image,
)
from mandelbrot.image import image_format_for
from mandelbrot.renderer import BACKENDS


def build_parser():
    parser = ArgumentParser(
        description='Render a region of the Mandelbrot set as a grayscale image.',
        epilog='Points with a negative real part may also follow "--", '
               'e.g. "out.png 800x600 -- -1.20,0.35 -1,0.20".',
    )
    # Relies on argparse internals: before Python 3.13 only plain numbers such
    # as "-1.2" count as negative numbers, so "-1.20,0.35" would read as an
    # option. "--" keeps working if this attribute ever goes away.
    parser._negative_number_matcher = re.compile(r'^-\.?\d')

    parser.add_argument('file', metavar='FILE',
                        help='image file to write; the format follows the suffix unless --format is given')

    parser.add_argument('pixels', metavar='PIXELS',
                        help='image size in pixels, e.g. "1000x750"')

    parser.add_argument('upper_left', metavar='UPPERLEFT',
                        help='plane point at the upper-left corner, e.g. "-1.20,0.35"')

    parser.add_argument('lower_right', metavar='LOWERRIGHT',
                        help='plane point at the lower-right corner, e.g. "-1,0.20"')

    parser.add_argument('--workers', type=int,
                        dest='workers', help='number of threads rendering bands concurrently',
                        metavar='WORKERS', default=DEFAULT_WORKERS)

    parser.add_argument('--depth', type=int,
                        dest='depth', help='iteration limit, also the brightest intensity (1-255)',
                        metavar='DEPTH', default=DEFAULT_DEPTH)

    parser.add_argument('--backend', choices=BACKENDS, default='python',
                        help='"python" evaluates pixel by pixel; "tensor" vectorizes each band with TensorFlow.')

    parser.add_argument('--format', type=str,
                        dest='format', help='file format for the image. Can be any extension supported by Pillow. Default: taken from FILE, else "png".',
                        metavar='FORMAT', default=None)

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including band layout and timing.')

    return parser


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)
    logging.basicConfig(
        level=logging.DEBUG if VERBOSE else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    bounds = parse_bounds(opt.pixels)
    if bounds is None:
        parser.error(f"error parsing image dimensions '{opt.pixels}' (expected WIDTHxHEIGHT)")

    upper_left = parse_complex(opt.upper_left)
    if upper_left is None:
        parser.error(f"error parsing upper left corner point '{opt.upper_left}' (expected RE,IM)")

    lower_right = parse_complex(opt.lower_right)
    if lower_right is None:
        parser.error(f"error parsing lower right corner point '{opt.lower_right}' (expected RE,IM)")

    if opt.workers < 1:
        parser.error(f"--workers must be at least 1, got {opt.workers}")

    try:
        viewport = Viewport(upper_left, lower_right)
        config = RenderConfig(depth=opt.depth, backend=opt.backend)
        image_format_for(Path(opt.file), opt.format)
    except ValueError as exc:
        parser.error(str(exc))

    log(f"Rendering {bounds.width}x{bounds.height} from {viewport.upper_left} to {viewport.lower_right}")
    log(f"{opt.workers} workers, bands of up to {band_height(bounds.height, opt.workers)} rows, "
        f"depth {config.depth}, {config.backend} backend")

    pixels = new_buffer(bounds)
    start = time.perf_counter()
    render_parallel(pixels, bounds, viewport, opt.workers, config)
    log(f"Rendered in {time.perf_counter() - start:.2f}s")

    try:
        output_path = write_image(opt.file, pixels, bounds, opt.format)
    except OSError as exc:
        print(f"error writing '{opt.file}': {exc}", file=sys.stderr)
        return 1

    log(f"Image saved to {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
