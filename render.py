import logging
import os
import sys
import warnings

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

from argparse import ArgumentParser

import tensorflow as tf

from mandelthreads import RenderOptions, TqdmProgress, render_image, write_image
from mandelthreads.logging_utils import configure_logging
from mandelthreads.options import (
    DEFAULT_CENTRE_X,
    DEFAULT_CENTRE_Y,
    DEFAULT_HEIGHT,
    DEFAULT_MAX_COLOURS,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_PALETTE,
    DEFAULT_SAMPLES,
    DEFAULT_SCALE_Y,
    DEFAULT_THREADS,
    DEFAULT_WIDTH,
)
from mandelthreads.palette import Palette

DEFAULT_FILENAME = "output.bmp"

logger = logging.getLogger("mandelthreads.cli")


def build_parser():
    # -h selects the height, so help is only reachable through --help.
    parser = ArgumentParser(description="Mandelbrot generator", add_help=False)
    parser.add_argument('--help', action='help', help='show this help message and exit')

    parser.add_argument('-w', '--width', type=int,
                        dest='width', help=f'Set width (default {DEFAULT_WIDTH})',
                        metavar='WIDTH', default=DEFAULT_WIDTH)

    parser.add_argument('-h', '--height', type=int,
                        dest='height', help=f'Set height (default {DEFAULT_HEIGHT})',
                        metavar='HEIGHT', default=DEFAULT_HEIGHT)

    parser.add_argument('--centrex', type=float,
                        dest='centre_x', help=f'Set centrex (default {DEFAULT_CENTRE_X})',
                        metavar='CENTREX', default=DEFAULT_CENTRE_X)

    parser.add_argument('--centrey', type=float,
                        dest='centre_y', help=f'Set centrey (default {DEFAULT_CENTRE_Y})',
                        metavar='CENTREY', default=DEFAULT_CENTRE_Y)

    parser.add_argument('--iterations', type=int,
                        dest='max_iterations', help=f'Set maximum number of iterations (default {DEFAULT_MAX_ITERATIONS})',
                        metavar='ITERATIONS', default=DEFAULT_MAX_ITERATIONS)

    parser.add_argument('--scale', type=float,
                        dest='scale_y', help=f'Set scale (default {DEFAULT_SCALE_Y})',
                        metavar='SCALE', default=DEFAULT_SCALE_Y)

    parser.add_argument('--samples', type=int,
                        dest='samples', help=f'Set samples for supersampling (default {DEFAULT_SAMPLES})',
                        metavar='SAMPLES', default=DEFAULT_SAMPLES)

    palette_names = ", ".join(f"{int(p)}={p.name.lower()}" for p in Palette)
    parser.add_argument('--colour', type=int,
                        dest='palette_code', help=f'Set colour for image: {palette_names} (default {DEFAULT_PALETTE})',
                        metavar='COLOUR', default=DEFAULT_PALETTE)

    parser.add_argument('--colours', type=int,
                        dest='max_colours', help=f'Number of entries in the palette (default {DEFAULT_MAX_COLOURS})',
                        metavar='COLOURS', default=DEFAULT_MAX_COLOURS)

    parser.add_argument('-j', '--threads', type=int,
                        dest='thread_count', help=f'Set number of threads to use for processing (default {DEFAULT_THREADS})',
                        metavar='THREADS', default=DEFAULT_THREADS)

    parser.add_argument('--name', type=str,
                        dest='filename', help=f'Set filename (default {DEFAULT_FILENAME}) supported formats are PNG, JPEG, BMP, and TIFF',
                        metavar='NAME', default=DEFAULT_FILENAME)

    parser.add_argument('--colourise', action='store_true',
                        help='Use a different colour for each thread')

    parser.add_argument('--progress', action='store_true',
                        help='Display progress bar')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def configure_tensorflow_logging(verbose):
    # The import-time preamble only sees sys.argv; main() may be handed argv directly.
    if verbose:
        level = "DEBUG"
    elif os.environ.get("TF_CPP_MIN_LOG_LEVEL") == "0":
        return
    else:
        level = "ERROR"
    tf_logger = tf.get_logger()
    tf_logger.setLevel(level)
    for handler in tf_logger.handlers:
        handler.setLevel(level)


def options_from_args(opt, parser: ArgumentParser) -> RenderOptions:
    try:
        return RenderOptions(
            width=opt.width,
            height=opt.height,
            centre_x=opt.centre_x,
            centre_y=opt.centre_y,
            scale_y=opt.scale_y,
            max_iterations=opt.max_iterations,
            samples=opt.samples,
            palette_code=opt.palette_code,
            colourise=bool(opt.colourise),
            thread_count=opt.thread_count,
            progress_enabled=bool(opt.progress),
            max_colours=opt.max_colours,
        )
    except ValueError as exc:
        parser.error(str(exc))


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    configure_logging(logging.DEBUG if opt.verbose else logging.INFO)
    configure_tensorflow_logging(opt.verbose)
    options = options_from_args(opt, parser)

    progress = TqdmProgress(enabled=options.progress_enabled)
    result = render_image(options, progress=progress)

    status = 0
    if result.errors:
        status = 1

    try:
        path = write_image(result.buffer, result.width, result.height, opt.filename)
    except (OSError, ValueError) as exc:
        logger.error("Could not write file: %s", exc)
        return 1

    logger.info("Wrote %s", path)
    return status


if __name__ == '__main__':
    sys.exit(main())
