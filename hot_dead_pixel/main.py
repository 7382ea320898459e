# Application entry point
"""
Injects synthetic hot/dead pixels into an image, detects them, reports the
detection accuracy and writes the corrected image.

Usage:
    hot-dead-pixel input.png output.png --hot 100 --dead 100 --seed 42
    python -m hot_dead_pixel.main input.png output.png --log-level DEBUG
"""

import argparse
import sys

from hot_dead_pixel.config import settings
from hot_dead_pixel.services.repair_service import PIPELINE_METHODS, RepairService
from hot_dead_pixel.utils.errors import ConfigurationError, DecodeError, EncodeError, format_user_error
from hot_dead_pixel.utils.logger import LOG_LEVEL_MAP, get_logger, set_log_level

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_DECODE_ERROR = 1
EXIT_ENCODE_ERROR = 2
EXIT_CONFIG_ERROR = 3


def _non_negative_int(value):
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def parse_args(argv=None):
    defaults = settings.INJECTION_DEFAULTS
    p = argparse.ArgumentParser(
        prog="hot-dead-pixel",
        description="Inject, detect and correct hot/dead pixels in an RGB image.",
    )
    p.add_argument("source", help="Image to read")
    p.add_argument("target", help="Where to write the corrected image (.png, .bmp, .tga, .jpg)")
    p.add_argument("--hot", type=_non_negative_int, default=defaults["hot_count"],
                   help="Number of hot pixels to inject")
    p.add_argument("--dead", type=_non_negative_int, default=defaults["dead_count"],
                   help="Number of dead pixels to inject")
    p.add_argument("--seed", type=int, default=defaults["seed"],
                   help="Random seed for injection")
    p.add_argument("--snapshot", default=None,
                   help="Where to write the image after injection (default: <target>_injected)")
    p.add_argument("--no-snapshot", action="store_true",
                   help="Skip writing the post-injection snapshot")
    p.add_argument("--method", default="vectorized", choices=PIPELINE_METHODS,
                   help="Detector implementation")
    p.add_argument("--log-level", default=settings.LOGGING_LEVEL,
                   choices=sorted(LOG_LEVEL_MAP),
                   help="Logging level")
    return p.parse_args(argv)


def main(argv=None) -> int:
    try:
        args = parse_args(argv)
    except SystemExit as e:
        # Bad arguments report as configuration errors; --help exits cleanly
        if e.code in (None, 0):
            return EXIT_OK
        return EXIT_CONFIG_ERROR
    set_log_level(args.log_level)

    try:
        service = RepairService(method=args.method)
        result = service.run(
            args.source,
            args.target,
            args.hot,
            args.dead,
            seed=args.seed,
            snapshot_path=args.snapshot,
            save_snapshot=not args.no_snapshot,
        )
    except DecodeError as e:
        logger.error("Could not read source image: %s", e)
        print(format_user_error(e), file=sys.stderr)
        return EXIT_DECODE_ERROR
    except EncodeError as e:
        logger.error("Could not write output image: %s", e)
        print(format_user_error(e), file=sys.stderr)
        return EXIT_ENCODE_ERROR
    except ConfigurationError as e:
        logger.error("Invalid configuration: %s", e)
        print(format_user_error(e, "configuring the run"), file=sys.stderr)
        return EXIT_CONFIG_ERROR

    for line in result.report.summary_lines():
        print(line)
    print(f"Corrected {result.corrected} pixel(s); wrote '{result.target_path}'")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
