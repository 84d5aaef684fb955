"""
Command line interface.

    deltaframe --diff <image1> <image2> [image3 ...]
        Generates base and difference images.
        Output: <image1_name>.BASE.<ext>, <image2_name>.DIFF.<ext>, ...

    deltaframe --join <base_image> <diff_image2> [diff_image3 ...]
        Reconstructs original images from base and difference files.
        Input: image1.BASE.png image2.DIFF.png image3.DIFF.png ...
        Output: image1.png, image2.png, image3.png, ...
"""

import sys
import logging
import argparse

from .config import load_config, LOGLEVELS
from .errors import FrameError
from .frame import Frame
from .pipeline import DiffPipeline, JoinPipeline

logger = logging.getLogger(__name__)

def get_parser():
    parser = argparse.ArgumentParser(prog="deltaframe",
                                     description="Store a sequence of similar images as a base image and per-pixel diffs",
                                     epilog=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--diff", "-diff", action='store_true',
                      help="Generate difference files (BASE + DIFFs)")
    mode.add_argument("--join", "-join", action='store_true',
                      help="Reconstruct images from BASE + DIFFs")
    parser.add_argument("files", nargs="*", help="Images, in sequence order")
    parser.add_argument("--workers", type=int, help="Number of threads comparing image pairs in --diff mode")
    parser.add_argument("--config", help="YAML file with workers, png_compression and loglevel")
    parser.add_argument("--loglevel", type=str.upper, choices=LOGLEVELS, help="Logging level (default INFO)")
    return parser

def main(argv=None):
    parser = get_parser()
    args = parser.parse_args(argv)
    if len(args.files) < 2:
        what = "input images" if args.diff else "input images (base + diffs)"
        parser.error(f"{'--diff' if args.diff else '--join'} mode requires at least two {what}")

    try:
        config = load_config(args.config, workers=args.workers, loglevel=args.loglevel)
    except (OSError, ValueError) as e:
        parser.error(f"bad configuration: {e}")

    logging.basicConfig(level=config['loglevel'], format="%(levelname)s: %(message)s")
    Frame.png_compression = config['png_compression']

    try:
        if args.diff:
            logger.info("Mode: Diff")
            with DiffPipeline(workers=config['workers']) as p:
                p.run(args.files)
        else:
            logger.info("Mode: Join")
            with JoinPipeline() as p:
                p.run(args.files)
    except FrameError as e:
        logger.error("%s", e)
        return 1
    logger.info("Processing complete.")
    return 0

if __name__=="__main__":
    sys.exit(main())
