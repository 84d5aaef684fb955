"""
Pipelines.

DiffPipeline - turns a sequence of images into a BASE copy of the first
               image and one DIFF image per consecutive pair. Pairs are
               compared on a bounded pool of worker threads.

JoinPipeline - turns a BASE image and its DIFF images back into the
               original sequence. Each step needs the result of the one
               before it, so it runs in the caller's thread.

Use them as context managers; stage statistics are printed on exit:

    with DiffPipeline(workers=4) as p:
        p.run(paths)
"""

import sys
import logging
import threading
from abc import ABC,abstractmethod
from concurrent.futures import ThreadPoolExecutor, as_completed

from .constants import C
from .errors import FrameError
from .frame import Frame
from .naming import output_filename, original_filename, has_tag
from .stage import DiffFrames, ApplyDiff
from . import storage

logger = logging.getLogger(__name__)

class Pipeline(ABC):
    """Base pipeline class"""
    def __init__(self, out=sys.stdout):
        self.stages  = []
        self.running = False
        self.out     = out

    def check_paths(self, paths):
        if not self.running:
            raise RuntimeError("pipeline not running")
        if len(paths) < 2:
            raise ValueError(f"{self.__class__.__name__} requires at least two input images, got {len(paths)}")

    @abstractmethod
    def run(self, paths):
        """Process the list of paths."""

    def print_stats(self, out=sys.stdout):
        for stage in self.stages:
            name = stage.__class__.__name__
            if stage.count==0:
                print(f"{name}: calls: 0", file=out)
                continue
            print(f"{name}: calls: {stage.count}  mean: {stage.t_mean:.2}s  stddev: {stage.t_stddev:.2}",
                  file=out)

    def __enter__(self):
        self.running = True
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if self.out is not None:
            self.print_stats(out=self.out)
        self.running = False
        return False


class DiffPipeline(Pipeline):
    """Write image1.BASE.ext and image2.DIFF.ext, image3.DIFF.ext, ...
    A failure on one pair is logged and recorded in self.skipped; the rest of the run continues."""
    def __init__(self, workers=C.DEFAULT_WORKERS, **kwargs):
        super().__init__(**kwargs)
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers
        self.differ  = DiffFrames()
        self.stages  = [self.differ]
        self.skipped = []

    def skip(self, urn, reason):
        logger.error("Skipping comparison for %s: %s", urn, reason)
        self.skipped.append((urn, reason))

    def run(self, paths):
        """Returns the list of PairResults for the diffs written, in input order.
        Raises FrameError if the first image cannot be loaded or copied."""
        self.check_paths(paths)
        self.skipped = []

        # The first image must load and copy, or nothing else makes sense.
        first = paths[0]
        prev = Frame.load(first)
        base_urn = output_filename(first, C.BASE_TAG)
        storage.copy_file(first, base_urn)
        logger.info("Copied base image %s to %s", first, base_urn)

        # Bound the number of frames queued for the pool, not just the number of threads.
        slots = threading.BoundedSemaphore(2 * self.workers)
        futures = {}
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            for (i, urn) in enumerate(paths[1:], start=1):
                try:
                    cur = Frame.load(urn)
                except FrameError as e:
                    self.skip(urn, str(e))
                    prev = None
                    continue
                if prev is None:
                    self.skip(urn, f"previous image {paths[i-1]} failed to load")
                else:
                    slots.acquire()
                    future = pool.submit(self.differ.run, prev, cur)
                    future.add_done_callback(lambda _: slots.release())
                    futures[future] = urn
                prev = cur

            logger.info("Waiting for image processing tasks to complete...")
            results = []
            for future in as_completed(futures):
                try:
                    results.append(future.result())
                except FrameError as e:
                    self.skip(futures[future], str(e))

        order = {urn:i for (i, urn) in enumerate(paths)}
        results.sort(key=lambda r: order[r.urn])
        logger.info("Diff processing complete: %d diffs written, %d skipped.",
                    len(results), len(self.skipped))
        return results


class JoinPipeline(Pipeline):
    """Reconstruct image1.ext, image2.ext, ... from image1.BASE.ext image2.DIFF.ext ...
    Runs in the caller's thread; any FrameError stops the run."""
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.applier = ApplyDiff()
        self.stages  = [self.applier]

    def run(self, paths):
        """Returns the list of paths written, in input order."""
        self.check_paths(paths)
        base_urn = paths[0]
        if not has_tag(base_urn, C.BASE_TAG):
            logger.warning("First file %s does not appear to be a .%s file.", base_urn, C.BASE_TAG)

        prev = Frame.load(base_urn)
        urn = original_filename(base_urn)
        prev.save(urn)
        logger.info("Saved reconstructed base image: %s", urn)
        written = [urn]

        for diff_urn in paths[1:]:
            if not has_tag(diff_urn, C.DIFF_TAG):
                logger.warning("Input file %s does not appear to be a .%s file.", diff_urn, C.DIFF_TAG)
            logger.info("Applying diff: %s", diff_urn)
            diff = Frame.load(diff_urn)
            prev = self.applier.run(prev, diff)
            written.append(prev.urn)

        logger.info("Join processing complete: %d images reconstructed.", len(written))
        return written
