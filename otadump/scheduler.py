"""Parallel extraction of several partitions"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, Optional

from .errors import ExtractError

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 4


def run(payload, names: Iterable[str], output_dir, workers: int = DEFAULT_WORKERS) -> list[Path]:
    """
    Extract each partition in `names` with a pool of `workers` threads.

    The first failure wins: partitions not yet started are cancelled, those
    already running finish on their own, then the first ExtractError is
    raised. Later failures are only logged. Unknown names are skipped.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    output_dir = Path(output_dir)
    written = []
    first_error: Optional[ExtractError] = None

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix='extract') as executor:
        # one worker per output file, so each name is submitted once
        futures = {executor.submit(payload.extract, name, output_dir): name
                   for name in dict.fromkeys(names)}

        for future in as_completed(futures):
            name = futures[future]
            if future.cancelled():
                continue
            try:
                path = future.result()
            except ExtractError as e:
                if first_error is None:
                    first_error = e
                    for pending in futures:
                        pending.cancel()
                else:
                    logger.error("Discarding later failure: %s", e)
                continue

            if path is not None:
                logger.debug("Finished %s", name)
                written.append(path)

    if first_error is not None:
        raise first_error
    return written
