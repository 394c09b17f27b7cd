# fermatscan/scan.py
# Candidate range driver: one Fermat verdict per candidate, in candidate order.

from __future__ import annotations
import os
import concurrent.futures
from typing import Iterable, Iterator, Optional

from .bases import RandomBaseSource, candidate_seed
from .errors import InvalidInput
from .fermat import DEFAULT_TRIAL_BUDGET, Verdict, fermat_test

DEFAULT_START = 3
DEFAULT_STOP = 1000


def candidates(start: int = DEFAULT_START, stop: int = DEFAULT_STOP, odd_only: bool = False) -> range:
    if start < 3:
        raise InvalidInput(f"scan must start at 3 or above (got {start})", start)
    if odd_only:
        return range(start | 1, stop, 2)
    return range(start, stop)


def _test_seeded(p: int, trial_budget: int, seed: Optional[int]) -> Verdict:
    # runs inside a worker process; own stream per candidate
    return fermat_test(p, trial_budget, RandomBaseSource(candidate_seed(seed, p)))


def verdicts_for(ns: Iterable[int], trial_budget: int = DEFAULT_TRIAL_BUDGET,
              seed: Optional[int] = None, workers: int = 1) -> Iterator[Verdict]:
    """Verdicts for ns, yielded in the order given."""
    if workers <= 1:
        source = RandomBaseSource(seed)
        for p in ns:
            yield fermat_test(p, trial_budget, source)
        return

    ns = list(ns)
    num_workers = min(workers, os.cpu_count() or 1, max(1, len(ns)))
    chunk = max(1, len(ns) // (num_workers * 8))
    with concurrent.futures.ProcessPoolExecutor(max_workers=num_workers) as executor:
        # map keeps submission order, so results come back sorted by candidate
        yield from executor.map(_test_seeded, ns, [trial_budget] * len(ns),
                                [seed] * len(ns), chunksize=chunk)


def scan_range(start: int = DEFAULT_START, stop: int = DEFAULT_STOP,
               trial_budget: int = DEFAULT_TRIAL_BUDGET, seed: Optional[int] = None,
               workers: int = 1, odd_only: bool = False) -> Iterator[Verdict]:
    """
    Test every candidate start <= p < stop.
    workers == 1 shares one RNG across the scan; workers > 1 gives each
    candidate its own seeded stream, so output does not depend on the pool size.
    """
    return verdicts_for(candidates(start, stop, odd_only), trial_budget, seed, workers)
