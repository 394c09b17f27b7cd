# fermatscan/config.py
# Scan settings: built-in defaults < FERMAT_* environment < explicit overrides.

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .fermat import DEFAULT_TRIAL_BUDGET
from .scan import DEFAULT_START, DEFAULT_STOP

ENV_MAX_CANDIDATE = "FERMAT_MAX_CANDIDATE"
ENV_TRIAL_BUDGET = "FERMAT_TRIAL_BUDGET"
ENV_SEED = "FERMAT_SEED"
ENV_WORKERS = "FERMAT_WORKERS"


@dataclass(frozen=True)
class ScanConfig:
    max_candidate: int = DEFAULT_STOP
    trial_budget: int = DEFAULT_TRIAL_BUDGET
    min_candidate: int = DEFAULT_START
    seed: Optional[int] = None
    workers: int = 1
    odd_only: bool = False


def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    s = env.get(name, "").strip()
    if not s:
        return None
    try:
        return int(s, 0)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {s!r})") from None


def resolve_scan_config(
    *,
    max_candidate: int | None = None,
    trial_budget: int | None = None,
    min_candidate: int | None = None,
    seed: int | None = None,
    workers: int | None = None,
    odd_only: bool = False,
    env: Mapping[str, str] | None = None,
) -> ScanConfig:
    """Resolve defaults + environment + overrides. Explicit overrides always win."""
    if env is None:
        env = os.environ
    cfg = ScanConfig()

    hi = _env_int(env, ENV_MAX_CANDIDATE)
    t = _env_int(env, ENV_TRIAL_BUDGET)
    s = _env_int(env, ENV_SEED)
    w = _env_int(env, ENV_WORKERS)

    hi = cfg.max_candidate if hi is None else hi
    t = cfg.trial_budget if t is None else t
    w = cfg.workers if w is None else w
    lo = cfg.min_candidate

    if max_candidate is not None:
        hi = int(max_candidate)
    if trial_budget is not None:
        t = int(trial_budget)
    if min_candidate is not None:
        lo = int(min_candidate)
    if seed is not None:
        s = int(seed)
    if workers is not None:
        w = int(workers)

    if lo < 3:
        raise ValueError("min_candidate must be >= 3")
    if hi < lo:
        raise ValueError("max_candidate must be >= min_candidate")
    if t < 1:
        raise ValueError("trial_budget must be >= 1")
    if w < 1:
        raise ValueError("workers must be >= 1")

    return ScanConfig(max_candidate=hi, trial_budget=t, min_candidate=lo,
                      seed=s, workers=w, odd_only=bool(odd_only))
