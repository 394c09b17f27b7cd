# fermatscan/report.py
from __future__ import annotations
from typing import Any, Dict

from .fermat import Verdict


def format_verdict(v: Verdict) -> str:
    p = v.candidate
    if v.is_probable_prime:
        return f"{p} is a probable prime"
    line = f"{p} is composite - {v.witness} is a composite witness"
    if v.liar is not None:
        line += f" - {v.liar} is a fermat liar for {p}"
    return line


def verdict_to_dict(v: Verdict) -> Dict[str, Any]:
    """JSON payload; integers as strings like the factor endpoints."""
    return {
        "n": str(v.candidate),
        "verdict": "probable-prime" if v.is_probable_prime else "composite",
        "witness": None if v.witness is None else str(v.witness),
        "liar": None if v.liar is None else str(v.liar),
        "trials": v.trials,
        "bases": [str(a) for a in v.bases],
    }
