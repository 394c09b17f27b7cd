# fermatscan/audit.py
# Cross-check Fermat verdicts against sympy's primality test.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

import sympy as sp

from .fermat import Verdict

PRIME = "prime"
COMPOSITE = "composite"
FALSE_POSITIVE = "false-positive"
FALSE_WITNESS = "false-witness"


def is_carmichael(n: int) -> bool:
    """Korselt: n composite, squarefree, and (p-1) | (n-1) for every prime p | n."""
    if n < 3 or sp.isprime(n):
        return False
    factors = sp.factorint(n)
    if any(e > 1 for e in factors.values()):
        return False
    return all((n - 1) % (int(p) - 1) == 0 for p in factors)


def audit_verdict(v: Verdict) -> str:
    prime = sp.isprime(int(v.candidate))
    if v.is_probable_prime:
        return PRIME if prime else FALSE_POSITIVE
    return FALSE_WITNESS if prime else COMPOSITE


@dataclass
class AuditSummary:
    counts: Dict[str, int] = field(default_factory=lambda: {
        PRIME: 0, COMPOSITE: 0, FALSE_POSITIVE: 0, FALSE_WITNESS: 0})
    # (n, is_carmichael)
    false_positives: List[Tuple[int, bool]] = field(default_factory=list)
    false_witnesses: List[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "counts": dict(self.counts),
            "false_positives": [{"n": str(n), "carmichael": c} for n, c in self.false_positives],
            "false_witnesses": [str(n) for n in self.false_witnesses],
        }


def audit_verdicts(verdicts: Iterable[Verdict]) -> AuditSummary:
    summary = AuditSummary()
    for v in verdicts:
        cls = audit_verdict(v)
        summary.counts[cls] += 1
        if cls == FALSE_POSITIVE:
            summary.false_positives.append((v.candidate, is_carmichael(v.candidate)))
        elif cls == FALSE_WITNESS:
            summary.false_witnesses.append(v.candidate)
    return summary
