# fermatscan/fermat.py
# Fermat probable-prime tester
# - residue (a^p - a) mod p over gmpy2 mpz
# - bounded random trials, stop on first composite witness
# - liar = base drawn on the trial right before the witness

from __future__ import annotations
import operator
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import gmpy2
from gmpy2 import mpz

from .bases import BaseSource, RandomBaseSource
from .errors import InvalidInput

DEFAULT_TRIAL_BUDGET = 20

# ---------- Arithmetic ----------

def fermat_residue(a: int, p: int) -> int:
    """(a^p - a) mod p, via modular exponentiation."""
    A, P = mpz(a), mpz(p)
    return int((gmpy2.powmod(A, P, P) - A) % P)

def fermat_residue_full(a: int, p: int) -> int:
    """(a^p - a) mod p with a^p expanded in full before the reduction."""
    A = mpz(a)
    return int((A ** int(p) - A) % p)

# ---------- Verdicts ----------

@dataclass(frozen=True)
class Verdict:
    candidate: int
    witness: Optional[int] = None
    liar: Optional[int] = None
    trials: int = 0
    bases: Tuple[int, ...] = ()

    @property
    def is_composite(self) -> bool:
        return self.witness is not None

    @property
    def is_probable_prime(self) -> bool:
        return self.witness is None

@dataclass
class TrialState:
    """Loop state for one candidate; discarded once the verdict is built."""
    trial_count: int = 0
    witness: Optional[int] = None
    liar: Optional[int] = None
    previous_base: Optional[int] = None
    bases: List[int] = field(default_factory=list)

    def running(self, budget: int) -> bool:
        return self.trial_count < budget and self.witness is None

    def record(self, base: int, residue: int) -> None:
        self.bases.append(base)
        if residue != 0:
            self.witness = base
            if self.previous_base is not None:
                self.liar = self.previous_base
        else:
            self.previous_base = base
            self.trial_count += 1

    def verdict(self, p: int) -> Verdict:
        return Verdict(candidate=p, witness=self.witness, liar=self.liar,
                       trials=len(self.bases), bases=tuple(self.bases))

# ---------- Tester ----------

def _validate(p, trial_budget: int) -> int:
    try:
        p = operator.index(p)
    except TypeError:
        raise InvalidInput(f"candidate must be an integer (got {p!r})", p) from None
    if p < 3:
        raise InvalidInput(f"candidate must be >= 3 (got {p})", p)
    if trial_budget < 1:
        raise InvalidInput(f"trial_budget must be >= 1 (got {trial_budget})", trial_budget)
    return p

def fermat_test(p: int, trial_budget: int = DEFAULT_TRIAL_BUDGET,
                source: Optional[BaseSource] = None) -> Verdict:
    """
    Run up to trial_budget Fermat trials on p with fresh bases from source.
    Stops at the first composite witness. A probable-prime verdict means
    every base tried was a liar or p is prime (Carmichael numbers always pass).
    """
    p = _validate(p, trial_budget)
    if source is None:
        source = RandomBaseSource()
    state = TrialState()
    while state.running(trial_budget):
        a = source.draw(p)
        state.record(a, fermat_residue(a, p))
    return state.verdict(p)

def fermat_test_batched(p: int, trial_budget: int = DEFAULT_TRIAL_BUDGET,
                        source: Optional[BaseSource] = None) -> Verdict:
    """
    Draw every base first, evaluate all residues, then pick the first
    nonzero one in draw order. Same witness/liar as fermat_test for the
    same base sequence; the trials are independent so they can be farmed out.
    """
    p = _validate(p, trial_budget)
    if source is None:
        source = RandomBaseSource()
    drawn = [source.draw(p) for _ in range(trial_budget)]
    residues = [fermat_residue(a, p) for a in drawn]
    for i, r in enumerate(residues):
        if r != 0:
            liar = drawn[i - 1] if i > 0 else None
            return Verdict(candidate=p, witness=drawn[i], liar=liar,
                           trials=i + 1, bases=tuple(drawn[:i + 1]))
    return Verdict(candidate=p, trials=trial_budget, bases=tuple(drawn))
