from __future__ import annotations

import pytest

from fermatscan import fermat
from fermatscan.bases import RandomBaseSource, SequenceBaseSource
from fermatscan.errors import InvalidInput
from tests._helpers import primes_below


def test_residue_zero_for_every_base_of_small_primes():
    for p in primes_below(200):
        for a in range(2, p):
            assert fermat.fermat_residue(a, p) == 0, (a, p)


def test_residue_full_expansion_matches_powmod():
    for p in (9, 15, 21, 91, 97, 341, 561):
        for a in range(2, min(p, 60)):
            assert fermat.fermat_residue_full(a, p) == fermat.fermat_residue(a, p)


def test_561_every_base_is_a_liar():
    assert all(fermat.fermat_residue(a, 561) == 0 for a in range(2, 561))


def test_first_trial_witness_has_no_liar():
    v = fermat.fermat_test(4, source=SequenceBaseSource([2]))
    assert v.is_composite
    assert v.witness == 2
    assert v.liar is None
    assert v.trials == 1
    assert v.bases == (2,)


def test_liar_is_base_from_previous_trial():
    # 4 and 11 both pass for 15, 13 does not
    v = fermat.fermat_test(15, source=SequenceBaseSource([4, 11, 13]))
    assert v.witness == 13
    assert v.liar == 11
    assert v.trials == 3
    assert v.bases == (4, 11, 13)


def test_repeated_liar_base():
    v = fermat.fermat_test(15, source=SequenceBaseSource([4, 4, 13]))
    assert v.witness == 13
    assert v.liar == 4


def test_even_candidate_runs_the_same_loop():
    # 3^6 - 3 = 726 = 6 * 121, 2^6 - 2 = 62
    v = fermat.fermat_test(6, source=SequenceBaseSource([3, 2]))
    assert v.witness == 2
    assert v.liar == 3


def test_budget_exhausted_on_liars_gives_probable_prime():
    v = fermat.fermat_test(15, trial_budget=5, source=SequenceBaseSource([4]))
    assert v.is_probable_prime
    assert v.witness is None and v.liar is None
    assert v.trials == 5


def test_trial_budget_is_respected_for_primes():
    v = fermat.fermat_test(997, trial_budget=7, source=RandomBaseSource(3))
    assert v.is_probable_prime
    assert v.trials == 7
    assert all(2 <= a <= 996 for a in v.bases)


def test_default_budget_is_twenty():
    assert fermat.DEFAULT_TRIAL_BUDGET == 20
    assert fermat.fermat_test(13, source=RandomBaseSource(0)).trials == 20


def test_no_false_witness_for_primes_below_1000():
    for seed in range(3):
        source = RandomBaseSource(seed)
        for p in primes_below(1000):
            assert fermat.fermat_test(p, source=source).is_probable_prime, (seed, p)


def test_561_is_always_a_probable_prime():
    for seed in range(5):
        for budget in (1, 20, 200):
            v = fermat.fermat_test(561, budget, RandomBaseSource(seed))
            assert v.is_probable_prime
            assert v.trials == budget


def test_p3_single_base_no_crash():
    v = fermat.fermat_test(3, source=RandomBaseSource(11))
    assert v.is_probable_prime
    assert set(v.bases) == {2}
    assert v.trials == 20


def test_4_witness_in_range():
    for seed in range(10):
        v = fermat.fermat_test(4, source=RandomBaseSource(seed))
        assert v.witness in (2, 3)
        assert v.liar is None


def test_seeded_runs_are_idempotent():
    for n in (15, 91, 561, 997, 341):
        v1 = fermat.fermat_test(n, source=RandomBaseSource(1234))
        v2 = fermat.fermat_test(n, source=RandomBaseSource(1234))
        assert v1 == v2


def test_composites_found_with_enough_trials():
    # non-Carmichael, liar-heavy composites
    for n in (15, 91, 341, 703, 6):
        hits = sum(fermat.fermat_test(n, 40, RandomBaseSource(s)).is_composite for s in range(20))
        assert hits == 20, n


@pytest.mark.parametrize("p", [2, 1, 0, -7])
def test_candidates_below_3_are_rejected(p):
    with pytest.raises(InvalidInput):
        fermat.fermat_test(p)
    with pytest.raises(InvalidInput):
        fermat.fermat_test_batched(p)


def test_non_integer_candidate_rejected():
    with pytest.raises(InvalidInput):
        fermat.fermat_test(7.0)
    with pytest.raises(InvalidInput):
        fermat.fermat_test("7")


def test_zero_budget_rejected():
    with pytest.raises(InvalidInput):
        fermat.fermat_test(7, trial_budget=0)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError, match=">= 3"):
        fermat.fermat_test(2)


def test_batched_matches_sequential_for_same_bases():
    cases = [
        (15, [4, 11, 13, 2]),
        (15, [13, 4]),
        (561, [2, 5, 100, 560]),
        (91, [3, 9, 10, 12, 2]),
    ]
    for n, bases in cases:
        seq = fermat.fermat_test(n, 4, SequenceBaseSource(bases))
        bat = fermat.fermat_test_batched(n, 4, SequenceBaseSource(bases))
        assert seq == bat, (n, bases)


def test_batched_matches_sequential_seeded():
    for n in range(3, 300):
        for seed in (1, 2):
            assert fermat.fermat_test(n, 20, RandomBaseSource(seed)) == \
                fermat.fermat_test_batched(n, 20, RandomBaseSource(seed))
