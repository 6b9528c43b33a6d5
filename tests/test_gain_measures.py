import math

import pytest

from trecmeasures.counts import ResRels
from trecmeasures.gain_measures import g_measure, ndcg_p, rndcg


def graded(results, rel_levels, num_rel_ret):
    return ResRels(
        results_rel_list=results,
        rel_levels=rel_levels,
        num_rel=sum(rel_levels[1:]),
        num_rel_ret=num_rel_ret,
    )


PERFECT = graded((2, 1, 1), (5, 2, 1), 3)
REVERSED = graded((0, 1, 1, 2), (5, 2, 1), 3)
NAN = pytest.approx(float("nan"), nan_ok=True)


def test_g_perfect_ranking_is_one():
    assert g_measure(PERFECT) == pytest.approx(1.0)


def test_g_binary_relevant_at_rank_two_matches_documented_formula():
    res = graded((0, 1), (1, 1), 1)
    assert g_measure(res) == pytest.approx(1.0 / math.log2(3))


def test_g_unjudged_doc_counts_like_nonrelevant():
    judged = graded((0, 1), (1, 1), 1)
    unjudged = graded((-1, 1), (1, 1), 1)
    assert g_measure(unjudged) == pytest.approx(g_measure(judged))


def test_g_prefers_earlier_relevant():
    early = graded((1, 0, 0), (2, 1), 1)
    late = graded((0, 0, 1), (2, 1), 1)
    assert g_measure(early) > g_measure(late)


def test_g_no_relevant_docs_is_zero():
    assert g_measure(graded((0, 0), (2,), 0)) == 0.0


def test_g_between_zero_and_one_for_imperfect_ranking():
    value = g_measure(REVERSED)
    assert 0.0 < value < 1.0


def test_rndcg_perfect_ranking_is_one():
    assert rndcg(PERFECT) == pytest.approx(1.0)


def test_rndcg_no_relevant_is_zero():
    assert rndcg(graded((0, 0), (2,), 0)) == 0.0


def test_rndcg_perfect_beats_reversed():
    assert rndcg(PERFECT) > rndcg(REVERSED)


def test_rndcg_all_gains_zero_is_nan():
    res = graded((1,), (0, 1), 1)
    assert rndcg(res, {1: 0.0}) == NAN


def test_ndcg_p_perfect_ranking_is_one():
    assert ndcg_p(PERFECT) == pytest.approx(1.0, rel=1e-6)


def test_ndcg_p_first_two_ranks_undiscounted():
    first = graded((1, 0), (1, 1), 1)
    second = graded((0, 1), (1, 1), 1)
    assert ndcg_p(first) == pytest.approx(1.0)
    assert ndcg_p(second) == pytest.approx(ndcg_p(first))


def test_ndcg_p_nothing_relevant_retrieved_is_zero():
    assert ndcg_p(graded((0, 0), (2, 1), 0)) == 0.0


def test_ndcg_p_gain_override_keeps_perfect_ranking_at_one():
    res = graded((1, 1, 0), (1, 2), 2)
    assert ndcg_p(res, {"1": 2.5}) == pytest.approx(1.0, rel=1e-6)


def test_ndcg_p_zero_gains_give_nan():
    res = graded((1,), (0, 1), 1)
    assert ndcg_p(res, {1: 0.0}) == NAN


def test_ndcg_p_imperfect_ranking_below_one():
    value = ndcg_p(REVERSED)
    assert 0.0 < value < 1.0