import math

import pytest

from trecmeasures.ap import MIN_GEO_MEAN, average_precision
from trecmeasures.bpref import bpref, gm_bpref, inf_ap
from trecmeasures.counts import RELVALUE_NONPOOL, RELVALUE_UNJUDGED, ResRels


def _rr(rels, rel_levels, num_rel=None):
    if num_rel is None:
        num_rel = sum(rel_levels[1:])
    return ResRels(
        results_rel_list=rels,
        rel_levels=rel_levels,
        num_rel=num_rel,
        num_rel_ret=sum(1 for r in rels if r >= 1),
    )


def test_bpref_all_relevant_first():
    assert bpref(_rr([1, 1, 0, 0], [2, 2])) == pytest.approx(1.0)


def test_bpref_relevant_after_nonrelevant():
    assert bpref(_rr([0, 1], [1, 1])) == 0.0


def test_bpref_ignores_unpooled_and_unjudged():
    base = _rr([1, 0, 1, 0], [3, 3])
    padded = _rr(
        [RELVALUE_NONPOOL, 1, RELVALUE_UNJUDGED, 0, RELVALUE_NONPOOL, 1, 0],
        [3, 3],
    )
    assert bpref(padded) == pytest.approx(bpref(base))


def test_bpref_within_unit_interval():
    value = bpref(_rr([0, 1, 0, 0, 1, 1], [4, 4]))
    assert 0.0 <= value <= 1.0


def test_bpref_no_relevant():
    assert bpref(_rr([0, 0], [2], num_rel=0)) == 0.0


def test_gm_bpref_is_log_of_bpref():
    res = _rr([1, 0, 1, 0, 1], [3, 4])
    assert gm_bpref(res) == pytest.approx(math.log(bpref(res)))


def test_gm_bpref_floor():
    assert gm_bpref(_rr([0, 1], [1, 1])) == pytest.approx(math.log(MIN_GEO_MEAN))


def test_inf_ap_matches_ap_when_fully_judged():
    rels = [0, 1, 1, 0, 0, 1, 0]
    res = _rr(rels, [4, 4])
    assert inf_ap(res) == pytest.approx(average_precision(res), rel=1e-4)


def test_inf_ap_no_relevant():
    assert inf_ap(_rr([0, RELVALUE_UNJUDGED], [2], num_rel=0)) == 0.0


def test_inf_ap_unpooled_counts_against_score():
    judged = inf_ap(_rr([1, 1], [0, 2]))
    with_gap = inf_ap(_rr([1, RELVALUE_NONPOOL, 1], [0, 2]))
    assert with_gap < judged


def test_inf_ap_unjudged_not_penalised_like_unpooled():
    unjudged = inf_ap(_rr([1, RELVALUE_UNJUDGED, 1], [0, 2]))
    unpooled = inf_ap(_rr([1, RELVALUE_NONPOOL, 1], [0, 2]))
    assert unjudged > unpooled