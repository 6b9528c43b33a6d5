import pytest

from trecmeasures.prefs import (
    EquivalenceClass,
    JudgmentGroup,
    ResultsPrefs,
    prefs_avgjg,
    prefs_avgjg_imp,
    prefs_avgjg_ret,
    prefs_avgjg_rnonrel,
    prefs_avgjg_rnonrel_ret,
)


def _counts_jg(**kwargs):
    return JudgmentGroup(**kwargs)


def test_all_fulfilled_gives_one():
    jg = _counts_jg(
        num_prefs_fulfilled_ret=3,
        num_prefs_possible_ret=3,
        num_prefs_fulfilled_imp=2,
        num_prefs_possible_imp=2,
    )
    rp = ResultsPrefs(jgs=[jg])
    assert prefs_avgjg(rp) == 1.0
    assert prefs_avgjg_imp(rp) == 1.0
    assert prefs_avgjg_ret(rp) == 1.0


def test_no_groups_gives_zero():
    rp = ResultsPrefs()
    assert prefs_avgjg(rp) == 0.0
    assert prefs_avgjg_rnonrel(rp) == 0.0
    assert prefs_avgjg_rnonrel_ret(rp) == 0.0


def test_nothing_fulfilled_gives_zero():
    jg = _counts_jg(num_prefs_possible_ret=5, num_prefs_possible_notoccur=2)
    rp = ResultsPrefs(jgs=[jg])
    assert prefs_avgjg(rp) == 0.0
    assert prefs_avgjg_ret(rp) == 0.0


def test_notoccur_lowers_avgjg_only():
    jg = _counts_jg(
        num_prefs_fulfilled_ret=2,
        num_prefs_possible_ret=3,
        num_prefs_fulfilled_imp=1,
        num_prefs_possible_imp=1,
        num_prefs_possible_notoccur=4,
    )
    rp = ResultsPrefs(jgs=[jg])
    assert prefs_avgjg(rp) < prefs_avgjg_imp(rp)
    assert prefs_avgjg(rp) == pytest.approx(3 / 8)
    assert prefs_avgjg_imp(rp) == pytest.approx(3 / 4)
    assert prefs_avgjg_ret(rp) == pytest.approx(2 / 3)


def test_group_with_no_possible_prefs_still_counts_in_average():
    full = _counts_jg(num_prefs_fulfilled_ret=4, num_prefs_possible_ret=4)
    empty = _counts_jg()
    single = prefs_avgjg(ResultsPrefs(jgs=[full]))
    both = prefs_avgjg(ResultsPrefs(jgs=[full, empty]))
    assert both * 2 == pytest.approx(single)


def test_rnonrel_equal_counts_matches_plain_ratio():
    jg = _counts_jg(
        num_prefs_fulfilled_ret=3,
        num_prefs_possible_ret=5,
        num_prefs_fulfilled_imp=1,
        num_prefs_possible_imp=2,
        num_prefs_possible_notoccur=1,
        num_rel=3,
        num_nonrel=3,
        num_rel_ret=2,
    )
    rp = ResultsPrefs(jgs=[jg])
    assert prefs_avgjg_rnonrel(rp) == pytest.approx(prefs_avgjg(rp))


def test_rnonrel_pads_missing_nonrel():
    jg = _counts_jg(
        num_prefs_fulfilled_ret=1,
        num_prefs_possible_ret=2,
        num_rel=3,
        num_nonrel=1,
        num_rel_ret=3,
    )
    rp = ResultsPrefs(jgs=[jg])
    assert prefs_avgjg_rnonrel(rp) == pytest.approx((1 + 3 * 2) / (2 + 3 * 2))


def test_rnonrel_ret_pads_missing_nonrel():
    jg = _counts_jg(
        num_prefs_fulfilled_ret=1,
        num_prefs_possible_ret=2,
        num_rel=4,
        num_rel_ret=2,
        num_nonrel_ret=1,
    )
    rp = ResultsPrefs(jgs=[jg])
    assert prefs_avgjg_rnonrel_ret(rp) == pytest.approx((1 + 2 * 1) / (2 + 4 * 1))


def test_rnonrel_zero_counts_is_zero_not_error():
    rp = ResultsPrefs(jgs=[_counts_jg()])
    assert prefs_avgjg_rnonrel(rp) == 0.0
    assert prefs_avgjg_rnonrel_ret(rp) == 0.0


def _ec_jg():
    return JudgmentGroup(
        num_rel=2,
        num_nonrel=3,
        num_rel_ret=2,
        num_nonrel_ret=3,
        ecs=[
            EquivalenceClass(1.0, (0, 1)),
            EquivalenceClass(0.0, (2, 3, 4)),
        ],
    )


def test_rnonrel_recalculates_from_equivalence_classes():
    rp = ResultsPrefs(jgs=[_ec_jg()], num_judged_ret=5)
    assert prefs_avgjg_rnonrel(rp) == pytest.approx(0.5)


def test_rnonrel_ret_recalculates_from_equivalence_classes():
    rp = ResultsPrefs(jgs=[_ec_jg()], num_judged_ret=5)
    assert prefs_avgjg_rnonrel_ret(rp) == pytest.approx(0.5)


def test_rnonrel_ret_ignores_unretrieved_docs():
    rp = ResultsPrefs(jgs=[_ec_jg()], num_judged_ret=2)
    assert prefs_avgjg_rnonrel_ret(rp) == 0.0


def _array_jg(rel_array, preferred, num_judged):
    rows = [[0] * num_judged for _ in range(num_judged)]
    for i, j in preferred:
        rows[i][j] = 1
    return JudgmentGroup(
        num_rel=1,
        num_nonrel=3,
        num_rel_ret=1,
        num_nonrel_ret=3,
        prefs_array=rows,
        rel_array=rel_array,
    )


def test_prefs_array_rel_first_is_fulfilled():
    jg = _array_jg((1.0, 0.0, 0.0, 0.0), [(0, 1), (0, 2), (0, 3)], 4)
    rp = ResultsPrefs(jgs=[jg], num_judged_ret=4)
    assert prefs_avgjg_rnonrel(rp) == 1.0
    assert prefs_avgjg_rnonrel_ret(rp) == 1.0


def test_prefs_array_rel_last_is_not_fulfilled():
    jg = _array_jg((0.0, 0.0, 0.0, 1.0), [(3, 0), (3, 1), (3, 2)], 4)
    rp = ResultsPrefs(jgs=[jg], num_judged_ret=4)
    assert prefs_avgjg_rnonrel(rp) == 0.0
    assert prefs_avgjg_rnonrel_ret(rp) == 0.0


def test_prefs_array_unretrieved_rel_ordering():
    jg = _array_jg((1.0, 0.0, 0.0, 0.0), [(0, 1), (0, 2), (0, 3)], 4)
    retrieved_all = prefs_avgjg_rnonrel(ResultsPrefs(jgs=[jg], num_judged_ret=4))
    retrieved_none = prefs_avgjg_rnonrel(ResultsPrefs(jgs=[jg], num_judged_ret=0))
    assert retrieved_none < retrieved_all


def test_value_objects_expose_sizes():
    jg = _ec_jg()
    assert jg.num_ecs == 2
    assert jg.ecs[1].num_in_ec == 3
    assert ResultsPrefs(jgs=[jg, jg]).num_jgs == 2