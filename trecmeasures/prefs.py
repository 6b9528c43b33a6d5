"""Preference measures averaged over the judgment groups of a topic."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from itertools import takewhile


@dataclass(frozen=True)
class EquivalenceClass:
    """Documents judged equally relevant, given by their ranks in sorted order."""

    rel_level: float
    docid_ranks: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "docid_ranks", tuple(self.docid_ranks))

    @property
    def num_in_ec(self) -> int:
        """Number of documents in the class."""
        return len(self.docid_ranks)


@dataclass(frozen=True)
class JudgmentGroup:
    """Preference counts and preference structure of one judgment group.

    Preferences are given either through equivalence classes ``ecs``
    (ordered by increasing relevance, the non-relevant class last) or,
    when ``ecs`` is empty, through ``prefs_array`` where a true entry
    ``prefs_array[i][j]`` means document ``i`` is preferred to ``j``.
    Documents are indexed so that the judged retrieved ones come first
    in rank order; ``rel_array`` holds the relevance of each.
    """

    num_prefs_fulfilled_ret: int = 0
    num_prefs_possible_ret: int = 0
    num_prefs_fulfilled_imp: int = 0
    num_prefs_possible_imp: int = 0
    num_prefs_possible_notoccur: int = 0
    num_nonrel: int = 0
    num_nonrel_ret: int = 0
    num_rel: int = 0
    num_rel_ret: int = 0
    ecs: tuple[EquivalenceClass, ...] = ()
    prefs_array: tuple[tuple[int, ...], ...] = ()
    rel_array: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "ecs", tuple(self.ecs))
        object.__setattr__(
            self, "prefs_array", tuple(tuple(row) for row in self.prefs_array)
        )
        object.__setattr__(self, "rel_array", tuple(self.rel_array))

    @property
    def num_ecs(self) -> int:
        """Number of equivalence classes."""
        return len(self.ecs)

    @property
    def num_judged(self) -> int:
        """Number of documents covered by the preference array."""
        return len(self.prefs_array)


@dataclass(frozen=True)
class ResultsPrefs:
    """Preference information of one topic over all judgment groups."""

    jgs: tuple[JudgmentGroup, ...] = ()
    num_judged_ret: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "jgs", tuple(self.jgs))

    @property
    def num_jgs(self) -> int:
        """Number of judgment groups."""
        return len(self.jgs)


def _ratio(numerator: float, denominator: float) -> float:
    """Floating division that yields inf or nan for a zero denominator."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


def _average_if_positive(total: float, num_jgs: int) -> float:
    return total / num_jgs if total > 0.0 else 0.0


def _simple_average(
    results_prefs: ResultsPrefs,
    fulfilled: Callable[[JudgmentGroup], int],
    possible: Callable[[JudgmentGroup], int],
) -> float:
    total = 0.0
    for jg in results_prefs.jgs:
        poss = possible(jg)
        if poss:
            total += fulfilled(jg) / poss
    return _average_if_positive(total, results_prefs.num_jgs)


def prefs_avgjg(results_prefs: ResultsPrefs) -> float:
    """Fulfilled over possible preferences per group, averaged over groups.

    Implied preferences count, and a pair with neither document retrieved
    counts as a failure.
    """
    return _simple_average(
        results_prefs,
        lambda jg: jg.num_prefs_fulfilled_ret + jg.num_prefs_fulfilled_imp,
        lambda jg: jg.num_prefs_possible_ret
        + jg.num_prefs_possible_imp
        + jg.num_prefs_possible_notoccur,
    )


def prefs_avgjg_imp(results_prefs: ResultsPrefs) -> float:
    """Like :func:`prefs_avgjg`, but pairs with neither document retrieved are ignored."""
    return _simple_average(
        results_prefs,
        lambda jg: jg.num_prefs_fulfilled_ret + jg.num_prefs_fulfilled_imp,
        lambda jg: jg.num_prefs_possible_ret + jg.num_prefs_possible_imp,
    )


def prefs_avgjg_ret(results_prefs: ResultsPrefs) -> float:
    """Like :func:`prefs_avgjg`, counting only pairs with both documents retrieved."""
    return _simple_average(
        results_prefs,
        lambda jg: jg.num_prefs_fulfilled_ret,
        lambda jg: jg.num_prefs_possible_ret,
    )


def _count_ec_pairs(
    pairs: Iterable[tuple[Sequence[int], Sequence[int]]],
    is_fulfilled: Callable[[int, int], bool],
) -> tuple[int, int]:
    num_ful = 0
    num_unful = 0
    for better, worse in pairs:
        for rank1 in better:
            for rank2 in worse:
                if is_fulfilled(rank1, rank2):
                    num_ful += 1
                else:
                    num_unful += 1
    return num_ful, num_unful


def _ec_pairs(
    ecs: Sequence[EquivalenceClass],
    new_nonrel: Sequence[int],
    ranks: Callable[[Sequence[int]], Sequence[int]],
) -> Iterable[tuple[Sequence[int], Sequence[int]]]:
    """Pairs of rank lists to compare: classes among themselves, then against
    the truncated non-relevant class."""
    for pos1, ec1 in enumerate(ecs):
        for ec2 in ecs[pos1 + 1 : len(ecs) - 1]:
            yield ranks(ec1.docid_ranks), ranks(ec2.docid_ranks)
    for ec1 in ecs:
        yield ranks(ec1.docid_ranks), ranks(new_nonrel)


def _first_discarded_nonrel(jg: JudgmentGroup, limit: int) -> int:
    """Index past which non-relevant documents are dropped from the array."""
    num_nonrel_seen = 0
    for index in range(limit):
        if jg.rel_array[index] == 0.0:
            num_nonrel_seen += 1
            if num_nonrel_seen == jg.num_rel + 1:
                return index
    return limit


def _kept_indices(jg: JudgmentGroup, limit: int, first_discarded: int) -> list[int]:
    return [
        index
        for index in range(limit)
        if not (index >= first_discarded and jg.rel_array[index] == 0.0)
    ]


def _recalculate(jg: JudgmentGroup, num_judged_ret: int) -> tuple[int, int]:
    """Fulfilled and possible preferences keeping only the first R non-relevant docs."""
    if jg.ecs:
        new_nonrel = jg.ecs[-1].docid_ranks[: jg.num_rel]
        num_ful, num_unful = _count_ec_pairs(
            _ec_pairs(jg.ecs, new_nonrel, lambda ranks: ranks),
            lambda r1, r2: r1 < r2 and r1 < num_judged_ret,
        )
        return num_ful, num_unful + num_ful

    array = jg.prefs_array
    num_judged = jg.num_judged
    first_discarded = _first_discarded_nonrel(jg, num_judged)
    kept = _kept_indices(jg, num_judged, first_discarded)
    num_ful = 0
    num_unful = 0
    for i in kept:
        row = array[i]
        if i < num_judged_ret:
            for j in kept:
                if j != i and row[j]:
                    if j < i:
                        num_unful += 1
                    else:
                        num_ful += 1
        else:
            num_unful += sum(1 for j in kept if row[j])
    return num_ful, num_unful + num_ful


def _recalculate_ret(jg: JudgmentGroup, num_judged_ret: int) -> tuple[int, int]:
    """As :func:`_recalculate`, considering only retrieved documents."""
    if jg.ecs:
        new_nonrel = jg.ecs[-1].docid_ranks[: jg.num_rel_ret]

        def retrieved(ranks: Sequence[int]) -> list[int]:
            return list(takewhile(lambda rank: rank < num_judged_ret, ranks))

        num_ful, num_unful = _count_ec_pairs(
            _ec_pairs(jg.ecs, new_nonrel, retrieved),
            lambda r1, r2: r1 < r2,
        )
        return num_ful, num_unful + num_ful

    array = jg.prefs_array
    first_discarded = _first_discarded_nonrel(jg, num_judged_ret)
    kept = _kept_indices(jg, num_judged_ret, first_discarded)
    num_ful = 0
    num_unful = 0
    for i in kept:
        row = array[i]
        for j in kept:
            if j != i and row[j]:
                if j < i:
                    num_unful += 1
                else:
                    num_ful += 1
    return num_ful, num_unful + num_ful


def prefs_avgjg_rnonrel(results_prefs: ResultsPrefs) -> float:
    """Group-averaged preference ratio with the non-relevant count set to R.

    With fewer non-relevant than relevant documents, fulfilled preferences
    are added for the missing ones; with more, only the first R are used.
    """
    total = 0.0
    for jg in results_prefs.jgs:
        rel, nonrel = jg.num_rel, jg.num_nonrel
        if rel >= nonrel:
            num_ful = (
                jg.num_prefs_fulfilled_ret
                + jg.num_prefs_fulfilled_imp
                + jg.num_rel_ret * (rel - nonrel)
            )
            num_poss = (
                jg.num_prefs_possible_ret
                + jg.num_prefs_possible_imp
                + jg.num_prefs_possible_notoccur
                + jg.num_rel * (rel - nonrel)
            )
        else:
            num_ful, num_poss = _recalculate(jg, results_prefs.num_judged_ret)
        total += _ratio(num_ful, num_poss)
    return _average_if_positive(total, results_prefs.num_jgs)


def prefs_avgjg_rnonrel_ret(results_prefs: ResultsPrefs) -> float:
    """Like :func:`prefs_avgjg_rnonrel`, using only retrieved documents."""
    total = 0.0
    for jg in results_prefs.jgs:
        rel, nonrel = jg.num_rel_ret, jg.num_nonrel_ret
        if rel >= nonrel:
            num_ful = jg.num_prefs_fulfilled_ret + jg.num_rel_ret * (rel - nonrel)
            num_poss = jg.num_prefs_possible_ret + jg.num_rel * (rel - nonrel)
        else:
            num_ful, num_poss = _recalculate_ret(jg, results_prefs.num_judged_ret)
        total += _ratio(num_ful, num_poss)
    return _average_if_positive(total, results_prefs.num_jgs)