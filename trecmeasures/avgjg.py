"""Measures averaged over the judgment groups (users) of a topic."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from trecmeasures.counts import ResRels, ResRelsJg
from trecmeasures.precision import DEFAULT_CUTOFFS, precision_at_cutoffs
from trecmeasures.recall_precision import DEFAULT_RPREC_MULT_CUTOFFS, rprec_mult


def _average_columns(rows: Iterable[Sequence[float]], width: int, count: int) -> list[float]:
    totals = [0.0] * width
    for row in rows:
        totals = [total + value for total, value in zip(totals, row)]
    if count > 1:
        totals = [total / count for total in totals]
    return totals


def p_avgjg(
    res_rels_jg: ResRelsJg,
    cutoffs: Iterable[int] = DEFAULT_CUTOFFS,
    relevance_level: int = 1,
) -> list[float]:
    """Precision at each cutoff, averaged over judgment groups."""
    cutoffs = tuple(cutoffs)
    return _average_columns(
        (precision_at_cutoffs(jg, cutoffs, relevance_level) for jg in res_rels_jg.jgs),
        len(cutoffs),
        res_rels_jg.num_jgs,
    )


def rprec_mult_avgjg(
    res_rels_jg: ResRelsJg,
    cutoffs: Iterable[float] = DEFAULT_RPREC_MULT_CUTOFFS,
    relevance_level: int = 1,
) -> list[float]:
    """Precision at multiples of R, averaged over judgment groups."""
    cutoffs = tuple(cutoffs)
    return _average_columns(
        (rprec_mult(jg, cutoffs, relevance_level) for jg in res_rels_jg.jgs),
        len(cutoffs),
        res_rels_jg.num_jgs,
    )


def _average_precision(res_rels: ResRels, relevance_level: int) -> float:
    rel_so_far = 0
    total = 0.0
    for rank, rel in enumerate(res_rels.results_rel_list, 1):
        if rel >= relevance_level:
            rel_so_far += 1
            total += rel_so_far / rank
    if not rel_so_far:
        return 0.0
    return total / res_rels.num_rel


def map_avgjg(res_rels_jg: ResRelsJg, relevance_level: int = 1) -> float:
    """Average precision averaged over judgment groups."""
    total = 0.0
    for jg in res_rels_jg.jgs:
        total += _average_precision(jg, relevance_level)
    if res_rels_jg.num_jgs > 1:
        total /= res_rels_jg.num_jgs
    return total