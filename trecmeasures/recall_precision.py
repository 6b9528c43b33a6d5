"""Interpolated precision at recall points and precision at multiples of R."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence

from trecmeasures.counts import ResRels

DEFAULT_RECALL_CUTOFFS = (0.0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9, 1.0)
DEFAULT_RPREC_MULT_CUTOFFS = (0.2, 0.4, 0.6, 0.8, 1.0, 1.2, 1.4, 1.6, 1.8, 2.0)


def _scaled_cutoffs(fractions: Sequence[float], num_rel: int) -> list[int]:
    """Turn fractions of the relevant count into document counts.

    Adding 0.9 before truncating keeps the default recall points at the
    same counts as historical implementations.
    """
    return [int(fraction * num_rel + 0.9) for fraction in fractions]


def _ranked_from_bottom(res_rels: ResRels) -> Iterator[tuple[int, int]]:
    """Yield ``(rank, relevance)`` from the last retrieved document upwards."""
    return zip(
        range(res_rels.num_ret, 0, -1), reversed(res_rels.results_rel_list)
    )


def _interpolated_at_recall(
    res_rels: ResRels, fractions: Sequence[float], relevance_level: int
) -> Iterator[tuple[int, float]]:
    """Yield ``(cutoff index, interpolated precision)`` for each reachable cutoff.

    Cutoffs needing more relevant documents than were retrieved are not
    yielded.
    """
    pending = list(enumerate(_scaled_cutoffs(fractions, res_rels.num_rel)))
    while pending and pending[-1][1] > res_rels.num_rel_ret:
        pending.pop()

    if res_rels.num_ret:
        int_precis = res_rels.num_rel_ret / res_rels.num_ret
    else:
        int_precis = math.nan
    rel_so_far = res_rels.num_rel_ret
    # Walk the ranking backwards: interpolated precision at X is the
    # maximum precision at any rank at or below X.
    for rank, rel in _ranked_from_bottom(res_rels):
        if rel_so_far <= 0:
            break
        precis = rel_so_far / rank
        if int_precis < precis:
            int_precis = precis
        if rel >= relevance_level:
            while pending and pending[-1][1] == rel_so_far:
                yield pending.pop()[0], int_precis
            rel_so_far -= 1

    while pending:
        yield pending.pop()[0], int_precis


def iprec_at_recall(
    res_rels: ResRels,
    cutoffs: Iterable[float] = DEFAULT_RECALL_CUTOFFS,
    relevance_level: int = 1,
) -> list[float]:
    """Interpolated precision at each recall cutoff, in the order given."""
    fractions = tuple(cutoffs)
    values = [0.0] * len(fractions)
    for index, value in _interpolated_at_recall(res_rels, fractions, relevance_level):
        values[index] = value
    return values


def eleven_pt_avg(
    res_rels: ResRels,
    cutoffs: Iterable[float] = DEFAULT_RECALL_CUTOFFS,
    relevance_level: int = 1,
) -> float:
    """Interpolated precision averaged over the recall cutoffs."""
    fractions = tuple(cutoffs)
    if not fractions:
        raise ValueError("No cutoff values")
    total = sum(
        value
        for _, value in _interpolated_at_recall(res_rels, fractions, relevance_level)
    )
    return total / len(fractions)


def rprec_mult(
    res_rels: ResRels,
    cutoffs: Iterable[float] = DEFAULT_RPREC_MULT_CUTOFFS,
    relevance_level: int = 1,
) -> list[float]:
    """Precision at multiples of the number of relevant documents.

    Cutoffs beyond the end of the ranking are filled with non-relevant
    documents.
    """
    fractions = tuple(cutoffs)
    values = [0.0] * len(fractions)
    pending = list(enumerate(_scaled_cutoffs(fractions, res_rels.num_rel)))
    while pending and pending[-1][1] > res_rels.num_ret:
        index, cutoff = pending.pop()
        values[index] = res_rels.num_rel_ret / cutoff

    rel_so_far = res_rels.num_rel_ret
    for rank, rel in _ranked_from_bottom(res_rels):
        if rel_so_far <= 0:
            break
        precis = rel_so_far / rank
        while pending and pending[-1][1] == rank:
            values[pending.pop()[0]] = precis
        if rel >= relevance_level:
            rel_so_far -= 1
    return values