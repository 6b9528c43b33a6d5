"""Precision at document cutoffs and R-precision."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import accumulate

from trecmeasures.counts import ResRels

DEFAULT_CUTOFFS = (5, 10, 15, 20, 30, 100, 200, 500, 1000)


def _check_cutoffs(cutoffs: Iterable[int]) -> tuple[int, ...]:
    cutoffs = tuple(cutoffs)
    if any(cutoff <= 0 for cutoff in cutoffs):
        raise ValueError("cutoffs must be positive")
    if len(set(cutoffs)) != len(cutoffs):
        raise ValueError("cutoffs must not contain duplicates")
    return cutoffs


def _relevant_prefix_counts(res_rels: ResRels, relevance_level: int) -> list[int]:
    """Entry ``k`` is the number of relevant documents among the top ``k``."""
    return list(
        accumulate(
            (int(rel >= relevance_level) for rel in res_rels.results_rel_list),
            initial=0,
        )
    )


def precision_at_cutoffs(
    res_rels: ResRels,
    cutoffs: Iterable[int] = DEFAULT_CUTOFFS,
    relevance_level: int = 1,
) -> list[float]:
    """Precision at each cutoff, in the order the cutoffs are given.

    Cutoffs beyond the end of the ranking are filled with non-relevant
    documents.
    """
    cutoffs = _check_cutoffs(cutoffs)
    prefix = _relevant_prefix_counts(res_rels, relevance_level)
    return [prefix[min(cutoff, res_rels.num_ret)] / cutoff for cutoff in cutoffs]


def r_precision(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Precision after R documents are retrieved, R being the number relevant."""
    num_to_look_at = min(res_rels.num_ret, res_rels.num_rel)
    if num_to_look_at == 0:
        return 0.0
    rel_so_far = sum(
        1
        for rel in res_rels.results_rel_list[:num_to_look_at]
        if rel >= relevance_level
    )
    return rel_so_far / res_rels.num_rel