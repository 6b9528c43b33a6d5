"""Average precision and related ranked measures."""

from __future__ import annotations

import math
from collections.abc import Iterable

from trecmeasures.counts import ResRels

DEFAULT_CUTOFFS = (5, 10, 15, 20, 30, 100, 200, 500, 1000)

# Lower bound applied to a score before taking its logarithm for
# geometric-mean measures.
MIN_GEO_MEAN = 0.00001


def _validated_cutoffs(cutoffs: Iterable[int]) -> tuple[int, ...]:
    cutoffs = tuple(cutoffs)
    if any(cutoff <= 0 for cutoff in cutoffs):
        raise ValueError("cutoffs must be positive")
    if len(set(cutoffs)) != len(cutoffs):
        raise ValueError("cutoffs must not contain duplicates")
    return cutoffs


def _precision_sums(res_rels: ResRels, relevance_level: int) -> list[float]:
    """Entry ``k`` is the sum of precisions at relevant documents in the top ``k``."""
    sums = [0.0]
    rel_so_far = 0
    total = 0.0
    for rank, rel in enumerate(res_rels.results_rel_list, 1):
        if rel >= relevance_level:
            rel_so_far += 1
            total += rel_so_far / rank
        sums.append(total)
    return sums


def average_precision(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Precision after each relevant document, averaged over all relevant ones."""
    rel_so_far = 0
    total = 0.0
    for rank, rel in enumerate(res_rels.results_rel_list, 1):
        if rel >= relevance_level:
            rel_so_far += 1
            total += rel_so_far / rank
    if not rel_so_far:
        return 0.0
    return total / res_rels.num_rel


def gm_map(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Logarithm of average precision, for averaging as a geometric mean."""
    return math.log(max(average_precision(res_rels, relevance_level), MIN_GEO_MEAN))


def map_cut(
    res_rels: ResRels,
    cutoffs: Iterable[int] = DEFAULT_CUTOFFS,
    relevance_level: int = 1,
) -> list[float]:
    """Average precision truncated at each cutoff, in the order given.

    Cutoffs beyond the end of the ranking are filled with non-relevant
    documents.
    """
    cutoffs = _validated_cutoffs(cutoffs)
    if res_rels.num_rel == 0:
        return [0.0] * len(cutoffs)
    sums = _precision_sums(res_rels, relevance_level)
    return [sums[min(cutoff, res_rels.num_ret)] / res_rels.num_rel for cutoff in cutoffs]


def bin_g(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Binary G: mean over relevant docs of 1 / log2(2 + non-relevant before it)."""
    rel_so_far = 0
    total = 0.0
    for index, rel in enumerate(res_rels.results_rel_list):
        if rel >= relevance_level:
            rel_so_far += 1
            total += 1.0 / math.log2(3 + index - rel_so_far)
    if not rel_so_far:
        return 0.0
    return total / res_rels.num_rel