"""Binary preference and inferred average precision."""

from __future__ import annotations

import math

from trecmeasures.ap import MIN_GEO_MEAN
from trecmeasures.counts import RELVALUE_NONPOOL, RELVALUE_UNJUDGED, ResRels

INFAP_EPSILON = 0.00001


def bpref(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Fraction of the top R judged non-relevant docs ranked below each relevant doc."""
    num_nonrel = sum(res_rels.rel_levels[:relevance_level])
    nonrel_so_far = 0
    total = 0.0
    for rel in res_rels.results_rel_list:
        if rel in (RELVALUE_NONPOOL, RELVALUE_UNJUDGED):
            continue
        if 0 <= rel < relevance_level:
            nonrel_so_far += 1
        elif nonrel_so_far > 0:
            total += 1.0 - (
                min(nonrel_so_far, res_rels.num_rel)
                / min(num_nonrel, res_rels.num_rel)
            )
        else:
            total += 1.0
    if res_rels.num_rel:
        total /= res_rels.num_rel
    return total


def gm_bpref(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Logarithm of bpref, for averaging as a geometric mean."""
    return math.log(max(bpref(res_rels, relevance_level), MIN_GEO_MEAN))


def inf_ap(res_rels: ResRels, relevance_level: int = 1) -> float:
    """Inferred average precision over a sampled judgment pool."""
    nonrel_so_far = 0
    rel_so_far = 0
    pool_unjudged_so_far = 0
    total = 0.0
    for index, rel in enumerate(res_rels.results_rel_list):
        if rel == RELVALUE_NONPOOL:
            continue
        if rel == RELVALUE_UNJUDGED:
            pool_unjudged_so_far += 1
            continue
        if 0 <= rel < relevance_level:
            nonrel_so_far += 1
            continue
        rel_so_far += 1
        if index == 0:
            total += 1.0
        else:
            fj = float(index)
            judged_above = rel_so_far - 1 + nonrel_so_far
            total += 1.0 / (fj + 1.0) + (fj / (fj + 1.0)) * (
                (judged_above + pool_unjudged_so_far) / fj
            ) * (
                (rel_so_far - 1 + INFAP_EPSILON)
                / (judged_above + 2 * INFAP_EPSILON)
            )
    if res_rels.num_rel:
        total /= res_rels.num_rel
    return total