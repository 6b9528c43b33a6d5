"""Gain-based measures: normalized gain G, R-level NDCG and NDCG with a flat top."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterator
from itertools import repeat

from trecmeasures.counts import ResRels
from trecmeasures.ndcg import GainParams, Gains, setup_gains

# Smallest cost charged per rank position by G.
MIN_COST = 1.0


def _ratio(numerator: float, denominator: float) -> float:
    """Floating division that yields inf or nan for a zero denominator."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


def _log2(value: float) -> float:
    """Base-2 logarithm that gives -inf at zero and nan below it."""
    if value > 0:
        return math.log2(value)
    if value == 0:
        return -math.inf
    return math.nan


def _single_precision(value: float) -> float:
    """Round a float to the nearest single-precision value."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _initial_ideal_gain(gains: Gains) -> float:
    return gains.rel_gains[-1].gain if gains.rel_gains else 0.0


def _ideal_walk(gains: Gains) -> Iterator[float]:
    """Yield the ideal gain at each successive rank.

    Levels are consumed from the highest gain downwards, each for as many
    ranks as it has judged documents; once every level is used up the
    gain is 0.0.
    """
    levels = gains.rel_gains
    cur_level = len(levels) - 1
    num_at_level = 0
    gain = _initial_ideal_gain(gains)
    while True:
        num_at_level += 1
        while cur_level >= 0 and num_at_level > levels[cur_level].num_at_level:
            num_at_level = 1
            cur_level -= 1
            gain = levels[cur_level].gain if cur_level >= 0 else 0.0
        yield gain


def g_measure(res_rels: ResRels, gain_params: GainParams = None) -> float:
    """Normalized gain G.

    A document retrieved at rank i contributes
    ``gain / log2(2 + ideal_cost(i) - results_gain(i))``, and the sum is
    normalized by the total ideal gain.
    """
    gains = setup_gains(res_rels, gain_params)
    walk = _ideal_walk(gains)
    ideal_gain = _initial_ideal_gain(gains)
    docs = res_rels.results_rel_list

    results_g = 0.0
    sum_results = 0.0
    sum_ideal = 0.0
    sum_cost = 0.0
    index = 0
    while index < len(docs) and ideal_gain > 0.0:
        results_gain = gains.gain_for(docs[index])
        sum_results += results_gain
        ideal_gain = next(walk)
        if ideal_gain > 0.0:
            sum_ideal += ideal_gain
        sum_cost += ideal_gain if ideal_gain >= MIN_COST else MIN_COST
        if results_gain != 0:
            results_g += _ratio(results_gain, _log2(2 + sum_cost - sum_results))
        index += 1

    for rel in docs[index:]:
        results_gain = gains.gain_for(rel)
        sum_results += results_gain
        sum_cost += MIN_COST
        if results_gain != 0:
            results_g += _ratio(results_gain, _log2(2 + sum_cost - sum_results))

    while ideal_gain > 0.0:
        ideal_gain = next(walk)
        if ideal_gain > 0.0:
            sum_ideal += ideal_gain

    return results_g / sum_ideal if sum_ideal > 0.0 else 0.0


def rndcg(res_rels: ResRels, gain_params: GainParams = None) -> float:
    """NDCG averaged at each point where the ideal gain level changes.

    The end of the retrieved list counts as a further change point when the
    ideal ranking still has positive gain beyond it.
    """
    gains = setup_gains(res_rels, gain_params)
    if res_rels.num_rel == 0:
        return 0.0

    walk = _ideal_walk(gains)
    ideal_gain = _initial_ideal_gain(gains)
    old_ideal_gain = ideal_gain
    docs = res_rels.results_rel_list

    results_dcg = 0.0
    ideal_dcg = 0.0
    total = 0.0
    num_changed = 0
    index = 0

    while index < len(docs) and ideal_gain > 0.0:
        results_gain = gains.gain_for(docs[index])
        ideal_gain = next(walk)
        if old_ideal_gain != ideal_gain:
            if ideal_dcg > 0.0:
                total += results_dcg / ideal_dcg
                num_changed += 1
            old_ideal_gain = ideal_gain
        discount = math.log2(index + 2)
        if results_gain != 0:
            results_dcg += results_gain / discount
        if ideal_gain > 0.0:
            ideal_dcg += ideal_gain / discount
        index += 1

    if index < len(docs):
        for offset, rel in enumerate(docs[index:], index):
            results_gain = gains.gain_for(rel)
            if results_gain != 0:
                results_dcg += results_gain / math.log2(offset + 2)
        index = len(docs)
        if ideal_dcg > 0.0:
            total += results_dcg / ideal_dcg
            num_changed += 1

    while ideal_gain > 0.0:
        ideal_gain = next(walk)
        if old_ideal_gain != ideal_gain:
            if ideal_dcg > 0.0:
                total += results_dcg / ideal_dcg
                num_changed += 1
            old_ideal_gain = ideal_gain
        if ideal_gain > 0.0:
            ideal_dcg += ideal_gain / math.log2(index + 2)
        index += 1

    return _ratio(total, num_changed)


def _positive_ideal_gains(gains: Gains) -> Iterator[float]:
    for rel_gain in reversed(gains.rel_gains):
        if rel_gain.gain <= 0.0:
            return
        yield from repeat(rel_gain.gain, rel_gain.num_at_level)


def ndcg_p(res_rels: ResRels, gain_params: GainParams = None) -> float:
    """NDCG with the first two ranks undiscounted (discount ``log2(rank)``)."""
    gains = setup_gains(res_rels, gain_params)

    total = 0.0
    for index, rel in enumerate(res_rels.results_rel_list):
        gain = gains.gain_for(rel)
        if gain != 0:
            total += gain / math.log2(index + 1) if index > 0 else gain

    ideal_dcg = 0.0
    for index, gain in enumerate(_positive_ideal_gains(gains)):
        if index == 0:
            ideal_dcg += gain
        else:
            ideal_dcg += gain / _single_precision(math.log2(index + 1))

    if res_rels.num_rel_ret > 0:
        return _ratio(total, ideal_dcg)
    return 0.0