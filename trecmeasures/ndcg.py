"""Normalized discounted cumulative gain measures."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from itertools import accumulate, repeat
from typing import Union

from trecmeasures.counts import ResRels

DEFAULT_CUTOFFS = (5, 10, 15, 20, 30, 100, 200, 500, 1000)

GainParams = Union[
    Mapping[Union[str, int], float], Iterable[tuple[Union[str, int], float]], None
]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class RelGain:
    """Gain assigned to one relevance level and how many judged docs have it."""

    rel_level: int
    gain: float
    num_at_level: int = 0


@dataclass(frozen=True)
class Gains:
    """Relevance-level gains of a topic, sorted by increasing gain."""

    rel_gains: tuple[RelGain, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rel_gains", tuple(self.rel_gains))

    @property
    def num_gains(self) -> int:
        """Number of relevance levels with a gain."""
        return len(self.rel_gains)

    @property
    def total_num_at_levels(self) -> int:
        """Number of judged documents over all levels."""
        return sum(rel_gain.num_at_level for rel_gain in self.rel_gains)

    def gain_for(self, rel_level: int) -> float:
        """Gain of a relevance level; 0.0 for a level without one."""
        for rel_gain in self.rel_gains:
            if rel_gain.rel_level == rel_level:
                return rel_gain.gain
        return 0.0


def _atol(name: str | int) -> int:
    """Leading integer of ``name``, or 0 when it does not start with one."""
    if isinstance(name, int):
        return name
    match = _LEADING_INT.match(name)
    return int(match.group(1)) if match else 0


def _gain_pairs(gain_params: GainParams) -> list[tuple[str | int, float]]:
    if gain_params is None:
        return []
    if isinstance(gain_params, Mapping):
        return list(gain_params.items())
    return list(gain_params)


def setup_gains(res_rels: ResRels, gain_params: GainParams = None) -> Gains:
    """Combine explicit ``rel_level=gain`` parameters with the judged levels.

    Levels without an explicit gain get their own level number as gain.
    """
    entries = [
        RelGain(_atol(name), float(value), 0) for name, value in _gain_pairs(gain_params)
    ]
    for level, count in enumerate(res_rels.rel_levels):
        for position, entry in enumerate(entries):
            if entry.rel_level == level:
                entries[position] = replace(entry, num_at_level=count)
                break
        else:
            entries.append(RelGain(level, float(level), count))
    entries.sort(key=lambda entry: entry.gain)
    return Gains(tuple(entries))


def _ideal_gains(gains: Gains) -> Iterator[float]:
    """Positive gains of the ideal ranking, best first."""
    for rel_gain in reversed(gains.rel_gains):
        if rel_gain.gain <= 0.0:
            return
        yield from repeat(rel_gain.gain, rel_gain.num_at_level)


def _divide(numerator: float, denominator: float) -> float:
    """Floating division that yields inf or nan for a zero denominator."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


def _discount(index: int) -> float:
    # Document at index i has rank i + 1.
    return math.log2(index + 2)


def ndcg(res_rels: ResRels, gain_params: GainParams = None) -> float:
    """Normalized discounted cumulative gain over the whole ranking."""
    gains = setup_gains(res_rels, gain_params)
    results_dcg = 0.0
    for index, rel in enumerate(res_rels.results_rel_list):
        gain = gains.gain_for(rel)
        if gain != 0:
            results_dcg += gain / _discount(index)
    ideal_dcg = sum(
        gain / _discount(index) for index, gain in enumerate(_ideal_gains(gains))
    )
    return results_dcg / ideal_dcg if ideal_dcg > 0.0 else 0.0


def _check_cutoffs(cutoffs: Iterable[int]) -> tuple[int, ...]:
    cutoffs = tuple(cutoffs)
    if any(cutoff <= 0 for cutoff in cutoffs):
        raise ValueError("cutoffs must be positive")
    if len(set(cutoffs)) != len(cutoffs):
        raise ValueError("cutoffs must not contain duplicates")
    return cutoffs


def _level_ideal_gains(rel_levels: tuple[int, ...]) -> Iterator[float]:
    """Ideal gains using relevance levels themselves, highest level first."""
    for level in range(len(rel_levels) - 1, 0, -1):
        yield from repeat(float(level), rel_levels[level])


def ndcg_cut(res_rels: ResRels, cutoffs: Iterable[int] = DEFAULT_CUTOFFS) -> list[float]:
    """NDCG at each document cutoff, gains being the relevance values.

    Cutoffs beyond the end of the ranking are filled with non-relevant
    documents.
    """
    cutoffs = _check_cutoffs(cutoffs)
    results_prefix = list(
        accumulate(
            (
                rel / _discount(index) if rel > 0 else 0.0
                for index, rel in enumerate(res_rels.results_rel_list)
            ),
            initial=0.0,
        )
    )
    ideal_prefix = list(
        accumulate(
            (
                gain / _discount(index)
                for index, gain in enumerate(_level_ideal_gains(res_rels.rel_levels))
            ),
            initial=0.0,
        )
    )
    values = []
    for cutoff in cutoffs:
        dcg = results_prefix[min(cutoff, len(results_prefix) - 1)]
        ideal_dcg = ideal_prefix[min(cutoff, len(ideal_prefix) - 1)]
        values.append(dcg / ideal_dcg if ideal_dcg > 0.0 else dcg)
    return values


def ndcg_rel(res_rels: ResRels, gain_params: GainParams = None) -> float:
    """NDCG averaged over the relevant documents (expected gain above zero).

    A relevant document that was not retrieved contributes the NDCG at the
    end of the ranking.
    """
    gains = setup_gains(res_rels, gain_params)
    ideal = list(_ideal_gains(gains))
    results_dcg = 0.0
    ideal_dcg = 0.0
    total = 0.0
    num_rel = 0
    num_rel_ret = 0
    for index, rel in enumerate(res_rels.results_rel_list):
        discount = _discount(index)
        gain = gains.gain_for(rel)
        if gain != 0:
            results_dcg += gain / discount
        if index < len(ideal):
            num_rel += 1
            ideal_dcg += ideal[index] / discount
        if gain > 0:
            total += _divide(results_dcg, ideal_dcg)
            num_rel_ret += 1
    for index in range(res_rels.num_ret, len(ideal)):
        num_rel += 1
        ideal_dcg += ideal[index] / _discount(index)

    total += _divide((num_rel - num_rel_ret) * results_dcg, ideal_dcg)
    return _divide(total, num_rel) if total > 0.0 else 0.0