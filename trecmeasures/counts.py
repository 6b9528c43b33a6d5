"""Ranked-relevance records and the per-topic count measures built on them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

# Relevance values marking retrieved documents outside the judgment pool,
# and documents in the pool that were never judged.
RELVALUE_NONPOOL = -1
RELVALUE_UNJUDGED = -2

QRELS_FORMAT = "qrels"
QRELS_JG_FORMAT = "qrels_jg"


@dataclass(frozen=True)
class ResRels:
    """Relevance of each retrieved document in rank order, with topic totals.

    ``rel_levels[i]`` is the number of judged documents at relevance level
    ``i`` for the topic.
    """

    results_rel_list: tuple[int, ...] = ()
    rel_levels: tuple[int, ...] = ()
    num_rel: int = 0
    num_rel_ret: int = 0
    num_nonpool: int = 0
    num_unjudged_in_pool: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "results_rel_list", tuple(self.results_rel_list))
        object.__setattr__(self, "rel_levels", tuple(self.rel_levels))

    @property
    def num_ret(self) -> int:
        """Number of retrieved documents."""
        return len(self.results_rel_list)

    @property
    def num_rel_levels(self) -> int:
        """Number of distinct relevance levels counted in ``rel_levels``."""
        return len(self.rel_levels)


@dataclass(frozen=True)
class ResRelsJg:
    """Ranked relevance information for every judgment group of a topic."""

    jgs: tuple[ResRels, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "jgs", tuple(self.jgs))

    @property
    def num_jgs(self) -> int:
        """Number of judgment groups."""
        return len(self.jgs)


@dataclass(frozen=True)
class QueryRelInfo:
    """Relevance judgments of one topic.

    For the ``qrels`` format ``judgments`` is a sequence of relevance values;
    for ``qrels_jg`` it is a sequence of such sequences, one per judgment group.
    """

    qid: str
    rel_format: str
    judgments: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "judgments", tuple(self.judgments))


def num_ret(res_rels: ResRels) -> int:
    """Number of documents retrieved for the topic."""
    return res_rels.num_ret


def num_rel_ret(res_rels: ResRels) -> int:
    """Number of relevant documents retrieved for the topic."""
    return res_rels.num_rel_ret


def num_nonrel_judged_ret(res_rels: ResRels) -> int:
    """Number of judged non-relevant documents retrieved for the topic."""
    return (
        res_rels.num_ret
        - res_rels.num_nonpool
        - res_rels.num_unjudged_in_pool
        - res_rels.num_rel_ret
    )


def num_rel(res_rels: ResRels) -> int:
    """Number of relevant documents for the topic."""
    return res_rels.num_rel


def num_q() -> int:
    """Per-topic contribution to the number of topics averaged over."""
    return 1


def average_num_q(num_queries: int, num_q_rels: int, average_complete: bool) -> int:
    """Number of topics averaged over.

    With complete averaging every topic in the judgments counts, not only
    those that had results.
    """
    return num_q_rels if average_complete else num_queries


def total_num_rel(rel_infos: Iterable[QueryRelInfo]) -> int:
    """Count judgments with positive relevance across all topics."""
    total = 0
    for info in rel_infos:
        if info.rel_format == QRELS_FORMAT:
            groups = (info.judgments,)
        elif info.rel_format == QRELS_JG_FORMAT:
            groups = info.judgments
        else:
            raise ValueError(
                f"rel_info format not qrels or qrels_jg: {info.rel_format!r}"
            )
        total += sum(1 for group in groups for rel in group if rel > 0)
    return total