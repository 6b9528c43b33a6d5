"""Reading reference means and standard deviations for z-score evaluation.

Each line of a z-score file holds ``qid measure_name mean stddev`` separated
by whitespace.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from itertools import groupby
from operator import attrgetter
from pathlib import Path

_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


class ZScoreFormatError(ValueError):
    """Raised when a z-score file cannot be read or a line is malformed."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


@dataclass(frozen=True)
class ZScore:
    """Reference mean and standard deviation of one measure."""

    meas: str
    mean: float
    stddev: float


@dataclass(frozen=True)
class QueryZScores:
    """All reference values for one query, sorted by measure name."""

    qid: str
    zscores: tuple[ZScore, ...]


@dataclass(frozen=True)
class _Line:
    qid: str
    meas: str
    mean: float
    stddev: float


def _atof(text: str) -> float:
    """Convert the longest numeric prefix of ``text``; 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group()) if match else 0.0


def _parse_line(line: str, line_number: int) -> _Line:
    fields = line.split()
    if len(fields) != 4:
        raise ZScoreFormatError(f"Malformed line {line_number}", line_number)
    qid, meas, mean, stddev = fields
    return _Line(qid, meas, _atof(mean), _atof(stddev))


def parse_zscores(text: str) -> list[QueryZScores]:
    """Parse z-score text into per-query records sorted by qid then measure."""
    raw_lines = text.split("\n")
    if raw_lines and raw_lines[-1] == "":
        raw_lines.pop()
    lines = [_parse_line(line, number) for number, line in enumerate(raw_lines, 1)]
    lines.sort(key=attrgetter("qid", "meas"))
    return [
        QueryZScores(
            qid=qid,
            zscores=tuple(ZScore(l.meas, l.mean, l.stddev) for l in group),
        )
        for qid, group in groupby(lines, key=attrgetter("qid"))
    ]


def read_zscores(path: str | os.PathLike[str]) -> list[QueryZScores]:
    """Read and parse a z-score file; an empty file is an error."""
    data = Path(path).read_bytes()
    if not data:
        raise ZScoreFormatError(f"Cannot read zscores file '{os.fspath(path)}'")
    return parse_zscores(data.decode("utf-8", errors="surrogateescape"))