#    limits.py
#        Parsing of the size limits given by the user and evaluation of a footprint against
#        them
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = [
    'UNIT_MULTIPLIERS',
    'LIMIT_GRAMMAR_HINT',
    'MAX_LIMIT',
    'Metric',
    'FIXED_METRICS',
    'LimitSet',
    'MetricEvaluation',
    'LimitEvaluation',
    'parse_limit',
    'metric_value',
    'evaluate_limits'
]

import re
from enum import Enum
from dataclasses import dataclass, field

from elfmem.core.footprint import FootprintSummary
from elfmem.exceptions import LimitParseError
from elfmem.tools import validation
from elfmem.tools.typing import *

# Single letters are binary on purpose. "kb" and friends are decimal, "kib" and friends are binary.
UNIT_MULTIPLIERS: Dict[str, int] = {
    'b': 1,
    'k': 1024,
    'kb': 1000,
    'kib': 1024,
    'm': 1024**2,
    'mb': 1000**2,
    'mib': 1024**2,
    'g': 1024**3,
    'gb': 1000**3,
    'gib': 1024**3,
    't': 1024**4,
    'tb': 1000**4,
    'tib': 1024**4,
}

_UNITS_LONGEST_FIRST = sorted(UNIT_MULTIPLIERS.keys(), key=len, reverse=True)
_NUMBER_REGEX = re.compile(r'[0-9]+')

LIMIT_GRAMMAR_HINT = ("Expected a whole number of bytes, optionally followed by a unit among "
                      "b, k, kb, kib, m, mb, mib, g, gb, gib, t, tb, tib (case insensitive). "
                      "Single letter units are powers of 1024. Examples: 512, 64KiB, 1M, 2000kb")
MAX_LIMIT = 2**64 - 1


def parse_limit(text: str) -> int:
    """Converts a size such as "64KiB" into a number of bytes.

    :param text: The size to parse

    :raise LimitParseError: If the text does not follow the size grammar
    """
    validation.assert_type(text, 'text', str)
    stripped = text.strip()
    if not stripped.isascii():
        raise LimitParseError(f"Invalid size \"{text}\". {LIMIT_GRAMMAR_HINT}")

    lowered = stripped.lower()
    multiplier = 1
    number_part = stripped
    for unit in _UNITS_LONGEST_FIRST:
        if lowered.endswith(unit):
            multiplier = UNIT_MULTIPLIERS[unit]
            number_part = stripped[:-len(unit)].rstrip()
            break

    if not _NUMBER_REGEX.fullmatch(number_part):
        raise LimitParseError(f"Invalid size \"{text}\". {LIMIT_GRAMMAR_HINT}")

    value = int(number_part) * multiplier
    if value > MAX_LIMIT:
        raise LimitParseError(f"Size \"{text}\" is too big. Maximum is {MAX_LIMIT} bytes")

    return value


class Metric(Enum):
    """(Enum) A footprint quantity that can be checked against a limit"""
    Total = 'total'
    TotalFixed = 'total_fixed'
    Instruction = 'instruction'
    Data = 'data'
    DataFixed = 'data_fixed'


FIXED_METRICS = (Metric.TotalFixed, Metric.Instruction, Metric.DataFixed)


@dataclass(frozen=True)
class LimitSet:
    """(Immutable struct)
    The byte budgets given by the user. None means no limit"""

    total: Optional[int] = None
    instruction: Optional[int] = None
    data: Optional[int] = None

    def __post_init__(self) -> None:
        validation.assert_int_range_if_not_none(self.total, 'total', minval=0, maxval=MAX_LIMIT)
        validation.assert_int_range_if_not_none(self.instruction, 'instruction', minval=0, maxval=MAX_LIMIT)
        validation.assert_int_range_if_not_none(self.data, 'data', minval=0, maxval=MAX_LIMIT)

    @classmethod
    def from_strings(cls,
                     total: Optional[str] = None,
                     instruction: Optional[str] = None,
                     data: Optional[str] = None) -> Self:
        """Builds a LimitSet from textual sizes. The error message names the faulty limit"""
        parsed: Dict[str, Optional[int]] = {}
        for name, text in [('total', total), ('instruction', instruction), ('data', data)]:
            if text is None:
                parsed[name] = None
                continue
            try:
                parsed[name] = parse_limit(text)
            except LimitParseError as e:
                raise LimitParseError(f"Bad {name} limit. {e}") from e

        return cls(**parsed)

    def limit_for(self, metric: Metric) -> Optional[int]:
        if metric in (Metric.Total, Metric.TotalFixed):
            return self.total
        if metric == Metric.Instruction:
            return self.instruction
        if metric in (Metric.Data, Metric.DataFixed):
            return self.data
        raise ValueError(f"Unknown metric {metric}")

    def is_empty(self) -> bool:
        return self.total is None and self.instruction is None and self.data is None


@dataclass(frozen=True)
class MetricEvaluation:
    """How much of its budget a metric uses"""
    metric: Metric
    value: int
    limit: int
    percent: Optional[int]
    """Truncated percentage of the limit. None when the limit is 0 and the value is not"""

    @property
    def over_limit(self) -> bool:
        if self.percent is None:
            return True
        return self.percent > 100


@dataclass(frozen=True)
class LimitEvaluation:
    """Per metric evaluation of a footprint. Only metrics with a limit are present"""
    evaluations: Dict[Metric, MetricEvaluation] = field(default_factory=dict)

    def get(self, metric: Metric) -> Optional[MetricEvaluation]:
        return self.evaluations.get(metric, None)

    def percent(self, metric: Metric) -> Optional[int]:
        evaluation = self.get(metric)
        if evaluation is None:
            return None
        return evaluation.percent

    def over_limit_metrics(self, metrics: Optional[Iterable[Metric]] = None) -> List[Metric]:
        if metrics is None:
            metrics = list(Metric)
        return [metric for metric in metrics if metric in self.evaluations and self.evaluations[metric].over_limit]

    def is_over_limit(self, metrics: Optional[Iterable[Metric]] = None) -> bool:
        """True if any of the given metrics (all by default) goes above its limit. 100% is not over"""
        return len(self.over_limit_metrics(metrics)) > 0


def metric_value(summary: FootprintSummary, metric: Metric) -> int:
    if metric == Metric.Total:
        return summary.total_bytes
    if metric == Metric.TotalFixed:
        return summary.total_fixed_bytes
    if metric == Metric.Instruction:
        return summary.instruction_bytes
    if metric == Metric.Data:
        return summary.data_bytes_total
    if metric == Metric.DataFixed:
        return summary.fixed_data_bytes
    raise ValueError(f"Unknown metric {metric}")


def _compute_percent(value: int, limit: int) -> Optional[int]:
    if limit == 0:
        return 0 if value == 0 else None
    return (value * 100) // limit


def evaluate_limits(summary: FootprintSummary, limits: Optional[LimitSet]) -> LimitEvaluation:
    """Computes the percentage of its limit used by each metric that has a limit"""
    evaluations: Dict[Metric, MetricEvaluation] = {}
    if limits is None:
        return LimitEvaluation(evaluations)

    for metric in Metric:
        limit = limits.limit_for(metric)
        if limit is None:
            continue
        value = max(metric_value(summary, metric), 0)    # Inconsistent reservations cannot exceed anything
        evaluations[metric] = MetricEvaluation(
            metric=metric,
            value=value,
            limit=limit,
            percent=_compute_percent(value, limit)
        )

    return LimitEvaluation(evaluations)
