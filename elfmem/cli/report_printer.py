#    report_printer.py
#        Renders the footprint of the analyzed files as a text or a JSON report
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = ['ReportPrinter']

import sys
import json
from dataclasses import dataclass

from elfmem import tools
from elfmem.core.batch import BatchResult, FileReport
from elfmem.core.footprint import FootprintSummary
from elfmem.core.limits import Metric, MetricEvaluation
from elfmem.tools.typing import *
from typing import IO


@dataclass
class _ReportLine:
    indent: int
    title: str
    value: int
    metric: Optional[Metric] = None


class ReportPrinter:
    LABEL_WIDTH = 22
    VALUE_WIDTH = 10

    BOLD = '\033[1m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    RESET = '\033[0m'

    stream: IO[str]
    color: bool
    fixed_only: bool
    show_segments: bool

    def __init__(self, stream: Optional[IO[str]] = None, color: bool = False, fixed_only: bool = False, show_segments: bool = False) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.color = color
        self.fixed_only = fixed_only
        self.show_segments = show_segments

    @classmethod
    def format_size(cls, nbytes: int) -> str:
        """Human readable size with the unit padded to 3 chars so that values line up. 100 -> '100   B'"""
        if nbytes < 0:
            return 'n/a'
        num, unit = tools.format_byte_size(nbytes)
        return f"{num} {unit:>3}"

    def _colorize(self, text: str, color: str) -> str:
        if not self.color:
            return text
        return f"{color}{text}{self.RESET}"

    def _format_evaluation(self, evaluation: MetricEvaluation) -> str:
        num, unit = tools.format_byte_size(evaluation.limit)
        if evaluation.percent is None:
            text = f"(over a limit of {num} {unit})"
        else:
            text = f"({evaluation.percent}% of {num} {unit})"
        return self._colorize(text, self.RED if evaluation.over_limit else self.GREEN)

    def _make_lines(self, summary: FootprintSummary) -> List[_ReportLine]:
        lines: List[_ReportLine] = []
        lines.append(_ReportLine(1, 'Instruction memory', summary.instruction_bytes, Metric.Instruction))
        dynamic = summary.dynamic_bytes

        if self.fixed_only:
            lines.append(_ReportLine(1, 'Fixed data memory', summary.fixed_data_bytes, Metric.DataFixed))
            lines.append(_ReportLine(1, 'Fixed total memory', summary.total_fixed_bytes, Metric.TotalFixed))
            return lines

        lines.append(_ReportLine(1, 'Data memory', summary.data_bytes_total, Metric.Data))
        if dynamic is not None:
            lines.append(_ReportLine(2, 'Fixed', summary.fixed_data_bytes, Metric.DataFixed))
            if summary.stack_bytes is not None and summary.heap_bytes is not None:
                lines.append(_ReportLine(2, 'Dynamic', dynamic))
                lines.append(_ReportLine(3, 'Stack', summary.stack_bytes))
                lines.append(_ReportLine(3, 'Heap', summary.heap_bytes))
            elif summary.stack_bytes is not None:
                lines.append(_ReportLine(2, 'Stack', summary.stack_bytes))
            elif summary.heap_bytes is not None:
                lines.append(_ReportLine(2, 'Heap', summary.heap_bytes))

        lines.append(_ReportLine(1, 'Total memory', summary.total_bytes, Metric.Total))
        if dynamic is not None:
            lines.append(_ReportLine(2, 'Fixed', summary.total_fixed_bytes, Metric.TotalFixed))
            lines.append(_ReportLine(2, 'Dynamic', dynamic))

        return lines

    def print_file_report(self, report: FileReport) -> None:
        print(self._colorize(f"File: {report.path}", self.BOLD), file=self.stream)

        if self.show_segments:
            print("  Segments:", file=self.stream)
            for segment in report.image.segments:
                print("    0x%08x  %-12s  file: %s  padding: %s" % (
                    segment.start_address,
                    segment.kind.name,
                    self.format_size(segment.file_bytes).rjust(self.VALUE_WIDTH),
                    self.format_size(segment.padding_bytes).rjust(self.VALUE_WIDTH)
                ), file=self.stream)

        for line in self._make_lines(report.summary):
            label = ('  ' * line.indent + line.title + ':').ljust(self.LABEL_WIDTH)
            text = label + self.format_size(line.value).rjust(self.VALUE_WIDTH)
            if line.metric is not None:
                evaluation = report.evaluation.get(line.metric)
                if evaluation is not None:
                    text += '  ' + self._format_evaluation(evaluation)
            print(text, file=self.stream)

    def print_text(self, result: BatchResult) -> None:
        for i, report in enumerate(result.reports):
            if i > 0:
                print(file=self.stream)
            self.print_file_report(report)

    @classmethod
    def make_json_dict(cls, result: BatchResult) -> Dict[str, Any]:
        files: List[Dict[str, Any]] = []
        for report in result.reports:
            summary = report.summary
            files.append({
                'file': report.path,
                'entry_address': report.image.entry_address,
                'instruction_bytes': summary.instruction_bytes,
                'data_bytes_total': summary.data_bytes_total,
                'data_fixed_bytes': summary.fixed_data_bytes,
                'stack_bytes': summary.stack_bytes,
                'heap_bytes': summary.heap_bytes,
                'dynamic_bytes': summary.dynamic_bytes,
                'total_bytes': summary.total_bytes,
                'total_fixed_bytes': summary.total_fixed_bytes,
                'segments': [{
                    'address': segment.start_address,
                    'kind': segment.kind.name,
                    'file_bytes': segment.file_bytes,
                    'padding_bytes': segment.padding_bytes
                } for segment in report.image.segments],
                'limits': {
                    metric.value: {
                        'limit': evaluation.limit,
                        'percent': evaluation.percent,
                        'over_limit': evaluation.over_limit
                    } for metric, evaluation in report.evaluation.evaluations.items()
                }
            })

        failures = [{
            'file': failure.path,
            'type': failure.failure_type.value,
            'cause': failure.cause
        } for failure in result.failures]

        return {'files': files, 'failures': failures}

    def print_json(self, result: BatchResult) -> None:
        print(json.dumps(self.make_json_dict(result), indent=4), file=self.stream)
