#    batch.py
#        Runs the footprint analysis over a list of files. A file that cannot be processed
#        is recorded as a failure and does not stop the others.
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = [
    'FailureType',
    'FileFailure',
    'FileReport',
    'BatchResult',
    'FootprintAnalyzer'
]

import os
import logging
from enum import Enum
from dataclasses import dataclass, field

from elfmem.core.bintools.elf_footprint_extractor import BinaryImage, ElfFootprintExtractor
from elfmem.core.footprint import FootprintSummary, summarize
from elfmem.core.limits import LimitSet, LimitEvaluation, Metric, evaluate_limits
from elfmem.exceptions import ElfExtractionError
from elfmem.tools.typing import *


class FailureType(Enum):
    IoFailure = 'io'
    ExtractionFailure = 'extraction'


@dataclass(frozen=True)
class FileFailure:
    path: str
    failure_type: FailureType
    cause: str


@dataclass(frozen=True)
class FileReport:
    path: str
    image: BinaryImage
    summary: FootprintSummary
    evaluation: LimitEvaluation

    def is_over_limit(self, metrics: Optional[Iterable[Metric]] = None) -> bool:
        return self.evaluation.is_over_limit(metrics)


@dataclass
class BatchResult:
    """Outcome of a batch, in input order"""
    reports: List[FileReport] = field(default_factory=list)
    failures: List[FileFailure] = field(default_factory=list)

    def any_over_limit(self, metrics: Optional[Iterable[Metric]] = None) -> bool:
        """True if a successfully processed file goes above a limit. Failed files are not considered"""
        if metrics is not None:
            metrics = list(metrics)
        return any(report.is_over_limit(metrics) for report in self.reports)


class FootprintAnalyzer:
    """Reads, extracts, summarizes and evaluates binaries one after the other"""

    logger: logging.Logger
    limits: Optional[LimitSet]
    extractor: ElfFootprintExtractor

    def __init__(self, limits: Optional[LimitSet] = None, extractor: Optional[ElfFootprintExtractor] = None) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.limits = limits
        self.extractor = extractor if extractor is not None else ElfFootprintExtractor()

    def analyze_bytes(self, data: bytes) -> Tuple[BinaryImage, FootprintSummary, LimitEvaluation]:
        """Runs the whole pipeline on the content of one binary

        :raise ElfExtractionError: If the binary cannot be read
        """
        image = self.extractor.extract(data)
        summary = summarize(image)
        evaluation = evaluate_limits(summary, self.limits)
        return (image, summary, evaluation)

    def analyze_file(self, path: str) -> FileReport:
        """Runs the whole pipeline on one file

        :raise OSError: If the file cannot be read
        :raise ElfExtractionError: If the file is not a valid binary
        """
        with open(path, 'rb') as f:
            data = f.read()

        image, summary, evaluation = self.analyze_bytes(data)
        if not summary.reservations_consistent:
            self.logger.warning(f"{path}: the stack and heap reservations ({summary.dynamic_bytes} bytes) "
                                f"are bigger than the data segments ({summary.data_bytes_total} bytes)")

        return FileReport(path=path, image=image, summary=summary, evaluation=evaluation)

    def analyze_files(self, paths: Iterable[str]) -> BatchResult:
        result = BatchResult()
        for path in paths:
            try:
                report = self.analyze_file(path)
            except OSError as e:
                cause = e.strerror if e.strerror else str(e)
                self.logger.error(f"Could not read file {path}: {cause}")
                result.failures.append(FileFailure(path=path, failure_type=FailureType.IoFailure, cause=cause))
                continue
            except ElfExtractionError as e:
                self.logger.error(f"Error reading ELF binary {path}: {e}")
                result.failures.append(FileFailure(path=path, failure_type=FailureType.ExtractionFailure, cause=str(e)))
                continue

            self.logger.debug(f"{os.path.basename(path)}: {len(report.image.segments)} segments, entry point 0x{report.image.entry_address:08x}")
            result.reports.append(report)

        return result
