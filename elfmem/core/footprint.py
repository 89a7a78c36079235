#    footprint.py
#        Reduces the segments of a binary into instruction/data totals with a fixed/dynamic
#        breakdown
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = ['FootprintSummary', 'summarize']

from dataclasses import dataclass

from elfmem.core.segment import SegmentKind
from elfmem.core.bintools.elf_footprint_extractor import BinaryImage
from elfmem.tools.typing import *


@dataclass(frozen=True)
class FootprintSummary:
    """(Immutable struct)
    Memory usage of a binary once loaded"""

    instruction_bytes: int = 0
    """Memory size of all the executable segments"""
    data_bytes_total: int = 0
    """Memory size of all the data and read-only data segments, stack and heap included"""
    stack_bytes: Optional[int] = None
    """Stack reservation, None if the binary does not declare one"""
    heap_bytes: Optional[int] = None
    """Heap reservation, None if the binary does not declare one"""

    @property
    def dynamic_bytes(self) -> Optional[int]:
        """Stack + heap. None only when neither is declared"""
        if self.stack_bytes is None and self.heap_bytes is None:
            return None
        return (self.stack_bytes or 0) + (self.heap_bytes or 0)

    @property
    def fixed_data_bytes(self) -> int:
        """Data memory that is not reserved for the stack or the heap.
        Can be negative if the reservations are bigger than the data segments. See ``reservations_consistent``"""
        dynamic = self.dynamic_bytes
        return self.data_bytes_total - (dynamic if dynamic is not None else 0)

    @property
    def total_bytes(self) -> int:
        return self.instruction_bytes + self.data_bytes_total

    @property
    def total_fixed_bytes(self) -> int:
        return self.instruction_bytes + self.fixed_data_bytes

    @property
    def reservations_consistent(self) -> bool:
        """False when the stack and heap reservations do not fit in the data segments"""
        return self.fixed_data_bytes >= 0


def summarize(image: BinaryImage) -> FootprintSummary:
    """Sums the memory size of each segment by kind. Reservations are carried as is"""
    instruction_bytes = 0
    data_bytes_total = 0
    for segment in image.segments:
        if segment.kind == SegmentKind.Instructions:
            instruction_bytes += segment.memory_size
        else:
            data_bytes_total += segment.memory_size

    return FootprintSummary(
        instruction_bytes=instruction_bytes,
        data_bytes_total=data_bytes_total,
        stack_bytes=image.stack_reservation,
        heap_bytes=image.heap_reservation
    )
