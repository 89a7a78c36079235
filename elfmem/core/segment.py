#    segment.py
#        Classification of the loadable segments of a binary based on their permission flags
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = [
    'SegmentFlags',
    'SegmentKind',
    'Segment',
    'classify_segment',
    'make_segment'
]

from enum import Enum
from dataclasses import dataclass

from elfmem.tools import validation
from elfmem.exceptions import SegmentSizeError
from elfmem.tools.typing import *


class SegmentFlags:
    """Permission bits of an ELF program header (p_flags)"""
    PF_X = 0x1
    PF_W = 0x2
    PF_R = 0x4


class SegmentKind(Enum):
    """(Enum) What a loadable segment holds, as deduced from its permissions"""

    Instructions = 0
    """Executable code. Readable and executable"""
    Data = 1
    """Mutable data. Readable and writable"""
    ReadOnlyData = 2
    """Constants. Readable only"""


_KIND_BY_FLAGS: Dict[int, SegmentKind] = {
    SegmentFlags.PF_R | SegmentFlags.PF_X: SegmentKind.Instructions,
    SegmentFlags.PF_R | SegmentFlags.PF_W: SegmentKind.Data,
    SegmentFlags.PF_R: SegmentKind.ReadOnlyData,
}


@dataclass(frozen=True)
class Segment:
    """(Immutable struct)
    A loadable segment kept for the footprint computation"""

    start_address: int
    """Load address of the segment. Informative only"""
    kind: SegmentKind
    """Content type deduced from the permission flags"""
    file_bytes: int
    """Number of bytes actually stored in the file"""
    padding_bytes: int
    """Number of zero-initialized bytes added after the file content when loaded"""

    def __post_init__(self) -> None:
        validation.assert_int_range(self.file_bytes, 'file_bytes', minval=0)
        validation.assert_int_range(self.padding_bytes, 'padding_bytes', minval=0)

    @property
    def memory_size(self) -> int:
        return self.file_bytes + self.padding_bytes


def classify_segment(flags: int) -> Optional[SegmentKind]:
    """Returns the kind of segment for a set of permission flags. ``None`` if the combination is not one we count.
    Bits outside of R/W/X (OS or processor specific) make the combination unknown"""
    return _KIND_BY_FLAGS.get(flags, None)


def make_segment(address: int, flags: int, memory_size: int, file_bytes: int) -> Optional[Segment]:
    """Builds a Segment out of a program header, or ``None`` if the segment is to be ignored.

    :param address: The load address
    :param flags: The p_flags permission bits
    :param memory_size: The size of the segment image in memory (p_memsz)
    :param file_bytes: The size of the segment content in the file (p_filesz)

    :raise SegmentSizeError: If the file content is bigger than the memory image
    """
    kind = classify_segment(flags)
    if kind is None:
        return None

    if file_bytes > memory_size:
        raise SegmentSizeError(f"Segment at 0x{address:08x} has {file_bytes} bytes in file but only {memory_size} bytes in memory")

    return Segment(
        start_address=address,
        kind=kind,
        file_bytes=file_bytes,
        padding_bytes=memory_size - file_bytes
    )
