#    elf_footprint_extractor.py
#        Reads an ELF binary and keeps only what matters to compute its memory footprint:
#        the loadable segments, the stack/heap reservations and the entry point.
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = ['BinaryImage', 'ElfFootprintExtractor', 'extract']

import logging
from dataclasses import dataclass, field

from elfmem.core.segment import Segment, make_segment
from elfmem.core.reservation import read_reservations
from elfmem.core.bintools.elf_decoder import ElfDecoder, PT_LOAD
from elfmem.exceptions import MalformedElfError
from elfmem.tools.typing import *


@dataclass(frozen=True)
class BinaryImage:
    """The footprint related content of a binary. Owns all its data"""
    segments: List[Segment] = field(default_factory=list)
    """Loadable segments kept after classification, in file order"""
    entry_address: int = 0
    stack_reservation: Optional[int] = None
    """Size of the .stack section. None if absent or empty"""
    heap_reservation: Optional[int] = None
    """Size of the .heap section. None if absent or empty"""


class ElfFootprintExtractor:
    """
    Builds a BinaryImage from the content of an ELF file.
    This reading is lossy: only the LOAD segments with known permissions and the reservation sections are kept.
    """

    logger: logging.Logger
    decoder_class: Type[ElfDecoder]

    def __init__(self, decoder_class: Type[ElfDecoder] = ElfDecoder) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.decoder_class = decoder_class

    def extract(self, data: bytes) -> BinaryImage:
        """Extract the footprint view of a binary.

        :param data: The whole content of the ELF file

        :raise MalformedElfError: If the container cannot be decoded or a kept segment extends past the end of the data
        :raise SegmentSizeError: If a segment has more content in the file than in memory
        """
        decoder = self.decoder_class(data)

        segments: List[Segment] = []
        for decoded in decoder.segments():
            if decoded.type != PT_LOAD:
                continue

            segment = make_segment(
                address=decoded.address,
                flags=decoded.flags,
                memory_size=decoded.memory_size,
                file_bytes=decoded.file_bytes
            )
            if segment is None:
                self.logger.debug(f"Ignoring segment at 0x{decoded.address:08x} with flags 0x{decoded.flags:x}")
                continue
            if decoded.offset + decoded.file_bytes > len(data):
                raise MalformedElfError(f"Segment at 0x{decoded.address:08x} extends past the end of the file")
            segments.append(segment)

        reservations = read_reservations((section.name, section.size) for section in decoder.sections())

        return BinaryImage(
            segments=segments,
            entry_address=decoder.entry(),
            stack_reservation=reservations.stack,
            heap_reservation=reservations.heap
        )


def extract(data: bytes, decoder_class: Type[ElfDecoder] = ElfDecoder) -> BinaryImage:
    """Extract the footprint view of an ELF binary"""
    return ElfFootprintExtractor(decoder_class).extract(data)
