#    elf_decoder.py
#        Thin layer over pyelftools that exposes only what the footprint computation needs:
#        the program headers, the section sizes and the entry point.
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = ['ElfDecoder', 'DecodedSegment', 'DecodedSection', 'PT_LOAD', 'DECODING_ERRORS']

import struct
import logging
from io import BytesIO
from dataclasses import dataclass

from elftools.elf.elffile import ELFFile
from elftools.common.exceptions import ELFError

from elfmem.exceptions import MalformedElfError
from elfmem.core.logging import DUMPDATA_LOGLEVEL
from elfmem.tools.typing import *

PT_LOAD = 'PT_LOAD'


@dataclass(frozen=True)
class DecodedSegment:
    """A program header as read from the file"""
    type: Union[str, int]
    """Segment type. A name such as PT_LOAD when known by pyelftools, the raw value otherwise"""
    flags: int
    address: int
    memory_size: int
    file_bytes: int
    offset: int = 0
    """Position of the segment content in the file"""


@dataclass(frozen=True)
class DecodedSection:
    name: str
    size: int


# pyelftools does not report every inconsistency of a corrupted file as an ELFError.
# A header of the wrong class or a bogus table size can surface as any of these.
DECODING_ERRORS = (ELFError, TypeError, ValueError, KeyError, IndexError, struct.error)


class ElfDecoder:
    """Decodes an ELF image held in memory. Any structural problem is reported as a MalformedElfError"""

    logger: logging.Logger
    data_size: int
    elf: ELFFile

    def __init__(self, data: bytes) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)
        self.data_size = len(data)
        try:
            self.elf = ELFFile(BytesIO(data))
            self.logger.debug(f"Decoding ELF{self.elf.elfclass} ({'little' if self.elf.little_endian else 'big'} endian) of {self.data_size} bytes")
        except DECODING_ERRORS as e:
            raise MalformedElfError(f"Invalid ELF header. {e}") from e

    def entry(self) -> int:
        try:
            return int(self.elf.header['e_entry'])
        except DECODING_ERRORS as e:
            raise MalformedElfError(f"Invalid ELF header. {e}") from e

    def segments(self) -> List[DecodedSegment]:
        """All the program headers, in file order. Their content is not read, see ``ElfFootprintExtractor``"""
        segments: List[DecodedSegment] = []
        try:
            for segment in self.elf.iter_segments():
                header = segment.header
                self.logger.log(DUMPDATA_LOGLEVEL, f"Program header: {dict(header)}")
                segments.append(DecodedSegment(
                    type=header['p_type'],
                    flags=header['p_flags'],
                    address=header['p_vaddr'],
                    memory_size=header['p_memsz'],
                    file_bytes=header['p_filesz'],
                    offset=header['p_offset']
                ))
        except DECODING_ERRORS as e:
            raise MalformedElfError(f"Invalid program header table. {e}") from e

        return segments

    def sections(self) -> List[DecodedSection]:
        sections: List[DecodedSection] = []
        try:
            for section in self.elf.iter_sections():
                self.logger.log(DUMPDATA_LOGLEVEL, f"Section {section.name}: {dict(section.header)}")
                sections.append(DecodedSection(name=section.name, size=section['sh_size']))
        except DECODING_ERRORS as e:
            raise MalformedElfError(f"Invalid section header table. {e}") from e

        return sections
