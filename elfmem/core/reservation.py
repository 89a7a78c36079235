#    reservation.py
#        Reads the stack and heap reservations declared by dedicated sections of a binary
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = [
    'STACK_SECTION_NAME',
    'HEAP_SECTION_NAME',
    'Reservations',
    'read_reservations'
]

import logging
from dataclasses import dataclass

from elfmem.tools.typing import *

STACK_SECTION_NAME = '.stack'
HEAP_SECTION_NAME = '.heap'

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reservations:
    """Size of the stack and heap reserved by the linker. ``None`` when not declared"""
    stack: Optional[int] = None
    heap: Optional[int] = None


def read_reservations(sections: Iterable[Tuple[str, int]]) -> Reservations:
    """Look for the reservation sections among (name, size) pairs.
    Names are matched exactly. A section with a size of 0 counts as not declared.
    If a name is seen more than once, the last one wins."""
    stack: Optional[int] = None
    heap: Optional[int] = None
    for name, size in sections:
        if name == STACK_SECTION_NAME:
            if stack is not None:
                logger.debug(f"Section {name} declared more than once. Keeping the last one")
            stack = size if size > 0 else None
        elif name == HEAP_SECTION_NAME:
            if heap is not None:
                logger.debug(f"Section {name} declared more than once. Keeping the last one")
            heap = size if size > 0 else None

    return Reservations(stack=stack, heap=heap)
