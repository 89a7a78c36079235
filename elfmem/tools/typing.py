#    typing.py
#        Some typing helpers
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = ['Self', 'List', 'Set', 'Dict', 'Union', 'Optional', 'Any', 'cast', 'Iterable', 'Iterator',
           'Sequence', 'Callable', 'TypedDict', 'Literal', 'TypeVar', 'TYPE_CHECKING', 'Generator',
           'Tuple', 'Type', 'BinaryIO']

import sys

if sys.version_info >= (3, 11):
    from typing import Self
else:
    # 3.10 and below. setup.py installs typing_extensions if python < 3.11
    from typing_extensions import Self

from typing import (
    List,
    Set,
    Dict,
    Union,
    Optional,
    Any,
    cast,
    Iterable,
    Iterator,
    Sequence,
    Callable,
    TypedDict,
    Literal,
    TypeVar,
    TYPE_CHECKING,
    Generator,
    Tuple,
    Type,
    BinaryIO
)
