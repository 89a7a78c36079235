#    __init__.py
#        Small helpers shared by the whole package
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = [
    'update_dict_recursive',
    'format_eng_unit',
    'format_byte_size',
    'BINARY_SIZE_UNITS',
]

from copy import deepcopy

from elfmem.tools.typing import *

BINARY_SIZE_UNITS = ['B', 'KiB', 'MiB', 'GiB', 'TiB', 'PiB', 'EiB']


def update_dict_recursive(d1: Dict[Any, Any], d2: Dict[Any, Any]) -> None:
    if not isinstance(d1, dict):
        raise ValueError("Cannot merge non-dictionnaries")
    if not isinstance(d2, dict):
        raise ValueError("Cannot merge non-dictionnaries")

    for k in d2.keys():
        if isinstance(d2[k], dict):
            if k not in d1 or d1[k] is None:
                d1[k] = {}
            if isinstance(d1[k], dict):
                update_dict_recursive(d1[k], d2[k])
            else:
                # We're losing a value here
                d1[k] = deepcopy(d2[k])
        else:
            d1[k] = deepcopy(d2[k])


def format_eng_unit(val: float, decimal: int = 0, unit: str = "", binary: bool = False) -> str:
    """Format a value with an engineering prefix. 0.0015 -> 1.5m, 2048 (binary) -> 2Ki"""
    assert decimal >= 0
    format_string = f"%0.{decimal}f"
    if val == 0:    # Special case to avoid writing : 0piB instead of 0B
        return (format_string % val) + unit

    base = 1024 if binary else 1000
    infix = "i" if binary else ""
    prefixes: List[Tuple[float, str]] = []
    for power, letter in zip(range(-4, 5), ['p', 'n', 'u', 'm', '', 'K', 'M', 'G', 'T']):
        prefixes.append((float(base) ** power, letter + infix if letter else ''))

    selected_base, prefix = prefixes[-1]
    for i in range(len(prefixes) - 1):
        next_base, _ = prefixes[i + 1]
        if val < next_base:
            selected_base, prefix = prefixes[i]
            break

    val = round(val / selected_base, decimal)
    return (format_string % val) + prefix + unit


def format_byte_size(nbytes: int, decimal: int = 2) -> Tuple[str, str]:
    """Split a byte count into a printable value and its binary unit.
    Trailing zeros are dropped: 1536 -> ('1.5', 'KiB'), 100 -> ('100', 'B')"""
    val = float(nbytes)
    unit_index = 0
    while abs(val) >= 1024 and unit_index < len(BINARY_SIZE_UNITS) - 1:
        val /= 1024
        unit_index += 1

    if unit_index == 0:
        return ('%d' % nbytes, BINARY_SIZE_UNITS[0])

    valstr = (f"%0.{decimal}f" % val)
    if '.' in valstr:
        valstr = valstr.rstrip('0').rstrip('.')
    return (valstr, BINARY_SIZE_UNITS[unit_index])
