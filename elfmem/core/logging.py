#    logging.py
#        Some global definition for logging
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = [
    'DUMPDATA_LOGLEVEL',
    'get_log_level'
]

import logging
DUMPDATA_LOGLEVEL = logging.DEBUG - 1
logging.addLevelName(DUMPDATA_LOGLEVEL, "DUMPDATA")


def get_log_level(level_name: str) -> int:
    """Converts a level name given on the command line to a logging level. Accepts the extra DUMPDATA level"""
    level_name = level_name.upper().strip()
    if level_name == 'DUMPDATA':
        return DUMPDATA_LOGLEVEL
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {level_name}")
    return level
