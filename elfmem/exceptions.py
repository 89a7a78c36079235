#    exceptions.py
#        Some exceptions specific to this module
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = [
    'ElfExtractionError',
    'MalformedElfError',
    'SegmentSizeError',
    'LimitParseError',
    'ConfigError'
]


class ElfExtractionError(Exception):
    """Raised when a binary cannot be turned into a footprint view"""
    pass


class MalformedElfError(ElfExtractionError):
    """The ELF container itself is invalid or truncated"""
    pass


class SegmentSizeError(ElfExtractionError):
    """A segment declares more bytes in the file than in memory"""
    pass


class LimitParseError(ValueError):
    pass


class ConfigError(Exception):
    pass
