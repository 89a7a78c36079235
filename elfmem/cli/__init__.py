__all__ = ['CLI']

from .cli import CLI
