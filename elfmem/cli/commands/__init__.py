__all__ = [
    'BaseCommand',
    'Size',
    'Version',
    'RunTest',
    'get_all_commands',
    'get_commands_by_groups'
]

from .base_command import BaseCommand
from .size import Size
from .version import Version
from .runtest import RunTest

from elfmem.tools.typing import *


def get_all_commands() -> List[Type[BaseCommand]]:
    """Return a list of class object. One for each possible CLI command"""
    return BaseCommand.__subclasses__()


def get_commands_by_groups() -> Dict[str, List[Type[BaseCommand]]]:
    """Return all possible CLI command, grouped in a dictionnary by group string"""
    commands = get_all_commands()
    groups: Dict[str, List[Type[BaseCommand]]] = {}
    for cmd in commands:
        if cmd.get_group() not in groups:
            groups[cmd.get_group()] = []
        groups[cmd.get_group()].append(cmd)
    return groups
