#    cli.py
#        Provide the Command Line Interface.
#        Allow to launch specific functionality by invoking elfmem with command line arguments.
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = ['CLI']

import os
import argparse
import logging
import traceback

from elfmem.cli.commands import *
from elfmem.core.logging import get_log_level

from elfmem.tools.typing import *


class CLI:
    """Elfmem Command Line Interface.
    All commands are executed through this class."""

    workdir: str
    default_log_level: str
    command_list: List[Type[BaseCommand]]
    parser: argparse.ArgumentParser

    def __init__(self, workdir: str = '.', default_log_level: str = 'info'):
        self.workdir = workdir
        self.default_log_level = default_log_level

        self.command_list = get_all_commands()  # comes from commands module
        self.parser = argparse.ArgumentParser(
            prog='elfmem',
            epilog=self.make_command_list_help(),
            add_help=False,
            formatter_class=argparse.RawTextHelpFormatter
        )
        self.parser.add_argument('command', help='Command to execute')
        self.parser.add_argument('--loglevel', help='Log level to use', default=None, metavar='LEVEL')
        self.parser.add_argument('--logfile', help='File to write logs', default=None, metavar='FILENAME')
        self.parser.add_argument('--disable_loggers', help='list of loggers to disable', default=None, metavar='LOGGERS')

    def make_command_list_help(self) -> str:
        """Return a string meant to be displayed in the command line explaining the possible commands"""
        msg = "Here are the possible commands\n\n"
        commands = get_commands_by_groups()
        groups = list(commands.keys())
        if '' in groups:
            groups.remove('')  # Put ungrouped commands at the end
            groups.append('')

        for group in groups:
            group_name = group if group else 'Others'
            msg += "\n--- %s ---\n" % group_name
            longest_cmd_name = max(len(cmd.get_name()) for cmd in commands[group])    # Align the brief descriptions

            for cmd in commands[group]:
                padding_length = longest_cmd_name + 4 - len(cmd.get_name())
                msg += "    - %s:%s%s\n" % (cmd.get_name(), ' ' * padding_length, cmd.get_brief())

        return msg

    def run(self, args: List[str], except_failed: bool = False) -> int:
        """Run a command. Arguments must be passed as a list of strings (like they would be splitted in a shell)"""
        if len(args) > 0:   # The help might be for a subcommand, so we take it only if it's the first argument.
            if args[0] in ['-h', '--help']:
                self.parser.print_help()
                return 0

        cargs, command_cargs = self.parser.parse_known_args(args)
        if cargs.command not in [cls.get_name() for cls in self.command_list]:
            if except_failed:
                raise Exception('Unknown command %s' % cargs.command)
            self.parser.print_help()
            return -1

        error: Optional[Exception] = None
        error_stack_strace = ''
        code: Optional[int] = 0
        try:
            logging_level_str = cargs.loglevel if cargs.loglevel else self.default_log_level
            logging_level = get_log_level(logging_level_str)
            format_string = ""
            if logging_level <= logging.DEBUG:
                format_string += "%(relativeCreated)s "
            format_string += '[%(levelname)s] %(message)s'
            logging.basicConfig(level=logging_level, filename=cargs.logfile, format=format_string)
            if cargs.disable_loggers is not None:
                for logger_name in cargs.disable_loggers.split(','):
                    logging.getLogger(logger_name).disabled = True

            cmd_class = [cmd for cmd in self.command_list if cmd.get_name() == cargs.command][0]
            cmd_instance = cmd_class(command_cargs, requested_log_level=cargs.loglevel)

            current_workdir = os.getcwd()
            os.chdir(self.workdir)
            try:
                code = cmd_instance.run()
                if code is None:
                    code = 0
            finally:
                os.chdir(current_workdir)
        except Exception as e:
            if except_failed:
                raise e
            error = e
            error_stack_strace = traceback.format_exc()

        if error is not None:
            code = 1
            logging.error(str(error))
            logging.debug('Command : elfmem ' + ' '.join(args))
            logging.debug(error_stack_strace)

        assert code is not None
        return code
