#    runtest.py
#        CLI Command to launch the python unit tests
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = ['RunTest']

import argparse
from .base_command import BaseCommand
import unittest
import logging
import traceback
import importlib
from elfmem.core.logging import get_log_level
from elfmem.tools.typing import *


class RunTest(BaseCommand):
    _cmd_name_ = 'runtest'
    _brief_ = 'Run unit tests'
    _group_ = 'Development'

    requested_log_level: Optional[str]
    args: List[str]
    parser: argparse.ArgumentParser

    def __init__(self, args: List[str], requested_log_level: Optional[str] = None):
        self.args = args
        self.parser = argparse.ArgumentParser(prog=self.get_prog())
        self.parser.add_argument('modules', nargs='*', help='The test modules to run. All if not specified')
        self.parser.add_argument('--verbosity', default=2, help='Verbosity level of the unittest module')
        self.parser.add_argument('--root', default=None, help='Path to the test root folder')
        self.parser.add_argument('-f', default=False, action='store_true', help='Enables failfast. Stop after first failure')
        self.requested_log_level = requested_log_level

    def run(self) -> Optional[int]:
        import elfmem
        import os
        import sys

        args = self.parser.parse_args(self.args)

        if args.root is not None:
            test_root = os.path.abspath(os.path.realpath(args.root))
            if not os.path.isdir(test_root):
                raise FileNotFoundError("Folder %s does not exists" % test_root)
        else:
            test_root = os.path.realpath(os.path.join(os.path.dirname(elfmem.__file__), '..', 'test'))
        # So that "import test" loads our tests and not the test package of cpython
        sys.path.insert(0, os.path.dirname(test_root))

        logging_level = get_log_level(self.requested_log_level if self.requested_log_level else "critical")
        format_string = ""
        if logging_level <= logging.DEBUG:
            format_string += "%(relativeCreated)0.3f "
        format_string += '[%(levelname)s] <%(name)s> %(message)s'
        logging.getLogger().handlers[0].setFormatter(logging.Formatter(format_string))
        logging.getLogger().setLevel(logging_level)

        try:
            import test  # load the test module.
        except ImportError as e:
            self.getLogger().critical('No unit tests available in %s. %s' % (test_root, e))
            return -1

        if not hasattr(test, '__elfmem__'):   # Make sure this is our test folder (in case we run from install dir)
            self.getLogger().critical(
                'No elfmem unit tests available in %s. Consider passing a test folder with --root if you run the tests from an installed module' % test_root)
            return -1

        success = False
        try:
            test_suite = unittest.TestSuite()
            loader = unittest.TestLoader()
            if len(args.modules) == 0:
                test_suite.addTests(loader.discover(test_root, top_level_dir=os.path.dirname(test_root)))
            else:
                for module_name in args.modules:
                    # A package name is a folder to discover. Anything else is left to the loader
                    module = importlib.import_module(module_name)
                    module_path = getattr(module, '__path__', [])
                    if len(module_path) == 1 and os.path.isdir(module_path[0]):
                        test_suite.addTests(loader.discover(module_path[0], top_level_dir=os.path.dirname(test_root)))
                    else:
                        test_suite.addTests(loader.loadTestsFromName(module_name))

            from test import ElfMemRunner
            result = ElfMemRunner(verbosity=int(args.verbosity), failfast=args.f).run(test_suite)
            success = len(result.errors) == 0 and len(result.failures) == 0
        except Exception:
            # Unrecoverable errors such as ImportError and SyntaxError must be visible
            traceback.print_exc(file=sys.stderr)
            success = False

        return 0 if success else -1
