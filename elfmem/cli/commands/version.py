#    version.py
#        CLI Command to display the version of elfmem and of the ELF decoder it relies on
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = ['Version']

import argparse

from .base_command import BaseCommand
from elfmem.tools.typing import *


class Version(BaseCommand):
    _cmd_name_ = 'version'
    _brief_ = 'Display the elfmem version and the pyelftools version used to decode binaries'
    _group_ = 'Development'

    args: List[str]
    parser: argparse.ArgumentParser

    def __init__(self, args: List[str], requested_log_level: Optional[str] = None):
        self.args = args
        self.parser = argparse.ArgumentParser(prog=self.get_prog())
        self.parser.add_argument('--format', choices=['full', 'short', 'json'], default='full',
                                 help='full: human readable. short: elfmem version only. json: all versions as a JSON object')

    @classmethod
    def get_versions(cls) -> Dict[str, str]:
        import platform
        import elftools
        import elfmem

        return {
            'elfmem': elfmem.__version__,
            'pyelftools': elftools.__version__,
            'python': platform.python_version()
        }

    def run(self) -> Optional[int]:
        import json
        import elfmem
        args = self.parser.parse_args(self.args)
        versions = self.get_versions()

        if args.format == 'full':
            print(f"Elfmem v{versions['elfmem']}")
            print(f"ELF decoding by pyelftools v{versions['pyelftools']} (Python {versions['python']})")
            print(f"(c) {elfmem.__author__} (License : {elfmem.__license__})")
        elif args.format == 'short':
            print(versions['elfmem'])
        elif args.format == 'json':
            print(json.dumps(versions))

        return 0
