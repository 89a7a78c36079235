#!/usr/bin/env python3

#    __main__.py
#        Entry point of the python module. Launch the CLI.
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

from elfmem.cli import CLI
import sys
import os


def elfmem_size() -> None:
    cli = CLI(os.getcwd())
    code = cli.run(['size'] + sys.argv[1:])
    sys.exit(code)


def elfmem_cli() -> None:
    cli = CLI(os.getcwd())
    code = cli.run(sys.argv[1:])
    sys.exit(code)


if __name__ == '__main__':
    elfmem_cli()
