#    size.py
#        CLI Command that reports the memory footprint of ELF binaries and checks it against
#        size limits
#
#   - License : MIT - See LICENSE file.
#   - Project :  Elfmem - ELF memory footprint analyzer
#
#   Copyright (c) 2026 Elfmem Developers

__all__ = ['Size']

import sys
import argparse

from .base_command import BaseCommand
from elfmem.core.limits import parse_limit, LIMIT_GRAMMAR_HINT
from elfmem.exceptions import LimitParseError
from elfmem.tools.typing import *


def limit_argument(text: str) -> int:
    """argparse type for the size limits. Malformed sizes are reported as usage errors"""
    try:
        return parse_limit(text)
    except LimitParseError as e:
        raise argparse.ArgumentTypeError(str(e))


class Size(BaseCommand):
    _cmd_name_ = 'size'
    _brief_ = 'Report the memory footprint of ELF binaries and check it against size limits'
    _group_ = 'Analysis'

    LIMIT_EXCEEDED_EXIT_CODE = 3

    args: List[str]
    parser: argparse.ArgumentParser

    def __init__(self, args: List[str], requested_log_level: Optional[str] = None):
        self.args = args
        self.parser = argparse.ArgumentParser(prog=self.get_prog(), epilog=f"Sizes: {LIMIT_GRAMMAR_HINT}")
        self.parser.add_argument('files', nargs='*', help='The ELF binaries to analyze')
        self.parser.add_argument('--total-limit', type=limit_argument, default=None, metavar='SIZE',
                                 help='Maximum total memory (instructions + data)')
        self.parser.add_argument('--instruction-limit', type=limit_argument, default=None, metavar='SIZE',
                                 help='Maximum instruction memory')
        self.parser.add_argument('--data-limit', type=limit_argument, default=None, metavar='SIZE',
                                 help='Maximum data memory')
        self.parser.add_argument('--fixed-only', action='store_true', default=None,
                                 help='Only report and check the memory known at build time. Stack and heap are left out')
        self.parser.add_argument('--segments', dest='show_segments', action='store_true', default=None,
                                 help='List the loadable segments of each file')
        self.parser.add_argument('--json', dest='output_format', action='store_const', const='json', default=None,
                                 help='Output a JSON document instead of text')
        self.parser.add_argument('--color', choices=['auto', 'always', 'never'], default=None,
                                 help='Colorize the limit percentages. Default: auto')
        self.parser.add_argument('--config', default=None, help='JSON configuration file. Command line options override it')
        self.parser.add_argument('--no-user-config', action='store_true', default=False,
                                 help='Ignore the configuration file of the current user')

    def make_cli_config(self, args: argparse.Namespace) -> Dict[str, Any]:
        """Configuration given by the command line. Only what was actually specified so that it overrides the files"""
        config: Dict[str, Any] = {}
        limits = {}
        for name, val in [('total', args.total_limit), ('instruction', args.instruction_limit), ('data', args.data_limit)]:
            if val is not None:
                limits[name] = val
        if len(limits) > 0:
            config['limits'] = limits

        for name in ['fixed_only', 'show_segments', 'output_format', 'color']:
            val = getattr(args, name)
            if val is not None:
                config[name] = val

        return config

    def run(self) -> Optional[int]:
        from elfmem.core.config import load_config, limits_from_config, SizeConfig
        from elfmem.core.batch import FootprintAnalyzer
        from elfmem.core.limits import FIXED_METRICS
        from elfmem.cli.report_printer import ReportPrinter

        args = self.parser.parse_args(self.args)
        config = load_config(args.config, cast(SizeConfig, self.make_cli_config(args)), use_user_config=not args.no_user_config)
        limits = limits_from_config(config)     # Fails before any file is read

        if len(args.files) == 0:
            self.getLogger().info('No ELF binary given. Nothing to report')

        analyzer = FootprintAnalyzer(limits)
        result = analyzer.analyze_files(args.files)

        if config['color'] == 'auto':
            color = sys.stdout.isatty()
        else:
            color = config['color'] == 'always'

        printer = ReportPrinter(color=color, fixed_only=config['fixed_only'], show_segments=config['show_segments'])
        if config['output_format'] == 'json':
            printer.print_json(result)
        else:
            printer.print_text(result)

        metrics = FIXED_METRICS if config['fixed_only'] else None
        if result.any_over_limit(metrics):
            for report in result.reports:
                for metric in report.evaluation.over_limit_metrics(metrics):
                    self.getLogger().warning(f"{report.path}: {metric.value.replace('_', ' ')} memory is over its limit")
            return self.LIMIT_EXCEEDED_EXIT_CODE

        return 0
