"""
Command line entry point.

    servoy-intel index WORKSPACE
    servoy-intel check WORKSPACE FILE [FILE ...]
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import AnalyzerConfig
from .context import IntelligenceContext, build_context

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO):
    """Setup logging (stdout for INFO+, stderr for ERROR+)."""

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    stdout_handler.setLevel(level)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(logging.ERROR)

    root_logger.addHandler(stdout_handler)
    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(level)


def _load_config(args) -> AnalyzerConfig:
    options = {}
    if args.config:
        with open(args.config, 'r', encoding='utf-8') as f:
            options = json.load(f)
    if args.cache_root:
        options['cache_root'] = args.cache_root
    return AnalyzerConfig.from_dict(options)


def run_index(context: IntelligenceContext) -> int:
    names = context.symbol_index.list_names()
    print(f"Objects:   {len(names)}")
    print(f"Globals:   {len(context.symbol_index.globals.function_names())} functions")
    solutions = context.scope_graph.solutions
    print(f"Solutions: {len(solutions)}")
    for solution in solutions:
        modules = context.scope_graph.visible_modules(solution.name)
        references = ', '.join(solution.references) or '-'
        print(f"  - {solution.name}: {len(modules)} visible modules (references: {references})")
    return 0


def run_check(context: IntelligenceContext, files: List[str]) -> int:
    reported = 0
    for file_path in files:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                text = f.read()
        except OSError as e:
            logger.error(f"Cannot read {file_path}: {e}")
            continue

        diagnostics = context.diagnostics.analyze(text, file_path)
        if diagnostics is None:
            print(f"{file_path}: not checked (syntax error)")
            continue
        for diagnostic in diagnostics:
            start = diagnostic.range.start
            print(f"{file_path}:{start.line + 1}:{start.character + 1}: {diagnostic.message}")
        reported += len(diagnostics)
    return 1 if reported else 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='servoy-intel',
        description='Code intelligence for Servoy script projects',
    )
    parser.add_argument('--config', help='JSON file with analyzer options')
    parser.add_argument('--cache-root', help='Directory for cached extraction results')
    parser.add_argument('--quiet', action='store_true', help='Only log warnings and errors')
    subparsers = parser.add_subparsers(dest='command', required=True)

    index_parser = subparsers.add_parser('index', help='Index a workspace and print a summary')
    index_parser.add_argument('workspace')

    check_parser = subparsers.add_parser('check', help='Report call-site diagnostics for files')
    check_parser.add_argument('workspace')
    check_parser.add_argument('files', nargs='+')

    args = parser.parse_args(argv)
    setup_logging(logging.WARNING if args.quiet else logging.INFO)

    context = build_context(args.workspace, _load_config(args))
    if args.command == 'index':
        return run_index(context)
    return run_check(context, args.files)


if __name__ == '__main__':
    sys.exit(main())
