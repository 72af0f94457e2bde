# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the CLI application for Quick Analyzer. This application will allow users to:
# 1. Run a quick health analysis on a JavaScript/TypeScript project checkout
# 2. List the available checks (or run only some of them)
# 3. Print a text report and exit non-zero when errors were found

from __future__ import annotations  # This lets us use fancy type hints like List[str] | None

import argparse  # For parsing command line arguments
import sys  # System stuff, like exiting the program and stderr
from pathlib import Path  # For dealing with file paths
from typing import Dict, List  # Type hints

### Check if we're running as a script (not imported as a module)
if __package__ is None or __package__ == "":  # support running as a script
    sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
#$ End conditional

from QuickAnalyzer import __version__
from QuickAnalyzer.core.base import AnalysisContext, AnalysisError, CheckRegistry
from QuickAnalyzer.core.colors import Palette, apply_color, set_color_enabled
from QuickAnalyzer.core.pipeline import run_checks
from QuickAnalyzer.core.registry import register_builtin_checks, select_checks
from QuickAnalyzer.core.report import exit_code, render_report
from QuickAnalyzer.core.utils import read_config

###########################################################################################################

### The description string that tells people what this tool does
description = f"Quick Analyzer {__version__} – structure, dependency, type and build health check for JS/TS projects."

###########################################################################################################

"""

Name: build_parser

Function: Builds the argument parser that handles all the command line options.

Arguments: None

Returns: An ArgumentParser object that knows about all our options

"""

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quick-analyzer",
        description=description,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Quick Analyzer {__version__}",
    )

    ### Which checkout to analyze (defaults to the current directory)
    parser.add_argument(
        "--project-dir",
        type=Path,
        help="Project checkout to analyze (defaults to the current directory)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to JSON configuration file",
    )

    parser.add_argument(
        "--list-checks",
        action="store_true",
        help="List available checks and exit",
    )

    ### Let users pick which checks to run (they still run in the usual order)
    parser.add_argument(
        "--checks",
        help="Comma-separated list of check slugs to run (defaults to all)",
    )

    ### CI mode: warnings and security issues fail the run too
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero on any finding, not just errors",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors and spinner animations",
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output (the report is still printed)",
    )

    return parser

#$ End build_parser

###########################################################################################################

"""

Name: main

Function: The main driver: parse arguments, build the context, run the checks,

print the report and pick the exit code.

Arguments: argv - Optional list of command line arguments (None means use sys.argv)

Returns: Integer exit code (0 clean, 1 errors found, 2 the analysis itself failed)

"""

def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        set_color_enabled(False)
#$ End conditional

    ### Set up the check registry (run order = registration order)
    registry = CheckRegistry()
    register_builtin_checks(registry)

    if args.list_checks:
        for slug in registry.slugs():
            check_cls = registry.get(slug)
            print(f"{slug:<14}{check_cls.description}")
#$ End iteration
        return 0
#$ End conditional

    config: Dict[str, object] = {}
    if args.config:
        try:
            config = read_config(args.config)
        except (FileNotFoundError, ValueError) as exc:
            parser.error(str(exc))
#$ End conditional

    wanted = None
    if args.checks:
        wanted = [slug.strip() for slug in args.checks.split(",") if slug.strip()]
    try:
        checks = select_checks(registry, wanted)
    except KeyError as exc:
        parser.error(f"Unknown checks: {exc.args[0]}")
#$ End try

    if not checks:
        parser.error("No checks selected")
#$ End conditional

    try:
        context = AnalysisContext.from_config(config, args.project_dir)
        if not args.quiet:
            print(apply_color(f"🔍 Quick analysis of {context.project_root}", Palette.BOLD))
        result = run_checks(checks, context, quiet=args.quiet)
    except (AnalysisError, OSError) as exc:
        ### Not a finding, the analysis itself fell over
        print(apply_color(f"❌ Analysis failed: {exc}", Palette.RED, Palette.BOLD), file=sys.stderr)
        return 2
#$ End try

    print(render_report(result.findings, result.skipped))

    return exit_code(result.findings, strict=args.strict)

#$ End main

###########################################################################################################

if __name__ == "__main__":
    sys.exit(main())
