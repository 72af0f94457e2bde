# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the pipeline module. This module will allow the application to:

# 1. Run the checks one after another (no parallel fan-out)

# 2. Print a progress header, notes and results per stage

# 3. Stitch every check's findings together in execution order

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .base import AnalysisContext, Check, CheckOutcome
from .colors import Palette, apply_color, kind_color
from .findings import Finding
from .spinner import Spinner

###########################################################################

"""

Name: AnalysisResult

Function: Everything the run produced: the findings in the order the checks

made them, plus (slug, reason) for each check that had to skip.

Arguments: None (it's a dataclass, so it's just fields)

Returns: No value returned (it's a class definition)

"""

@dataclass
class AnalysisResult:
    findings: List[Finding] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)

#$ End AnalysisResult

###########################################################################

"""

Name: run_checks

Function: Runs every check in order and collects the outcomes. Nothing is

sorted or deduplicated here; the report gets the findings exactly as the

checks produced them.

Arguments: checks - the Check instances to run (in order)

            context - the AnalysisContext for this run

            quiet - suppress progress output (default False)

Returns: AnalysisResult with all findings and skips

"""

def run_checks(checks: Sequence[Check], context: AnalysisContext, quiet: bool = False) -> AnalysisResult:
    result = AnalysisResult()
    for check in checks:
        outcome = run_check(check, context, quiet=quiet)
        result.findings.extend(outcome.findings)
        if outcome.skipped:
            result.skipped.append((check.slug, outcome.skipped))
    return result

#$ End run_checks

###########################################################################

"""

Name: run_check

Function: Runs a single check with a header and a spinner, then prints its

notes, findings and skip reason underneath.

Arguments: check - the Check instance to run

            context - the AnalysisContext for this run

            quiet - suppress progress output (default False)

Returns: The CheckOutcome from the check

"""

def run_check(check: Check, context: AnalysisContext, quiet: bool = False) -> CheckOutcome:
    if quiet:
        return check.inspect(context)

    print(apply_color(f"\n{check.icon} {check.title}...", Palette.CYAN, Palette.BOLD))
    with Spinner(prefix="  "):
        outcome = check.inspect(context)

    for note in outcome.notes:
        print(apply_color(f"  ✅ {note}", Palette.GREEN))
    for finding in outcome.findings:
        label = apply_color(f"  [{finding.priority.value}]", kind_color(finding.kind), Palette.BOLD)
        print(f"{label} {finding.message}")
    if outcome.skipped:
        print(apply_color(f"  ⏭️  Skipped: {outcome.skipped}", Palette.YELLOW))
    return outcome

#$ End run_check
