# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the structure check. This module will allow the application to:

# 1. Make sure the files every checkout needs are actually there

# 2. Report each missing one separately (no stopping at the first gap)

from __future__ import annotations

from typing import List

from QuickAnalyzer.core.base import AnalysisContext, Check, CheckOutcome
from QuickAnalyzer.core.findings import Finding, Kind, Priority

###########################################################################

"""

Name: StructureCheck

Function: A check that walks the list of required files and complains about

each one that's missing. Pure filesystem work, no processes.

Arguments: None (it's a class definition)

Returns: No value returned

"""

class StructureCheck(Check):
    slug = "structure"
    title = "Checking project structure"
    icon = "📁"
    description = "Verify the critical project files exist."

    ###########################################################################

    """

    Name: inspect

    Function: Check every required path under the project root. Missing ones

    become ERROR/HIGH findings, present ones become "Found" notes.

    Arguments: context - the AnalysisContext for this run

    Returns: CheckOutcome with one finding per missing file

    """

    def inspect(self, context: AnalysisContext) -> CheckOutcome:
        findings: List[Finding] = []
        notes: List[str] = []
        for relative in context.required_files:
            if (context.project_root / relative).exists():
                notes.append(f"Found {relative}")
                continue
            findings.append(
                Finding(
                    kind=Kind.ERROR,
                    message=f"Missing critical file: {relative}",
                    priority=Priority.HIGH,
                )
            )
        return CheckOutcome(findings=tuple(findings), notes=tuple(notes))

#$ End inspect

#$ End StructureCheck
