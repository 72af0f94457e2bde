# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the dependencies check. This module will allow the application to:

# 1. Run the package manager's security audit and flag vulnerabilities

# 2. Run the outdated-packages listing and flag stale dependencies

# 3. Shrug politely (skip) when the tooling isn't there or hangs

from __future__ import annotations

from typing import List, Optional, Tuple

from QuickAnalyzer.core.base import AnalysisContext, Check, CheckOutcome
from QuickAnalyzer.core.findings import Finding, Kind, Priority
from QuickAnalyzer.core.runner import CommandResult

### What the audit tool prints when it found something
VULNERABILITY_MARKER = "vulnerabilities"

###########################################################################

"""

Name: DependencyCheck

Function: A check that shells out to the audit and outdated commands. The two

halves are independent: one of them being skipped doesn't stop the other.

Arguments: None (it's a class definition)

Returns: No value returned

"""

class DependencyCheck(Check):
    slug = "dependencies"
    title = "Checking dependencies"
    icon = "📦"
    description = "Audit dependencies for vulnerabilities and outdated packages."

    def inspect(self, context: AnalysisContext) -> CheckOutcome:
        findings: List[Finding] = []
        notes: List[str] = []
        skipped: List[str] = []

        for half in (self._audit, self._outdated):
            finding, note, skip = half(context)
            if finding is not None:
                findings.append(finding)
            if note:
                notes.append(note)
            if skip:
                skipped.append(skip)

        return CheckOutcome(
            findings=tuple(findings),
            skipped="; ".join(skipped) or None,
            notes=tuple(notes),
        )

#$ End inspect

    ###########################################################################

    """

    Name: _audit

    Function: Run the security audit. A clean exit means nothing to report. A

    failed exit with vulnerability talk in the output becomes a SECURITY/HIGH

    finding. A failed exit without it means the tool broke, so we skip.

    Arguments: context - the AnalysisContext for this run

    Returns: (finding or None, note, skip reason)

    """

    def _audit(self, context: AnalysisContext) -> Tuple[Optional[Finding], str, str]:
        result = context.run("audit")
        if not result.ran:
            return None, "", _skip_reason("audit", result)
        if result.ok:
            return None, "No critical vulnerabilities found", ""
        if VULNERABILITY_MARKER in result.output:
            finding = Finding(
                kind=Kind.SECURITY,
                message="Security vulnerabilities found in dependencies",
                priority=Priority.HIGH,
                details=f"Run: {_base_command(context, 'audit')} for details",
            )
            return finding, "", ""
        return None, "", f"audit exited {result.returncode} without a vulnerability report"

#$ End _audit

    ###########################################################################

    """

    Name: _outdated

    Function: Run the outdated listing. npm outdated exits 1 precisely when it

    has something to list, so any exit code with output on stdout counts as

    "outdated packages found" (a WARNING/MEDIUM), not as a failure.

    Arguments: context - the AnalysisContext for this run

    Returns: (finding or None, note, skip reason)

    """

    def _outdated(self, context: AnalysisContext) -> Tuple[Optional[Finding], str, str]:
        result = context.run("outdated")
        if not result.ran:
            return None, "", _skip_reason("outdated", result)
        if result.stdout.strip():
            finding = Finding(
                kind=Kind.WARNING,
                message="Outdated dependencies found",
                priority=Priority.MEDIUM,
                details=f"Run: {context.command_text('outdated')} for details",
            )
            return finding, "", ""
        if result.ok:
            return None, "All packages up to date", ""
        return None, "", f"outdated exited {result.returncode} with no output"

#$ End _outdated

#$ End DependencyCheck

def _skip_reason(name: str, result: CommandResult) -> str:
    return f"{name} skipped ({result.reason})"

#$ End _skip_reason

def _base_command(context: AnalysisContext, name: str) -> str:
    ### Drop flags ("npm audit --audit-level=moderate" -> "npm audit")
    return " ".join(part for part in context.commands[name] if not part.startswith("-"))

#$ End _base_command
