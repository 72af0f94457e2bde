# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the report module. This module will allow the application to:

# 1. Turn the findings into the human-readable analysis report

# 2. Decide the process exit code from the findings

from __future__ import annotations

from typing import List, Sequence, Tuple

from .base import summarize
from .findings import Finding, Kind

### Width of the ===== rules around the report
RULE = "=" * 60

### Icon per kind, used in the issue list and the next steps
KIND_ICONS = {
    Kind.ERROR: "❌",
    Kind.SECURITY: "🔒",
    Kind.WARNING: "⚠️",
}

### Next steps, in the order they should be tackled: errors, security, warnings
NEXT_STEPS: Tuple[Tuple[Kind, str], ...] = (
    (Kind.ERROR, "Fix critical errors first (❌)"),
    (Kind.SECURITY, "Address security issues (🔒)"),
    (Kind.WARNING, "Review warnings and optimizations (⚠️)"),
)

###########################################################################

"""

Name: render_report

Function: Render the final analysis report as text. This is a pure function,

so the same findings always give byte-identical output. The issue list keeps

the findings in the order the checks produced them.

Arguments: findings - the findings from the run (in execution order)

            skipped - (slug, reason) pairs for checks that couldn't answer

Returns: The report text (no trailing newline)

"""

def render_report(findings: Sequence[Finding], skipped: Sequence[Tuple[str, str]] = ()) -> str:
    lines: List[str] = ["", RULE, "🎯 QUICK ANALYSIS REPORT", RULE]

    ### Nothing to report: one happy message and we're done
    if not findings:
        lines.append("")
        lines.append("🎉 EXCELLENT! No major issues found!")
        lines.append("   Your codebase looks healthy.")
        lines.extend(_render_skipped(skipped))
        lines.append("")
        lines.append(RULE)
        return "\n".join(lines)

    counts = summarize(findings)
    lines.append("")
    lines.append("📊 SUMMARY:")
    lines.append(f"   ❌ Errors: {counts[Kind.ERROR]}")
    lines.append(f"   ⚠️  Warnings: {counts[Kind.WARNING]}")
    lines.append(f"   🔒 Security Issues: {counts[Kind.SECURITY]}")

    lines.append("")
    lines.append("🔧 ISSUES FOUND:")
    for index, finding in enumerate(findings, start=1):
        icon = KIND_ICONS[finding.kind]
        lines.append(f"   {index}. {icon} [{finding.priority.value}] {finding.message}")
        if finding.details:
            lines.append(f"      💡 {finding.details}")

    lines.extend(_render_skipped(skipped))

    lines.append("")
    lines.append("📝 NEXT STEPS:")
    step = 0
    for kind, text in NEXT_STEPS:
        if counts[kind]:
            step += 1
            lines.append(f"   {step}. {text}")
    lines.append(f"   {step + 1}. Re-run the analyzer to confirm the fixes")

    lines.append("")
    lines.append(RULE)
    return "\n".join(lines)

#$ End render_report

def _render_skipped(skipped: Sequence[Tuple[str, str]]) -> List[str]:
    if not skipped:
        return []
    lines = ["", "⏭️  SKIPPED CHECKS:"]
    for slug, reason in skipped:
        lines.append(f"   - {slug}: {reason}")
    return lines

#$ End _render_skipped

###########################################################################

"""

Name: exit_code

Function: Work out the process exit code. Any ERROR finding (which includes a

CRITICAL build failure) gives 1. Warnings and security issues alone give 0,

unless strict mode is on, in which case any finding at all gives 1.

Arguments: findings - the findings from the run

            strict - fail on any finding, not just errors

Returns: 0 or 1

"""

def exit_code(findings: Sequence[Finding], strict: bool = False) -> int:
    if strict and findings:
        return 1
    if any(finding.kind is Kind.ERROR for finding in findings):
        return 1
    return 0

#$ End exit_code
