# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the TypeScript check. This module will allow the application to:

# 1. Run the compiler in no-emit mode

# 2. Report one error if it isn't happy (we don't pick apart individual errors)

from __future__ import annotations

from QuickAnalyzer.core.base import AnalysisContext, Check, CheckOutcome
from QuickAnalyzer.core.findings import Finding, Kind, Priority

###########################################################################

"""

Name: TypeCheck

Function: A check that runs the type checker without writing any output

files. Anything short of a clean exit (non-zero exit, timeout, compiler not

installed) counts as a failure, because a type check that can't run hasn't

passed.

Arguments: None (it's a class definition)

Returns: No value returned

"""

class TypeCheck(Check):
    slug = "typescript"
    title = "Checking TypeScript"
    icon = "📝"
    description = "Run the TypeScript compiler without emitting files."

    def inspect(self, context: AnalysisContext) -> CheckOutcome:
        result = context.run("typecheck")
        if result.ok:
            return CheckOutcome(notes=("No TypeScript errors found",))
        notes = () if result.ran else (f"Type checker did not run: {result.reason}",)
        finding = Finding(
            kind=Kind.ERROR,
            message="TypeScript compilation errors found",
            priority=Priority.HIGH,
            details=f"Run: {context.command_text('typecheck')} for details",
        )
        return CheckOutcome(findings=(finding,), notes=notes)

#$ End inspect

#$ End TypeCheck
