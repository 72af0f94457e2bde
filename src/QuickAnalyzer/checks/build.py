# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the build check. This module will allow the application to:

# 1. Run the project's build script with the output captured

# 2. Report a CRITICAL error when it fails (nothing downstream works without it)

from __future__ import annotations

from QuickAnalyzer.core.base import AnalysisContext, Check, CheckOutcome
from QuickAnalyzer.core.findings import Finding, Kind, Priority

###########################################################################

"""

Name: BuildCheck

Function: A check that runs the full build. It gets the longest timeout of the

bunch, and any failure is an ERROR with CRITICAL priority.

Arguments: None (it's a class definition)

Returns: No value returned

"""

class BuildCheck(Check):
    slug = "build"
    title = "Checking build process"
    icon = "⚙️"
    description = "Run the production build and make sure it succeeds."

    def inspect(self, context: AnalysisContext) -> CheckOutcome:
        result = context.run("build")
        if result.ok:
            return CheckOutcome(notes=("Build completed successfully",))
        notes = () if result.ran else (f"Build did not run: {result.reason}",)
        finding = Finding(
            kind=Kind.ERROR,
            message="Build process failed",
            priority=Priority.CRITICAL,
            details=f"Run: {context.command_text('build')} for details",
        )
        return CheckOutcome(findings=(finding,), notes=notes)

#$ End inspect

#$ End BuildCheck
