# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the core base module. This module will allow the application to:

# 1. Define the base class for analysis checks

# 2. Manage a registry of all available checks (in the order they run)

# 3. Provide context for an analysis run

# 4. Summarize findings by kind

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Type

from .findings import Finding, Kind, KindCounts
from .runner import CommandResult, run_command
from .utils import (
    resolve_commands,
    resolve_project_dir,
    resolve_required_files,
    resolve_timeouts,
)

###########################################################################

"""

Name: AnalysisError

Function: Raised when the analysis can't run at all (like pointing it at a

directory that doesn't exist). Anything that goes wrong inside a single check

is turned into a finding or a skip instead.

Arguments: None (it's an exception class)

Returns: No value returned

"""

class AnalysisError(Exception):
    """The analysis could not be started."""

#$ End AnalysisError

###########################################################################

"""

Name: AnalysisContext

Function: A data class that holds everything a check needs to know about the

run: which checkout, which commands, how long they get.

Arguments: None (it's a dataclass, so it's just fields)

Returns: No value returned (it's a class definition)

"""

@dataclass
class AnalysisContext:
    ### Root of the project checkout we're analyzing
    project_root: Path
    ### Raw configuration dictionary (from --config, may be empty)
    config: Dict[str, Any] = field(default_factory=dict)
    ### External commands by name (audit, outdated, typecheck, build)
    commands: Dict[str, Tuple[str, ...]] = field(default_factory=lambda: resolve_commands({}))
    ### Timeouts in seconds, keyed like commands
    timeouts: Dict[str, float] = field(default_factory=lambda: resolve_timeouts({}))
    ### Relative paths the structure check insists on
    required_files: Sequence[str] = field(default_factory=lambda: resolve_required_files({}))

    ###########################################################################

    """

    Name: from_config

    Function: Build a context from a config dictionary, with the command line's

    --project-dir taking precedence. Blows up with AnalysisError if the project

    directory isn't there or a config value has the wrong shape.

    Arguments: config - configuration dictionary

                project_dir - optional --project-dir override

    Returns: A ready-to-use AnalysisContext

    """

    @classmethod
    def from_config(cls, config: Dict[str, Any], project_dir: Path | None = None) -> "AnalysisContext":
        try:
            root = resolve_project_dir(project_dir, config)
            commands = resolve_commands(config)
            timeouts = resolve_timeouts(config)
            required_files = resolve_required_files(config)
        except ValueError as exc:
            raise AnalysisError(str(exc)) from exc
        if not root.is_dir():
            raise AnalysisError(f"Project directory not found: {root}")
        return cls(
            project_root=root,
            config=config,
            commands=commands,
            timeouts=timeouts,
            required_files=required_files,
        )

#$ End from_config

    ###########################################################################

    """

    Name: run

    Function: Run one of the named external commands in the project root with

    its configured timeout.

    Arguments: name - key into commands/timeouts (like "build")

    Returns: CommandResult from the runner

    """

    def run(self, name: str) -> CommandResult:
        return run_command(self.commands[name], self.project_root, self.timeouts[name])

#$ End run

    def command_text(self, name: str) -> str:
        return " ".join(self.commands[name])

#$ End AnalysisContext

###########################################################################

"""

Name: CheckOutcome

Function: What a check hands back: the findings it produced, an optional skip

reason (when it couldn't get an answer), and progress notes for the console.

Arguments: None (it's a dataclass, so it's just fields)

Returns: No value returned (it's a class definition)

"""

@dataclass(frozen=True)
class CheckOutcome:
    findings: Tuple[Finding, ...] = ()
    skipped: Optional[str] = None
    notes: Tuple[str, ...] = ()

#$ End CheckOutcome

###########################################################################

"""

Name: Check

Function: Base class for all analysis checks. Each check looks at one aspect

of the project and returns a CheckOutcome. Checks never share state; the

pipeline stitches their findings together.

Arguments: None (it's a class definition)

Returns: No value returned

"""

class Check:
    """Base class for Quick Analyzer checks."""

    ### The unique identifier for this check
    slug: str = ""
    ### A human-readable title for the progress header
    title: str = ""
    ### Little picture shown next to the title
    icon: str = ""
    ### Description of what this check looks at
    description: str = ""

    def inspect(self, context: AnalysisContext) -> CheckOutcome:
        raise NotImplementedError(f"{type(self).__name__} does not implement inspect()")

#$ End Check

###########################################################################

"""

Name: CheckRegistry

Function: A registry that keeps track of all available check classes, in the

order they were registered (which is also the order they run in).

Arguments: None (it's a class definition)

Returns: No value returned

"""

class CheckRegistry:
    def __init__(self) -> None:
        ### slug -> class mapping (dicts keep insertion order)
        self._registry: Dict[str, Type[Check]] = {}

    ###########################################################################

    """

    Name: register

    Function: Register a check class. Duplicate slugs raise ValueError.

    Arguments: check_cls - the Check class we want to register

    Returns: No value returned

    """

    def register(self, check_cls: Type[Check]) -> None:
        ### Get the slug from the class, or make one up from the class name if it's empty
        slug = check_cls.slug or check_cls.__name__.lower()
        if slug in self._registry:
            raise ValueError(f"Duplicate check: {slug}")
        self._registry[slug] = check_cls

#$ End register

    def extend(self, check_classes: Iterable[Type[Check]]) -> None:
        for check_cls in check_classes:
            self.register(check_cls)

#$ End extend

    def create_all(self) -> List[Check]:
        return [cls() for cls in self._registry.values()]

#$ End create_all

    def slugs(self) -> List[str]:
        return list(self._registry.keys())

#$ End slugs

    def get(self, slug: str) -> Type[Check]:
        return self._registry[slug]

#$ End get

#$ End CheckRegistry

###########################################################################

"""

Name: summarize

Function: Count up all the findings by kind. Every kind shows up in the result

even when its count is zero, so the report can always print all three lines.

Arguments: findings - sequence of Finding objects to summarize

Returns: Dictionary with counts for each kind

"""

def summarize(findings: Sequence[Finding]) -> KindCounts:
    ### Initialize our counter dictionary with zeros for each kind
    counts: KindCounts = {kind: 0 for kind in Kind}
    for finding in findings:
        counts[finding.kind] += 1
    return counts

#$ End summarize
