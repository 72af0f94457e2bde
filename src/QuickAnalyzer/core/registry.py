# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the registry module. This module will allow the application to:

# 1. Register all the built-in checks, in run order

# 2. Pick out the subset of checks the user asked for

from __future__ import annotations

from typing import Iterable, List, Optional

from .base import Check, CheckRegistry

###########################################################################

"""

Name: register_builtin_checks

Function: Register the checks that ship with the package. Registration order

is run order: structure, dependencies, typescript, build.

Arguments: registry - the CheckRegistry to register classes into

Returns: No value returned

"""

def register_builtin_checks(registry: CheckRegistry) -> None:
    from QuickAnalyzer.checks import builtin_checks

    registry.extend(builtin_checks())

#$ End register_builtin_checks

###########################################################################

"""

Name: select_checks

Function: Instantiate the checks to run. With no wanted slugs it's all of

them; otherwise only the wanted ones, still in registry order (so asking for

"build,structure" runs structure first). Unknown slugs raise KeyError.

Arguments: registry - the CheckRegistry to pick from

            wanted - optional iterable of slugs

Returns: List of Check instances

"""

def select_checks(registry: CheckRegistry, wanted: Optional[Iterable[str]] = None) -> List[Check]:
    if wanted is None:
        return registry.create_all()
    wanted_set = set(wanted)
    unknown = wanted_set - set(registry.slugs())
    if unknown:
        raise KeyError(", ".join(sorted(unknown)))
    return [registry.get(slug)() for slug in registry.slugs() if slug in wanted_set]

#$ End select_checks
