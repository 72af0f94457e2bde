# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the findings module. This module will allow the application to:

# 1. Define the Kind and Priority enums (what sort of issue, and how bad)

# 2. Define the Finding data structure (how we represent a single issue)

# 3. Define the KindCounts type (for counting issues by kind)

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass
from typing import Dict, Optional

###########################################################################

"""

Name: Kind

Function: The coarse category of a finding. Errors block correctness, security

issues come from the audit tool, warnings are the "you should probably look at

this" pile.

Arguments: None (it's an enum)

Returns: No value returned

"""

class Kind(enum.Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    SECURITY = "SECURITY"

#$ End Kind

###########################################################################

"""

Name: Priority

Function: How serious a finding is. Members compare by rank so LOW < MEDIUM <

HIGH < CRITICAL, which is only ever used for display.

Arguments: None (it's an enum)

Returns: No value returned

"""

@functools.total_ordering
class Priority(enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        ### Position in declaration order (LOW is 0, CRITICAL is 3)
        return list(Priority).index(self)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Priority):
            return NotImplemented
        return self.rank < other.rank

#$ End Priority

###########################################################################

"""

Name: Finding

Function: A single reported issue. It's frozen, so once a check hands one over

nobody gets to quietly rewrite it later.

Arguments: None (it's a dataclass, so it's just fields)

Returns: No value returned (it's a class definition)

"""

@dataclass(frozen=True)
class Finding:
    ### What sort of issue this is (error, warning or security)
    kind: Kind
    ### Short human-readable summary (like "Build process failed")
    message: str
    ### How bad it is
    priority: Priority
    ### Optional remediation hint (usually the command to run for details)
    details: Optional[str] = None

#$ End Finding

###########################################################################

"""

Name: KindCounts

Function: Type alias for a dictionary that counts findings by kind. It's the

scoreboard at the top of the report.

Arguments: None (it's a type alias)

Returns: No value returned

"""

KindCounts = Dict[Kind, int]
