"""Analysis checks, in the order they run."""
from __future__ import annotations

from typing import List, Type

from .build import BuildCheck
from .dependencies import DependencyCheck
from .structure import StructureCheck
from .typescript import TypeCheck


def builtin_checks() -> List[Type]:
    return [
        StructureCheck,
        DependencyCheck,
        TypeCheck,
        BuildCheck,
    ]
