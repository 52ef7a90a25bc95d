"""Module-name predicates used to prune closure counts."""

from __future__ import annotations

import sys
from typing import Callable

ModuleFilter = Callable[[str], bool]

_STANDARD_NAMES = frozenset(sys.stdlib_module_names) | frozenset(sys.builtin_module_names)


def is_standard_module(name: str) -> bool:
    """True if the top-level package of ``name`` ships with the interpreter."""
    return name.split(".", 1)[0] in _STANDARD_NAMES


def keep_all(name: str) -> bool:
    return True


def exclude_standard(name: str) -> bool:
    return not is_standard_module(name)


def make_filter(skip_standard: bool) -> ModuleFilter:
    return exclude_standard if skip_standard else keep_all
