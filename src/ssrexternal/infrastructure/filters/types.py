"""Filter type alias.

Python 3.12+ PEP 695 type alias syntax.
Filter function: takes a package name, returns True to keep.
"""

from collections.abc import Callable
from typing import TypeAlias

NameFilter: TypeAlias = Callable[[str], bool]
