"""
Mock Predicate - Decide which constructor dependencies are replaced by mocks.

The decision is purely syntactic: no type resolution happens, so a class that
merely follows the interface naming convention (e.g. ``IOStream``) is mocked
too. Callers can plug in any ``Callable[[str], bool]`` instead.
"""

from collections.abc import Callable

from ....constants import INTERFACE_MARKER

# Takes the declared type text of a parameter, returns True to mock it
MockPredicate = Callable[[str], bool]


def base_type_name(type_name: str) -> str:
    """
    Strip generic arguments, nullability and namespace qualification.

    >>> base_type_name("global::Company.Data.IRepository<Order>?")
    'IRepository'
    """
    # Drop everything inside (possibly nested) angle brackets
    depth = 0
    chars = []
    for char in type_name:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        elif depth == 0:
            chars.append(char)

    name = "".join(chars).strip().rstrip("?")
    name = name.rsplit("::", 1)[-1]
    return name.rsplit(".", 1)[-1]


class InterfaceNamePredicate:
    """Match type names that start with the interface marker followed by an upper-case letter."""

    def __init__(self, marker: str = INTERFACE_MARKER):
        self.marker = marker

    def __call__(self, type_name: str) -> bool:
        name = base_type_name(type_name)

        # Arrays and tuples cannot be mocked
        if "[" in name or "(" in name:
            return False

        if not name.startswith(self.marker) or len(name) <= len(self.marker):
            return False
        return name[len(self.marker)].isupper()


def looks_like_interface(type_name: str) -> bool:
    """Default mock predicate (``I`` + upper-case letter)."""
    return _DEFAULT_PREDICATE(type_name)


_DEFAULT_PREDICATE = InterfaceNamePredicate()
