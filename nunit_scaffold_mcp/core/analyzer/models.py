"""Data models for C# code analysis."""

from dataclasses import dataclass, field
from typing import Literal

# Passing modifiers that must be repeated at the call site
ParameterModifier = Literal["ref", "out", "in"]


@dataclass(frozen=True)
class ParameterInfo:
    """Information about a constructor or method parameter."""
    name: str
    type_name: str
    modifier: ParameterModifier | None = None

    @property
    def argument(self) -> str:
        """Argument text used when passing a local of the same name."""
        if self.modifier:
            return f"{self.modifier} {self.name}"
        return self.name


@dataclass(frozen=True)
class ConstructorInfo:
    """Information about a constructor."""
    parameters: tuple[ParameterInfo, ...] = ()
    modifiers: tuple[str, ...] = ()
    line_number: int = 0


@dataclass(frozen=True)
class MethodInfo:
    """Information about a method."""
    name: str
    parameters: tuple[ParameterInfo, ...]
    return_type: str = "void"
    modifiers: tuple[str, ...] = ()
    line_number: int = 0

    @property
    def is_void(self) -> bool:
        return self.return_type == "void"

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers


@dataclass(frozen=True)
class ClassInfo:
    """
    Read-only view of a class declaration.

    Attributes:
        namespaces: Enclosing namespace names, outermost first
        is_nested: True when declared inside another type
    """
    name: str
    constructors: tuple[ConstructorInfo, ...] = ()
    methods: tuple[MethodInfo, ...] = ()
    modifiers: tuple[str, ...] = ()
    namespaces: tuple[str, ...] = ()
    is_nested: bool = False
    line_number: int = 0

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers

    @property
    def is_partial(self) -> bool:
        return "partial" in self.modifiers

    @property
    def primary_constructor(self) -> ConstructorInfo:
        """Constructor with the fewest parameters (first declared wins ties)."""
        if not self.constructors:
            return ConstructorInfo()
        return min(self.constructors, key=lambda ctor: len(ctor.parameters))

    @property
    def public_methods(self) -> list[MethodInfo]:
        """Public methods sorted by ordinal name; equal names keep declaration order."""
        return sorted(
            (m for m in self.methods if m.is_public),
            key=lambda m: m.name
        )


@dataclass(frozen=True)
class CompilationUnitInfo:
    """Everything the scaffold engine needs from one parsed source file."""
    usings: tuple[str, ...] = ()
    classes: tuple[ClassInfo, ...] = ()

    @property
    def qualifying_classes(self) -> list[ClassInfo]:
        """Public classes that are not nested in another type."""
        return [c for c in self.classes if c.is_public and not c.is_nested]
