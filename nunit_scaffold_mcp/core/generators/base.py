"""
Models for generated NUnit test files and their C# serialization.
"""

from dataclasses import dataclass, field

from ...constants import FIXTURE_ATTRIBUTE, TEST_ATTRIBUTE

INDENT = "    "


@dataclass(frozen=True)
class GeneratedField:
    """A private field of the test class."""
    type_name: str                     # "IPrintable"
    name: str                          # "_printable"

    def to_code(self) -> str:
        return f"private {self.type_name} {self.name};"


@dataclass
class GeneratedTestMethod:
    """A parameterless public void method of the test class."""
    name: str                          # "Calculate0Test"
    statements: list[str]              # C# statements, one per entry
    attribute: str = TEST_ATTRIBUTE    # "Test" | "SetUp"

    def to_lines(self) -> list[str]:
        lines = [
            f"[{self.attribute}]",
            f"public void {self.name}()",
            "{",
        ]
        lines.extend(INDENT + statement for statement in self.statements)
        lines.append("}")
        return lines


@dataclass
class GeneratedTestClass:
    """Test class: [fields][setup][test methods]."""
    name: str
    fields: list[GeneratedField]
    setup: GeneratedTestMethod
    test_methods: list[GeneratedTestMethod] = field(default_factory=list)

    def to_lines(self) -> list[str]:
        lines = [
            f"[{FIXTURE_ATTRIBUTE}]",
            f"public class {self.name}",
            "{",
        ]

        body: list[str] = [f.to_code() for f in self.fields]
        for method in [self.setup, *self.test_methods]:
            if body:
                body.append("")
            body.extend(method.to_lines())

        lines.extend(INDENT + line if line else "" for line in body)
        lines.append("}")
        return lines


@dataclass
class GeneratedTestFile:
    """
    Complete generated compilation unit.

    Attributes:
        usings: Using directives, copied ones first
        namespaces: Enclosing namespace names, outermost first, with the
            innermost one already carrying the ".Tests" suffix
        test_class: The generated test class
    """
    usings: list[str]
    namespaces: tuple[str, ...]
    test_class: GeneratedTestClass

    @property
    def qualified_name(self) -> str:
        """Dotted namespace chain plus test class name; names the output file."""
        return ".".join([*self.namespaces, self.test_class.name])

    def to_code(self) -> str:
        """Convert to C# source with normalized formatting."""
        lines = list(self.usings)
        if lines:
            lines.append("")

        depth = 0
        for namespace in self.namespaces:
            lines.append(INDENT * depth + f"namespace {namespace}")
            lines.append(INDENT * depth + "{")
            depth += 1

        for line in self.test_class.to_lines():
            lines.append(INDENT * depth + line if line else "")

        while depth:
            depth -= 1
            lines.append(INDENT * depth + "}")

        return "\n".join(lines) + "\n"
