"""
Scaffold Engine - Main test scaffolding engine.

Turns every public top-level class of a C# compilation unit into an NUnit
fixture:
- Setup: mocks for interface-typed constructor dependencies, defaults for the
  rest, then the instance under test
- One Arrange/Act/Assert skeleton per public method, ending in Assert.Fail
"""

import logging
from dataclasses import replace
from itertools import groupby

from ...constants import (
    DEFAULT_LITERAL,
    EXTRA_USINGS,
    FAIL_MARKER,
    SETUP_ATTRIBUTE,
    SETUP_METHOD_NAME,
    TEST_CLASS_SUFFIX,
    TEST_METHOD_SUFFIX,
    TEST_NAMESPACE_SUFFIX,
)
from ..analyzer import analyze_code
from ..analyzer.models import ClassInfo, CompilationUnitInfo, MethodInfo, ParameterInfo
from .base import GeneratedField, GeneratedTestClass, GeneratedTestFile, GeneratedTestMethod
from .extractors.mock_predicate import MockPredicate, looks_like_interface

logger = logging.getLogger(__name__)

# Locals declared by every non-void test body
RESULT_LOCALS = ("actual", "expected")


class ScaffoldEngine:
    """Generate NUnit scaffolds from C# source (pure: same input, same output)."""

    def __init__(self, is_mockable: MockPredicate = looks_like_interface):
        """
        Args:
            is_mockable: Decides from a parameter's type name whether the
                dependency is replaced by a strict Moq mock
        """
        self.is_mockable = is_mockable

    def generate(self, source_code: str) -> list[tuple[str, str]]:
        """
        Generate one (qualified name, test source) pair per qualifying class.

        Raises:
            ParseError: If the source is not valid C# (nothing is generated)
        """
        return [
            (test_file.qualified_name, test_file.to_code())
            for test_file in self.generate_files(source_code)
        ]

    def generate_files(self, source_code: str) -> list[GeneratedTestFile]:
        """Same as generate(), returning the structured test files."""
        unit = analyze_code(source_code)
        return self.generate_for_unit(unit)

    def generate_for_unit(self, unit: CompilationUnitInfo) -> list[GeneratedTestFile]:
        """Build a self-contained test file for every public top-level class."""
        usings = [*unit.usings, *EXTRA_USINGS]

        test_files = []
        for cls in unit.qualifying_classes:
            test_file = GeneratedTestFile(
                usings=list(usings),
                namespaces=fixture_namespaces(cls.namespaces),
                test_class=self.generate_for_class(cls)
            )
            logger.debug(
                f"Scaffolded {test_file.qualified_name}: "
                f"{len(test_file.test_class.test_methods)} test(s)"
            )
            test_files.append(test_file)

        return test_files

    def generate_for_class(self, cls: ClassInfo) -> GeneratedTestClass:
        """Generate the test class for a single class."""
        fields, setup, instance_field = self._build_setup(cls)

        methods = cls.public_methods
        test_methods = [
            self._build_test_method(cls, method, test_name, instance_field)
            for method, test_name in zip(methods, assign_test_names(methods))
        ]

        return GeneratedTestClass(
            name=f"{cls.name}{TEST_CLASS_SUFFIX}",
            fields=fields,
            setup=setup,
            test_methods=test_methods
        )

    # =========================================================================
    # Setup
    # =========================================================================

    def _build_setup(
        self,
        cls: ClassInfo
    ) -> tuple[list[GeneratedField], GeneratedTestMethod, str]:
        """Build fields and the [SetUp] method; returns the instance field name too."""
        fields: list[GeneratedField] = []
        statements: list[str] = []
        arguments: list[str] = []
        taken: set[str] = set()

        for param in cls.primary_constructor.parameters:
            if self.is_mockable(param.type_name):
                field_name = _unique(f"_{param.name.lstrip('@')}", taken)
                fields.append(GeneratedField(param.type_name, field_name))
                statements.append(
                    f"{field_name} = new Mock<{param.type_name}>(MockBehavior.Strict).Object;"
                )
                arguments.append(_with_modifier(param, field_name))
            else:
                local = replace(param, name=_unique(param.name, taken))
                statements.append(_default_local(local))
                arguments.append(local.argument)

        instance_field = _unique(instance_field_name(cls.name), taken)
        fields.append(GeneratedField(cls.name, instance_field))
        statements.append(f"{instance_field} = new {cls.name}({', '.join(arguments)});")

        setup = GeneratedTestMethod(
            name=SETUP_METHOD_NAME,
            statements=statements,
            attribute=SETUP_ATTRIBUTE
        )
        return fields, setup, instance_field

    # =========================================================================
    # Test methods
    # =========================================================================

    def _build_test_method(
        self,
        cls: ClassInfo,
        method: MethodInfo,
        test_name: str,
        instance_field: str
    ) -> GeneratedTestMethod:
        """Arrange defaults, act on the instance (or class), assert, then fail."""
        receiver = cls.name if method.is_static else instance_field

        # Arranged locals must not shadow the receiver or the result locals
        reserved = {receiver, *RESULT_LOCALS}
        taken = reserved | {param.name for param in method.parameters}
        parameters = [
            replace(param, name=_unique(param.name, taken)) if param.name in reserved else param
            for param in method.parameters
        ]

        # Arrange
        statements = [_default_local(param) for param in parameters]

        # Act
        arguments = ", ".join(param.argument for param in parameters)
        call = f"{receiver}.{method.name}({arguments})"

        if method.is_void:
            statements.append(f"{call};")
        else:
            statements.append(f"var actual = {call};")
            # Assert
            statements.append(f"{method.return_type} expected = {DEFAULT_LITERAL};")
            statements.append("Assert.That(actual, Is.EqualTo(expected));")

        statements.append(f'Assert.Fail("{FAIL_MARKER}");')

        return GeneratedTestMethod(name=test_name, statements=statements)


def assign_test_names(methods: list[MethodInfo]) -> list[str]:
    """
    Name test methods for name-sorted methods.

    A method whose name is unique gets ``<Name>Test``; a run of equal names
    is numbered by position: ``<Name>0Test``, ``<Name>1Test``, ...
    A name already produced earlier (``Get0()`` after two ``Get`` overloads)
    gets a numeric suffix: ``Get0Test2``.
    """
    names = []
    taken: set[str] = set()

    for name, group in groupby(methods, key=lambda m: m.name):
        run_length = len(list(group))
        if run_length == 1:
            candidates = [f"{name}{TEST_METHOD_SUFFIX}"]
        else:
            candidates = [f"{name}{index}{TEST_METHOD_SUFFIX}" for index in range(run_length)]
        names.extend(_unique(candidate, taken) for candidate in candidates)

    return names


def fixture_namespaces(namespaces: tuple[str, ...]) -> tuple[str, ...]:
    """Append the Tests suffix to the innermost namespace only."""
    if not namespaces:
        return ()
    return (*namespaces[:-1], namespaces[-1] + TEST_NAMESPACE_SUFFIX)


def instance_field_name(class_name: str) -> str:
    """``BebraClass`` -> ``_bebraClass``."""
    return f"_{class_name[:1].lower()}{class_name[1:]}"


def generate_tests(
    source_code: str,
    is_mockable: MockPredicate = looks_like_interface
) -> list[tuple[str, str]]:
    """Generate (qualified name, test source) pairs for C# source."""
    return ScaffoldEngine(is_mockable=is_mockable).generate(source_code)


def _default_local(param: ParameterInfo) -> str:
    return f"{param.type_name} {param.name} = {DEFAULT_LITERAL};"


def _with_modifier(param: ParameterInfo, expression: str) -> str:
    if param.modifier:
        return f"{param.modifier} {expression}"
    return expression


def _unique(name: str, taken: set[str]) -> str:
    """Reserve a name, numbering it if already used."""
    candidate = name
    counter = 1
    while candidate in taken:
        counter += 1
        candidate = f"{name}{counter}"
    taken.add(candidate)
    return candidate
