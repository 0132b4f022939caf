"""Test generators - NUnit scaffolds for C# classes."""

from .base import GeneratedField, GeneratedTestClass, GeneratedTestFile, GeneratedTestMethod
from .extractors import InterfaceNamePredicate, MockPredicate, looks_like_interface
from .scaffold import ScaffoldEngine, assign_test_names, generate_tests

__all__ = [
    "ScaffoldEngine",
    "generate_tests",
    "assign_test_names",
    "GeneratedField",
    "GeneratedTestMethod",
    "GeneratedTestClass",
    "GeneratedTestFile",
    "InterfaceNamePredicate",
    "MockPredicate",
    "looks_like_interface"
]
