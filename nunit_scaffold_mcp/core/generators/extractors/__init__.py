"""Extractors - signals derived from analyzed C# declarations."""

from .mock_predicate import InterfaceNamePredicate, MockPredicate, base_type_name, looks_like_interface

__all__ = [
    "InterfaceNamePredicate",
    "MockPredicate",
    "base_type_name",
    "looks_like_interface",
]
