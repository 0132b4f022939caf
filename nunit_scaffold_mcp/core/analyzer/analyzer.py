"""
Code Analyzer - Turn C# source into the read-only view the scaffold engine uses.
"""

import logging
from dataclasses import replace

from .models import ClassInfo, CompilationUnitInfo
from .parser import extract_classes, extract_usings, parse_code

logger = logging.getLogger(__name__)


def analyze_code(code: str) -> CompilationUnitInfo:
    """
    Analyze C# code.

    1. Parses the code (rejecting it whole on any syntax error)
    2. Collects using directives
    3. Extracts class declarations with their constructors and methods
    4. Merges the parts of partial classes

    Args:
        code: C# source code as string

    Returns:
        CompilationUnitInfo with usings and classes in document order

    Raises:
        ParseError: If the code is not valid C#
    """
    tree = parse_code(code)
    source_bytes = code.encode("utf-8")

    usings = extract_usings(tree, source_bytes)
    classes = merge_partial_classes(extract_classes(tree, source_bytes))

    logger.debug(f"Analyzed unit: {len(usings)} using(s), {len(classes)} class(es)")

    return CompilationUnitInfo(usings=tuple(usings), classes=tuple(classes))


def merge_partial_classes(classes: list[ClassInfo]) -> list[ClassInfo]:
    """
    Fold top-level partial declarations of one class into its first part.

    Parts match on name and namespace chain. Members keep document order and
    modifiers are united, so a single ``public`` part makes the class public.
    """
    merged: list[ClassInfo] = []
    index: dict[tuple, int] = {}

    for cls in classes:
        key = (cls.namespaces, cls.name)
        if not cls.is_partial or cls.is_nested or key not in index:
            if cls.is_partial and not cls.is_nested:
                index[key] = len(merged)
            merged.append(cls)
            continue

        first = merged[index[key]]
        merged[index[key]] = replace(
            first,
            constructors=first.constructors + cls.constructors,
            methods=first.methods + cls.methods,
            modifiers=first.modifiers + tuple(m for m in cls.modifiers if m not in first.modifiers)
        )

    return merged
