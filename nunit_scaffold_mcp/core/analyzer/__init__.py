"""Analyzer - C# parsing and structure extraction."""

from .analyzer import analyze_code
from .models import (
    ClassInfo,
    CompilationUnitInfo,
    ConstructorInfo,
    MethodInfo,
    ParameterInfo,
)
from .parser import parse_code

__all__ = [
    "analyze_code",
    "parse_code",
    "CompilationUnitInfo",
    "ClassInfo",
    "ConstructorInfo",
    "MethodInfo",
    "ParameterInfo"
]
