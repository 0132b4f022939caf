"""
Shared constants used across the project.
"""

from typing import Final

# Generated test class / namespace naming
TEST_CLASS_SUFFIX: Final[str] = "Tests"
TEST_NAMESPACE_SUFFIX: Final[str] = ".Tests"
TEST_METHOD_SUFFIX: Final[str] = "Test"
SETUP_METHOD_NAME: Final[str] = "Setup"

# Usings appended to every generated compilation unit (after the copied ones)
EXTRA_USINGS: Final[tuple[str, ...]] = (
    "using NUnit.Framework;",
    "using Moq;",
)

# Attributes emitted on the generated members
FIXTURE_ATTRIBUTE: Final[str] = "TestFixture"
SETUP_ATTRIBUTE: Final[str] = "SetUp"
TEST_ATTRIBUTE: Final[str] = "Test"

# Literal used for every arranged local and expected value
DEFAULT_LITERAL: Final[str] = "default"

# Text passed to Assert.Fail in every scaffold test
FAIL_MARKER: Final[str] = "autogenerated"

# Leading marker of conventionally named interface types (IService, IRepo<T>)
INTERFACE_MARKER: Final[str] = "I"

# Output files
OUTPUT_EXTENSION: Final[str] = ".cs"
INPUT_PATH_SEPARATOR: Final[str] = "|"

# File constraints
MAX_CODE_SIZE: Final[int] = 1_000_000  # 1MB
ALLOWED_EXTENSIONS: Final[frozenset[str]] = frozenset({".cs"})

# Pipeline: each bounded queue holds this many items per consumer worker
QUEUE_CAPACITY_PER_WORKER: Final[int] = 2
