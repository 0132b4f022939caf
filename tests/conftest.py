"""Shared C# samples and helpers for the test suite."""

import pytest

from nunit_scaffold_mcp.core.analyzer.parser import node_text, parse_code


PROGRAM_TEXT_1 = """
namespace HelloWorld
{
    public class Program
    {
        private readonly Random _random;

        public Program(int seed)
        {
            _random = new Random(seed);
        }

        static void Main(string[] args)
        {
            Console.WriteLine("Hello, World!");
        }

        public int GetRandom()
        {
            return _random.Next(1, 100);
        }
    }
}
"""

PROGRAM_TEXT_2 = """
namespace SecondNs.Second
{
    namespace InnerNs
    {
        public class Program
        {
            static void Main(string[] args)
            {
                Console.WriteLine("Hello, World!");
            }

            public double Calculate(double x)
            {
                return Math.Sqrt(x) * 9 - 42;
            }

            public int Calculate(int x)
            {
                return 42 * x;
            }
        }
    }
}
"""

PROGRAM_TEXT_3 = """
namespace Interfaces
{
    public interface IPrintable
    {
        void Print();
    }

    public interface IBebrable
    {
        void DoBebra();
    }
}

namespace Bebra.Bebra1
{
    namespace Bebra2
    {
        using Interfaces;
        public class BebraClass
        {
            private IPrintable _printable;
            private IBebrable _bebrable;

            public BebraClass(IPrintable printable, IBebrable bebrable, int x)
            {
                _printable = printable;
                _bebrable = bebrable;
            }

            public static string MultiplyString(int a, string str)
            {
                string result = "";
                for (int i = 0; i < a; i++)
                {
                    result += str;
                }
                return result;
            }

            public void OuterMethod(int x)
            {
                Console.WriteLine($"{x}{x}{x}tentacion");
            }

            private int InnerBebraMethod()
            {
                return 42;
            }
        }
    }
}
"""


class ParsedCSharp:
    """Re-parsed generated C# with helpers to query it by node type."""

    def __init__(self, code: str):
        self.code = code
        self.source_bytes = code.encode("utf-8")
        self.tree = parse_code(code)

    def nodes(self, node_type: str) -> list:
        found = []
        stack = [self.tree.root_node]
        while stack:
            node = stack.pop()
            if node.type == node_type:
                found.append(node)
            stack.extend(reversed(node.children))
        return found

    def text(self, node) -> str:
        return node_text(self.source_bytes, node)

    def methods(self) -> list:
        return self.nodes("method_declaration")

    def method_name(self, method) -> str:
        return self.text(method.child_by_field_name("name"))

    def statements(self, method) -> list[str]:
        body = method.child_by_field_name("body")
        return [self.text(statement) for statement in body.named_children]

    def namespace_names(self) -> list[str]:
        return [
            self.text(ns.child_by_field_name("name"))
            for ns in self.nodes("namespace_declaration")
        ]


@pytest.fixture
def program_text_1():
    return PROGRAM_TEXT_1


@pytest.fixture
def program_text_2():
    return PROGRAM_TEXT_2


@pytest.fixture
def program_text_3():
    return PROGRAM_TEXT_3


@pytest.fixture
def reparse():
    """Parse generated C# back into a queryable tree (fails on invalid C#)."""
    return ParsedCSharp


@pytest.fixture
def write_sources(tmp_path):
    """Write C# sources into tmp_path/src and return their paths."""

    def _write(**sources: str) -> list[str]:
        src_dir = tmp_path / "src"
        src_dir.mkdir(exist_ok=True)
        paths = []
        for name, content in sources.items():
            path = src_dir / f"{name}.cs"
            path.write_text(content, encoding="utf-8")
            paths.append(str(path))
        return paths

    return _write
