"""Code Parser - Parse C# code with tree-sitter and extract structure."""

from functools import lru_cache

import tree_sitter_c_sharp as tscs
from tree_sitter import Language, Node, Parser, Tree

from ..exceptions import ParseError
from .models import ClassInfo, ConstructorInfo, MethodInfo, ParameterInfo

NAMESPACE_TYPES = frozenset({
    "namespace_declaration",
    "file_scoped_namespace_declaration",
})

TYPE_DECLARATION_TYPES = frozenset({
    "class_declaration",
    "struct_declaration",
    "interface_declaration",
    "record_declaration",
    "record_struct_declaration",
    "enum_declaration",
})

PARAMETER_TYPES = frozenset({"parameter", "parameter_array"})

PASSING_MODIFIERS = frozenset({"ref", "out", "in"})

# Parameter parts that are never the parameter's type
UNTYPED_PARAMETER_PARTS = frozenset({"attribute_list", "modifier", "parameter_modifier", "identifier"})


@lru_cache(maxsize=1)
def get_language() -> Language:
    """Load the C# grammar once per process."""
    return Language(tscs.language())


def parse_code(code: str) -> Tree:
    """
    Parse C# source into a tree-sitter tree.

    tree-sitter recovers from errors, so the tree is checked for ERROR and
    MISSING nodes and rejected as a whole if any are found.

    Raises:
        ParseError: If the source is not syntactically valid C#
    """
    # A Parser per call keeps generation thread-safe; the Language is cached
    parser = Parser(get_language())
    tree = parser.parse(code.encode("utf-8"))

    if tree.root_node.has_error:
        error_node = _find_first_error(tree.root_node)
        if error_node is None:
            raise ParseError("Syntax error in C# source")
        line, column = error_node.start_point
        kind = "Missing token" if error_node.is_missing else "Syntax error"
        raise ParseError(f"{kind} in C# source", line + 1, column + 1)

    return tree


def node_text(source_bytes: bytes, node: Node) -> str:
    """Slice a node's text out of the original source bytes."""
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def extract_usings(tree: Tree, source_bytes: bytes) -> list[str]:
    """Extract every using directive (file and namespace scope), in document order."""

    usings = []

    for node in _walk(tree.root_node):
        if node.type == "using_directive":
            usings.append(_squash(node_text(source_bytes, node)))

    return usings


def extract_classes(tree: Tree, source_bytes: bytes) -> list[ClassInfo]:
    """Extract all class declarations (nested ones included), in document order."""

    classes = []

    for node in _walk(tree.root_node):
        if node.type == "class_declaration":
            classes.append(_parse_class(node, tree.root_node, source_bytes))

    return classes


def namespace_chain(node: Node, root: Node, source_bytes: bytes) -> tuple[str, ...]:
    """
    Names of the namespaces enclosing a node, outermost first.

    Walks parent links up to the compilation unit. A file-scoped namespace
    that the grammar places as a sibling of the types it covers is added as
    the outermost entry.
    """
    names = []
    found_file_scoped = False

    current = node.parent
    while current is not None:
        if current.type in NAMESPACE_TYPES:
            names.append(_declaration_name(current, source_bytes))
            if current.type == "file_scoped_namespace_declaration":
                found_file_scoped = True
        current = current.parent

    if not found_file_scoped:
        for child in root.children:
            if (child.type == "file_scoped_namespace_declaration"
                    and child.start_byte < node.start_byte):
                names.append(_declaration_name(child, source_bytes))
                break

    names.reverse()
    return tuple(names)


def _parse_class(node: Node, root: Node, source_bytes: bytes) -> ClassInfo:
    """Parse a class_declaration node into ClassInfo."""

    constructors = []
    methods = []

    body = node.child_by_field_name("body")
    if body is not None:
        for member in body.named_children:
            if member.type == "constructor_declaration":
                ctor = _parse_constructor(member, source_bytes)
                if "static" not in ctor.modifiers:
                    constructors.append(ctor)
            elif member.type == "method_declaration":
                methods.append(_parse_method(member, source_bytes))

    return ClassInfo(
        name=_declaration_name(node, source_bytes),
        constructors=tuple(constructors),
        methods=tuple(methods),
        modifiers=_modifiers(node, source_bytes),
        namespaces=namespace_chain(node, root, source_bytes),
        is_nested=_is_nested(node),
        line_number=node.start_point[0] + 1
    )


def _parse_constructor(node: Node, source_bytes: bytes) -> ConstructorInfo:
    """Parse a constructor_declaration node into ConstructorInfo."""

    return ConstructorInfo(
        parameters=_parse_parameters(node, source_bytes),
        modifiers=_modifiers(node, source_bytes),
        line_number=node.start_point[0] + 1
    )


def _parse_method(node: Node, source_bytes: bytes) -> MethodInfo:
    """Parse a method_declaration node into MethodInfo."""

    # Newer grammars name the return type field "returns", older ones "type"
    return_node = node.child_by_field_name("returns") or node.child_by_field_name("type")
    return_type = _squash(node_text(source_bytes, return_node)) if return_node else "void"

    return MethodInfo(
        name=_declaration_name(node, source_bytes),
        parameters=_parse_parameters(node, source_bytes),
        return_type=return_type,
        modifiers=_modifiers(node, source_bytes),
        line_number=node.start_point[0] + 1
    )


def _parse_parameters(node: Node, source_bytes: bytes) -> tuple[ParameterInfo, ...]:
    """Parse the parameter_list of a constructor or method."""

    parameter_list = node.child_by_field_name("parameters")
    if parameter_list is None:
        return ()

    parameters = []
    for segment in _parameter_segments(parameter_list):
        if len(segment) == 1 and segment[0].type in PARAMETER_TYPES:
            param = segment[0]
            members = param.children
            type_node = param.child_by_field_name("type")
            name_node = param.child_by_field_name("name")
        else:
            # Newer grammars inline a params array into the parameter_list
            members = segment
            type_node = name_node = None

        # Older grammars declare parameter_array without field names
        if name_node is None:
            identifiers = [c for c in members if c.type == "identifier"]
            name_node = identifiers[-1] if identifiers else None
        if type_node is None:
            type_node = next(
                (c for c in members
                 if c.is_named and c != name_node and c.type not in UNTYPED_PARAMETER_PARTS),
                None
            )

        if name_node is None:
            continue

        modifier = None
        for child in members:
            if child == type_node or child == name_node:
                continue
            text = node_text(source_bytes, child)
            if text in PASSING_MODIFIERS:
                modifier = text

        type_name = _squash(node_text(source_bytes, type_node)) if type_node else "var"

        # Some grammar versions fold the modifier into a ref_type node
        head, _, rest = type_name.partition(" ")
        if head in PASSING_MODIFIERS and rest:
            modifier, type_name = head, rest

        parameters.append(ParameterInfo(
            name=node_text(source_bytes, name_node),
            type_name=type_name,
            modifier=modifier
        ))

    return tuple(parameters)


def _parameter_segments(parameter_list: Node) -> list[list[Node]]:
    """Split a parameter_list's children on commas, dropping parentheses and comments."""
    segments: list[list[Node]] = [[]]
    for child in parameter_list.children:
        if child.type in ("(", ")", "comment"):
            continue
        if child.type == ",":
            segments.append([])
        else:
            segments[-1].append(child)
    return [segment for segment in segments if segment]


def _declaration_name(node: Node, source_bytes: bytes) -> str:
    """Name of a declaration; dotted names lose any inner whitespace."""
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return ""
    return "".join(node_text(source_bytes, name_node).split())


def _modifiers(node: Node, source_bytes: bytes) -> tuple[str, ...]:
    """Modifier keywords (public, static, ...) declared directly on a node."""
    return tuple(
        node_text(source_bytes, child)
        for child in node.children
        if child.type == "modifier"
    )


def _is_nested(node: Node) -> bool:
    """Check whether a type declaration sits inside another type declaration."""
    current = node.parent
    while current is not None:
        if current.type in TYPE_DECLARATION_TYPES:
            return True
        current = current.parent
    return False


def _walk(root: Node):
    """Yield nodes in document (pre-)order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _find_first_error(root: Node) -> Node | None:
    """First ERROR or MISSING node in document order."""
    for node in _walk(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


def _squash(text: str) -> str:
    """Collapse whitespace runs to single spaces."""
    return " ".join(text.split())
