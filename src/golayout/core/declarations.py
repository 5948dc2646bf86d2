from dataclasses import dataclass
from enum import StrEnum

from tree_sitter import Node

from golayout.core.ast import node_text


class DeclarationKind(StrEnum):
    IMPORT = "import"
    CONST = "const"
    VAR = "var"
    TYPE_ALIAS = "type"
    STRUCT = "struct"
    INTERFACE = "interface"
    FUNC = "func"


_GENERIC_KINDS = {
    "import_declaration": DeclarationKind.IMPORT,
    "const_declaration": DeclarationKind.CONST,
    "var_declaration": DeclarationKind.VAR,
}
_FUNCTION_DECLARATIONS = frozenset({"function_declaration", "method_declaration"})
_TYPE_SPECS = frozenset({"type_spec", "type_alias"})


@dataclass(frozen=True)
class FunctionTraits:
    name: str
    receiver: str | None
    is_public: bool
    is_testing: bool

    @property
    def group_key(self) -> tuple[str | None, bool, bool]:
        return self.receiver, self.is_public, self.is_testing


@dataclass(frozen=True)
class Declaration:
    """A top-level declaration. ``kind`` is ``None`` when the node could not be classified."""

    node: Node
    kind: DeclarationKind | None
    name: str | None = None
    function: FunctionTraits | None = None
    spec_count: int = 1

    @property
    def start_byte(self) -> int:
        return self.node.start_byte

    @property
    def end_byte(self) -> int:
        return self.node.end_byte


def base_type_name(type_node: Node | None, source: bytes) -> str | None:
    """Name of ``T`` for ``T``, ``*T``, ``T[K]`` and ``*T[K]``; ``None`` for anything else."""
    if type_node is None:
        return None
    if type_node.type == "pointer_type":
        inner = type_node.named_children
        type_node = inner[-1] if inner else None
        if type_node is None:
            return None
    if type_node.type == "generic_type":
        type_node = type_node.child_by_field_name("type")
        if type_node is None:
            return None
    if type_node.type == "type_identifier":
        return node_text(type_node, source)
    return None


def receiver_type_name(receiver: Node | None, source: bytes) -> str | None:
    if receiver is None:
        return None
    for parameter in receiver.named_children:
        if parameter.type == "parameter_declaration":
            return base_type_name(parameter.child_by_field_name("type"), source)
    return None


def function_traits(node: Node, source: bytes, test_prefix: str = "Test") -> FunctionTraits:
    name_node = node.child_by_field_name("name")
    name = node_text(name_node, source) if name_node is not None else ""
    return FunctionTraits(
        name=name,
        receiver=receiver_type_name(node.child_by_field_name("receiver"), source),
        is_public=name[:1].isupper(),
        is_testing=name.startswith(test_prefix),
    )


def type_specs(node: Node) -> list[Node]:
    specs: list[Node] = []
    for child in node.named_children:
        if child.type in _TYPE_SPECS:
            specs.append(child)
        elif child.type == "type_spec_list":
            specs.extend(c for c in child.named_children if c.type in _TYPE_SPECS)
    return specs


def _type_spec_kind(spec: Node) -> DeclarationKind:
    if spec.type == "type_spec":
        underlying = spec.child_by_field_name("type")
        if underlying is not None and underlying.type == "struct_type":
            return DeclarationKind.STRUCT
        if underlying is not None and underlying.type == "interface_type":
            return DeclarationKind.INTERFACE
    return DeclarationKind.TYPE_ALIAS


def classify_declaration(node: Node, source: bytes, test_prefix: str = "Test") -> Declaration:
    if node.type in _FUNCTION_DECLARATIONS:
        traits = function_traits(node, source, test_prefix)
        return Declaration(node=node, kind=DeclarationKind.FUNC, name=traits.name, function=traits)

    if node.type in _GENERIC_KINDS:
        return Declaration(node=node, kind=_GENERIC_KINDS[node.type])

    if node.type == "type_declaration":
        specs = type_specs(node)
        if len(specs) != 1:
            return Declaration(node=node, kind=DeclarationKind.TYPE_ALIAS, spec_count=len(specs))
        spec = specs[0]
        name_node = spec.child_by_field_name("name")
        return Declaration(
            node=node,
            kind=_type_spec_kind(spec),
            name=node_text(name_node, source) if name_node is not None else None,
        )

    return Declaration(node=node, kind=None)


def collect_declarations(root: Node, source: bytes, test_prefix: str = "Test") -> list[Declaration]:
    """Top-level declarations of a file sorted by span; package clause and comments excluded."""
    nodes = [child for child in root.named_children if child.type not in ("package_clause", "comment")]
    nodes.sort(key=lambda n: (n.start_byte, n.end_byte))
    return [classify_declaration(node, source, test_prefix) for node in nodes]
