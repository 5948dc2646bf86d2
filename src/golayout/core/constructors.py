"""Shallow inference of "is this free function a constructor of struct S".

Only the idiomatic shapes are recognised: a declared ``S``/``*S`` result,
``return &S{...}``, or a local bound to ``&S{...}`` and returned later in the
same body. Nested blocks, calls and multi-hop assignments are not followed.
"""

from tree_sitter import Node

from golayout.core.ast import block_statements, node_text
from golayout.core.declarations import base_type_name

_ASSIGNMENTS = frozenset({"assignment_statement", "short_var_declaration"})


def _expressions(node: Node | None) -> list[Node]:
    if node is None:
        return []
    if node.type == "expression_list":
        return [c for c in node.named_children if c.type != "comment"]
    return [node]


def _result_types(function: Node) -> list[Node]:
    result = function.child_by_field_name("result")
    if result is None:
        return []
    if result.type != "parameter_list":
        return [result]
    types = []
    for parameter in result.named_children:
        if parameter.type == "parameter_declaration":
            type_node = parameter.child_by_field_name("type")
            if type_node is not None:
                types.append(type_node)
    return types


def referenced_struct_type(expression: Node, source: bytes) -> str | None:
    """``S`` for an ``&S{...}`` expression, ``None`` otherwise."""
    if expression.type != "unary_expression":
        return None
    operator = expression.child_by_field_name("operator")
    operand = expression.child_by_field_name("operand")
    if operator is None or operand is None or node_text(operator, source) != "&":
        return None
    if operand.type != "composite_literal":
        return None
    return base_type_name(operand.child_by_field_name("type"), source)


def _bindings(statements: list[Node], source: bytes) -> dict[str, str]:
    pairs: list[tuple[list[Node], list[Node]]] = []
    for statement in statements:
        if statement.type in _ASSIGNMENTS:
            pairs.append(
                (
                    _expressions(statement.child_by_field_name("left")),
                    _expressions(statement.child_by_field_name("right")),
                )
            )
        elif statement.type == "var_declaration":
            specs = [c for c in statement.named_children if c.type == "var_spec"]
            for spec_list in (c for c in statement.named_children if c.type == "var_spec_list"):
                specs.extend(c for c in spec_list.named_children if c.type == "var_spec")
            for spec in specs:
                pairs.append(
                    (
                        spec.children_by_field_name("name"),
                        _expressions(spec.child_by_field_name("value")),
                    )
                )

    bound: dict[str, str] = {}
    for left, right in pairs:
        for index, target in enumerate(left):
            # Values coming from a call (fewer right-hand expressions) are not deduced.
            if target.type != "identifier" or index >= len(right):
                continue
            struct_type = referenced_struct_type(right[index], source)
            if struct_type is not None:
                bound[node_text(target, source)] = struct_type
    return bound


def returns_struct(function: Node, struct_name: str, source: bytes) -> bool:
    """True when the free function ``function`` is inferred to construct ``struct_name``."""
    for type_node in _result_types(function):
        if base_type_name(type_node, source) == struct_name:
            return True

    body = function.child_by_field_name("body")
    if body is None:
        return False

    statements = block_statements(body)
    bound = _bindings(statements, source)
    for statement in statements:
        if statement.type != "return_statement":
            continue
        for child in statement.named_children:
            for expression in _expressions(child):
                if referenced_struct_type(expression, source) == struct_name:
                    return True
                if expression.type == "identifier" and bound.get(node_text(expression, source)) == struct_name:
                    return True
    return False
