"""Expression AST and its construction from Jinja2's expression parser.

Template placeholders already use Jinja2's ``{{ ... }}`` delimiters, so the
Jinja2 parser reads the arithmetic grammar; its node tree is narrowed here to
literals, identifiers, unary and binary operators and function calls.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from jinja2 import TemplateError, nodes
from jinja2.sandbox import SandboxedEnvironment

from .errors import ExprError, parse_error


@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class Unary:
    operator: str
    argument: "AstNode"


@dataclass(frozen=True)
class Binary:
    operator: str
    left: "AstNode"
    right: "AstNode"


@dataclass(frozen=True)
class Call:
    name: str
    arguments: tuple["AstNode", ...]


AstNode = Union[Literal, Identifier, Unary, Binary, Call]

_BINARY_NODES: dict[type[nodes.Expr], str] = {
    nodes.Add: "+",
    nodes.Sub: "-",
    nodes.Mul: "*",
    nodes.Div: "/",
    nodes.Mod: "%",
}

_UNARY_NODES: dict[type[nodes.Expr], str] = {
    nodes.Neg: "-",
    nodes.Pos: "+",
}


class _UnsupportedSyntax(Exception):
    pass


def _parser_environment() -> SandboxedEnvironment:
    return SandboxedEnvironment(autoescape=False)


def _convert(node: nodes.Node) -> AstNode:
    node_type = type(node)
    if node_type is nodes.Const:
        return Literal(node.value)
    if node_type is nodes.Name:
        return Identifier(node.name)
    if node_type in _UNARY_NODES:
        return Unary(_UNARY_NODES[node_type], _convert(node.node))
    if node_type in _BINARY_NODES:
        return Binary(_BINARY_NODES[node_type], _convert(node.left), _convert(node.right))
    if node_type is nodes.Call:
        if not isinstance(node.node, nodes.Name):
            raise _UnsupportedSyntax("Only named functions can be called")
        if node.kwargs or node.dyn_args is not None or node.dyn_kwargs is not None:
            raise _UnsupportedSyntax(f"Function '{node.node.name}' accepts positional arguments only")
        return Call(node.node.name, tuple(_convert(arg) for arg in node.args))
    raise _UnsupportedSyntax(f"Unsupported syntax '{node_type.__name__}' in expression")


def parse_expression(text: str) -> AstNode | ExprError:
    source = text.strip()
    if not source:
        return parse_error("Empty expression")
    try:
        template = _parser_environment().parse("{{ " + source + " }}")
    except TemplateError as exc:
        return parse_error(f"Failed to parse expression '{source}': {exc}")

    body = template.body
    if len(body) != 1 or not isinstance(body[0], nodes.Output) or len(body[0].nodes) != 1:
        return parse_error(f"Failed to parse expression '{source}'")
    try:
        return _convert(body[0].nodes[0])
    except _UnsupportedSyntax as exc:
        return parse_error(str(exc))
