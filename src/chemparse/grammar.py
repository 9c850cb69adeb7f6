"""Grammar for chemical notation and the parse tree it produces.

The grammar is compiled with ``parglare``. Parse actions turn the recognized
input into a tree of small immutable node types:

    Equation(Reactants, Products)
    Reactants / Products -> Coefficient?, Formula, Whitespace*, ...
    Formula / Group      -> Element | Index | Group, ...

An index is always the sibling that immediately follows the element or group
it multiplies. Every node keeps the literal text it was parsed from.
"""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from typing import ClassVar, Sequence

from parglare import Grammar, ParseError, Parser

from chemparse.constants import ARROW
from chemparse.errors import ParsingError


@dataclass(frozen=True)
class Node:
    kind: ClassVar[str] = ""
    text: str


@dataclass(frozen=True)
class Element(Node):
    kind: ClassVar[str] = "element"

    @property
    def symbol(self) -> str:
        return self.text


@dataclass(frozen=True)
class Index(Node):
    kind: ClassVar[str] = "index"


@dataclass(frozen=True)
class Coefficient(Node):
    kind: ClassVar[str] = "coefficient"


@dataclass(frozen=True)
class Whitespace(Node):
    kind: ClassVar[str] = "whitespace"


@dataclass(frozen=True)
class Branch(Node):
    children: tuple[Node, ...] = ()


@dataclass(frozen=True)
class Group(Branch):
    kind: ClassVar[str] = "group"


@dataclass(frozen=True)
class Formula(Branch):
    kind: ClassVar[str] = "formula"


@dataclass(frozen=True)
class Reactants(Branch):
    kind: ClassVar[str] = "reactants"


@dataclass(frozen=True)
class Products(Branch):
    kind: ClassVar[str] = "products"


@dataclass(frozen=True)
class Equation(Branch):
    kind: ClassVar[str] = "equation"


RULES = {
    "equation": "equation: reactants arrow products;",
    "arrow": "arrow: ARROW | ws ARROW | ARROW ws | ws ARROW ws;",
    "reactants": "reactants: term | reactants sep term;",
    "products": "products: term | products sep term;",
    "sep": "sep: PLUS | ws PLUS | PLUS ws | ws PLUS ws;",
    "ws": "ws: WS | ws WS;",
    "term": "term: formula | coefficient formula;",
    "coefficient": "coefficient: NUMBER;",
    "formula": "formula: part | formula part;",
    "part": "part: element | element index | group | group index;",
    "group": "group: LPAREN formula RPAREN;",
    "group_start": "group_start: group | group index;",
    "element": "element: ELEMENT;",
    "index": "index: NUMBER;",
    "whitespace": "whitespace: WS;",
}

TERMINALS = {
    "ELEMENT": r"/[A-Z][a-z]*/",
    "NUMBER": r"/[1-9][0-9]*/",
    "LPAREN": "'('",
    "RPAREN": "')'",
    "PLUS": "'+'",
    "ARROW": f"'{ARROW}'",
    "WS": r"/\s/",
}

# Rules that can be requested as a start symbol.
START_RULES = (
    "element",
    "index",
    "coefficient",
    "whitespace",
    "group",
    "formula",
    "reactants",
    "products",
    "equation",
)

# Start rules whose grammar begins with a wrapper production.
_START_SYMBOLS = {"group": "group_start"}

_NAME = re.compile(r"\b[A-Za-z_]+\b")


def _literal(context) -> str:
    return context.input_str[context.start_position:context.end_position]


def _extend(node_type):
    def action(context, nodes):
        previous, *rest = nodes
        children = list(previous.children)
        for item in rest:
            children.extend(item)
        return node_type(_literal(context), tuple(children))

    return action


def _start(node_type):
    def action(context, nodes):
        children = []
        for item in nodes:
            children.extend(item)
        return node_type(_literal(context), tuple(children))

    return action


def _flatten(_, nodes):
    flat = []
    for item in nodes:
        if isinstance(item, list):
            flat.extend(item)
        elif isinstance(item, Node):
            flat.append(item)
    return flat


ACTIONS = {
    "equation": lambda context, nodes: Equation(
        _literal(context), (nodes[0], *nodes[1], nodes[2])
    ),
    "arrow": _flatten,
    "reactants": [_start(Reactants), _extend(Reactants)],
    "products": [_start(Products), _extend(Products)],
    "sep": _flatten,
    "ws": _flatten,
    "term": _flatten,
    "formula": [_start(Formula), _extend(Formula)],
    "part": _flatten,
    "group": lambda context, nodes: Group(_literal(context), nodes[1].children),
    "group_start": [
        lambda context, nodes: nodes[0],
        lambda context, nodes: Formula(_literal(context), (nodes[0], nodes[1])),
    ],
    "element": lambda context, nodes: Element(_literal(context)),
    "index": lambda context, nodes: Index(_literal(context)),
    "coefficient": lambda context, nodes: Coefficient(_literal(context)),
    "whitespace": lambda context, nodes: Whitespace(_literal(context)),
    "WS": lambda context, value: Whitespace(value),
}


def grammar_source(rule: str) -> str:
    """Return the grammar text whose start symbol is ``rule``."""
    if rule not in START_RULES:
        raise ValueError(f"Unknown grammar rule: {rule}")

    ordered: list[str] = []
    pending = [_START_SYMBOLS.get(rule, rule)]
    while pending:
        name = pending.pop(0)
        if name in ordered:
            continue
        ordered.append(name)
        for word in _NAME.findall(RULES[name].split(":", 1)[1]):
            if word in RULES and word not in ordered:
                pending.append(word)

    productions = "\n".join(RULES[name] for name in ordered)
    used = [t for t in TERMINALS if re.search(rf"\b{t}\b", productions)]
    terminals = "\n".join(f"{t}: {TERMINALS[t]};" for t in used)
    return f"{productions}\n\nterminals\n{terminals}\n"


_local = threading.local()


def _parser(rule: str) -> Parser:
    # parglare parsers keep state while parsing, so each thread compiles its own.
    parsers = getattr(_local, "parsers", None)
    if parsers is None:
        parsers = _local.parsers = {}
    if rule not in parsers:
        source = grammar_source(rule)
        names = set(_NAME.findall(source))
        actions = {name: action for name, action in ACTIONS.items() if name in names}
        parsers[rule] = Parser(Grammar.from_string(source), ws="", actions=actions)
    return parsers[rule]


def parse(text: str, rule: str = "formula") -> Node:
    """Parse ``text`` with ``rule`` as the start symbol.

    The whole input must match. Raises ``ParsingError`` otherwise. The
    ``group`` rule also accepts a trailing index, in which case a ``Formula``
    holding the group and its index is returned.

    Compiled parsers are cached per thread, so concurrent callers never share
    a parser instance.
    """
    parser = _parser(rule)
    try:
        return parser.parse(text)
    except ParseError as exc:
        raise ParsingError(rule, text) from exc


def children_of(nodes: Sequence[Node], kind: str) -> list[Node]:
    return [node for node in nodes if node.kind == kind]
