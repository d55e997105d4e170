"""Abstract syntax tree for minilang. Each node kind is its own dataclass, and the set of kinds is closed: the parser
only ever builds the classes below, and the evaluator dispatches on exactly these classes.

Statements: Program, VarDeclaration, FunctionDeclaration
Expressions: AssignmentExpr, BinaryExpr, MemberExpr, CallExpr, Identifier, NumericLiteral, ObjectLiteral, Property
"""

from dataclasses import dataclass, field, fields
from typing import List, Optional


class Node:
    """Superclass for every AST node."""

    @property
    def kind(self):
        return type(self).__name__

    def display(self, indents=0):
        """Recursively displays the tree rooted at this node in a readable format.

        Format:
        <Node>(<field>=<value>, <field>=
            <Node>(...),
        <field>=[
            <Node>(...),
        ])
        """
        pad = "    " * indents
        parts = []
        for attr in fields(self):
            value = getattr(self, attr.name)
            if isinstance(value, Node):
                parts.append(f"{attr.name}=\n{value.display(indents + 1)}")
            elif isinstance(value, list) and any(isinstance(item, Node) for item in value):
                nested = "".join(f"\n{item.display(indents + 1)}," for item in value)
                parts.append(f"{attr.name}=[{nested[:-1]}\n{pad}]")
            else:
                parts.append(f"{attr.name}={value!r}")
        return f"{pad}{self.kind}(" + ", ".join(parts) + ")"

    def __str__(self):
        return self.display()


class Stmt(Node):
    pass


class Expr(Stmt):
    pass


@dataclass
class Program(Stmt):
    body: List[Stmt] = field(default_factory=list)


@dataclass
class VarDeclaration(Stmt):
    identifier: str
    constant: bool
    value: Optional[Expr] = None  # None for `let x;`


@dataclass
class FunctionDeclaration(Stmt):
    """Never produced by the parser; can be built by hosts that construct trees directly."""
    name: str
    parameters: List[str]
    body: List[Stmt]


@dataclass
class AssignmentExpr(Expr):
    # any expression parses here (e.g. `x.foo = 1`), but only Identifiers can be assigned to at runtime
    assigne: Expr
    value: Expr


@dataclass
class BinaryExpr(Expr):
    left: Expr
    right: Expr
    operator: str


@dataclass
class MemberExpr(Expr):
    object: Expr
    property: Expr
    computed: bool  # True for obj[expr], False for obj.name


@dataclass
class CallExpr(Expr):
    caller: Expr
    args: List[Expr]


@dataclass
class Identifier(Expr):
    symbol: str


@dataclass
class NumericLiteral(Expr):
    value: float


@dataclass
class Property(Expr):
    key: str
    value: Optional[Expr] = None  # None means shorthand: `{ key }` is `{ key: key }`


@dataclass
class ObjectLiteral(Expr):
    properties: List[Property] = field(default_factory=list)
