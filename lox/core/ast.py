"""Abstract syntax tree produced by the parser.

Two closed sets of node variants: expressions and statements. Each node is a frozen dataclass, so a tree is immutable
once built; consumers (Interpreter, AstPrinter) dispatch over the variants with a match statement and treat anything
else as an internal error.

```
Expr ::= Literal | Grouping | Unary | Binary | Logical | Variable | Assign | Call
Stmt ::= Expression | Print | Var | Block | If | While | Function | Return
```
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from lox.core.tokens import Token


# expressions

@dataclass(frozen=True)
class Literal:
    value: object


@dataclass(frozen=True)
class Grouping:
    expression: "Expr"


@dataclass(frozen=True)
class Unary:
    operator: Token
    right: "Expr"


@dataclass(frozen=True)
class Binary:
    left: "Expr"
    operator: Token
    right: "Expr"


@dataclass(frozen=True)
class Logical:
    """operator is an AND or OR token."""
    left: "Expr"
    operator: Token
    right: "Expr"


@dataclass(frozen=True)
class Variable:
    name: Token


@dataclass(frozen=True)
class Assign:
    name: Token
    value: "Expr"


@dataclass(frozen=True)
class Call:
    """paren is the closing ')' of the call site, used to locate runtime errors."""
    callee: "Expr"
    paren: Token
    arguments: Tuple["Expr", ...]


Expr = Union[Literal, Grouping, Unary, Binary, Logical, Variable, Assign, Call]


# statements

@dataclass(frozen=True)
class Expression:
    expression: Expr


@dataclass(frozen=True)
class Print:
    expression: Expr


@dataclass(frozen=True)
class Var:
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True)
class Block:
    statements: Tuple["Stmt", ...]


@dataclass(frozen=True)
class If:
    condition: Expr
    then_branch: "Stmt"
    else_branch: Optional["Stmt"]


@dataclass(frozen=True)
class While:
    condition: Expr
    body: "Stmt"


@dataclass(frozen=True)
class Function:
    name: Token
    params: Tuple[Token, ...]
    body: Tuple["Stmt", ...]


@dataclass(frozen=True)
class Return:
    keyword: Token
    value: Optional[Expr]


Stmt = Union[Expression, Print, Var, Block, If, While, Function, Return]
