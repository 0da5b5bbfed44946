"""Debug printer rendering AST nodes as parenthesized prefix text, e.g. `-123 * (45.67)` becomes
`(* (- 123) (group 45.67))`.
"""

from lox.core import ast
from lox.core.interpreter import stringify


class AstPrinter:

    def print(self, node):
        match node:
            case ast.Literal(value):
                return stringify(value) if not isinstance(value, str) else f"\"{value}\""
            case ast.Grouping(expression):
                return self._parenthesize("group", expression)
            case ast.Unary(operator, right):
                return self._parenthesize(operator.lexeme, right)
            case ast.Binary(left, operator, right) | ast.Logical(left, operator, right):
                return self._parenthesize(operator.lexeme, left, right)
            case ast.Variable(name):
                return name.lexeme
            case ast.Assign(name, value):
                return self._parenthesize("=", name.lexeme, value)
            case ast.Call(callee, _, arguments):
                return self._parenthesize("call", callee, *arguments)

            case ast.Expression(expression):
                return self._parenthesize(";", expression)
            case ast.Print(expression):
                return self._parenthesize("print", expression)
            case ast.Var(name, None):
                return self._parenthesize("var", name.lexeme)
            case ast.Var(name, initializer):
                return self._parenthesize("var", name.lexeme, "=", initializer)
            case ast.Block(statements):
                return self._parenthesize("block", *statements)
            case ast.If(condition, then_branch, None):
                return self._parenthesize("if", condition, then_branch)
            case ast.If(condition, then_branch, else_branch):
                return self._parenthesize("if-else", condition, then_branch, else_branch)
            case ast.While(condition, body):
                return self._parenthesize("while", condition, body)
            case ast.Function(name, params, body):
                signature = f"fun {name.lexeme}({' '.join(param.lexeme for param in params)})"
                return self._parenthesize(signature, *body)
            case ast.Return(_, None):
                return "(return)"
            case ast.Return(_, value):
                return self._parenthesize("return", value)

            case _:
                raise TypeError(f"cannot print {node!r}")

    def _parenthesize(self, name, *parts):
        """parts may mix nodes and plain strings."""
        pieces = [name]
        for part in parts:
            pieces.append(part if isinstance(part, str) else self.print(part))
        return "(" + " ".join(pieces) + ")"
