import unittest

from lox.core.environment import Environment
from lox.core.errors import LoxRuntimeError
from lox.core.tokens import Token, TokenType


def name(lexeme, line=1):
    return Token(TokenType.IDENTIFIER, lexeme, None, line)


class EnvironmentTestCase(unittest.TestCase):

    def test_define_and_get(self):
        env = Environment()
        env.define("a", 1.0)
        self.assertEqual(1.0, env.get(name("a")))

        env.define("a", "again")  # redeclaration overwrites
        self.assertEqual("again", env.get(name("a")))

    def test_get_walks_enclosing_chain(self):
        outer = Environment()
        outer.define("a", 1.0)
        inner = Environment(Environment(outer))
        self.assertEqual(1.0, inner.get(name("a")))

    def test_define_shadows_outer_binding(self):
        outer = Environment()
        outer.define("a", 1.0)
        inner = Environment(outer)
        inner.define("a", 2.0)

        self.assertEqual(2.0, inner.get(name("a")))
        self.assertEqual(1.0, outer.get(name("a")))

    def test_assign_targets_nearest_defining_scope(self):
        outer = Environment()
        outer.define("a", 1.0)
        middle = Environment(outer)
        middle.define("b", 1.0)
        inner = Environment(middle)

        inner.assign(name("a"), 3.0)
        inner.assign(name("b"), 4.0)

        self.assertEqual(3.0, outer.get(name("a")))
        self.assertEqual(4.0, middle.get(name("b")))
        self.assertEqual({}, inner.values)

    def test_undefined_variable(self):
        env = Environment(Environment())
        should_raise = [lambda: env.get(name("x", 7)), lambda: env.assign(name("x", 7), None)]
        for case in should_raise:
            with self.assertRaises(LoxRuntimeError) as context:
                case()
            self.assertEqual("Undefined variable 'x'.", context.exception.message)
            self.assertEqual(7, context.exception.token.line)

    def test_nil_value_is_still_defined(self):
        env = Environment()
        env.define("a", None)
        self.assertIsNone(env.get(name("a")))


if __name__ == '__main__':
    unittest.main()
