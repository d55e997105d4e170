import io
import math
import unittest
from contextlib import redirect_stdout

from minilang.frontend.ast import (AssignmentExpr, BinaryExpr, FunctionDeclaration, Identifier, MemberExpr,
                                   NumericLiteral, Property)
from minilang.frontend.parser import Parser
from minilang.lang.error import EvaluationError, ResolutionError
from minilang.runtime.environment import Environment, create_global_env
from minilang.runtime.evaluator import evaluate
from minilang.runtime.values import (BooleanValue, FunctionValue, NullValue, NumberValue, ObjectValue, mk_native_fn,
                                     mk_null, mk_number)


def run(source, env=None):
    if env is None:
        env = create_global_env()
    return evaluate(Parser().produce_ast(source), env)


class ArithmeticTestCase(unittest.TestCase):

    def test_numbers(self):
        cases = {
            "1+2*3": 7,
            "(1+2)*3": 9,
            "10-4-3": 3,
            "2*3%4": 2,
            "7%3": 1,
            "8/2/2": 2,
            "1/4": 0.25,
            "(0-7)%3": -1,
            "7%(0-3)": 1,
            "12": 12,
        }
        for case, expected in cases.items():
            self.assertEqual(NumberValue(expected), run(case), case)

    def test_division_by_zero(self):
        self.assertEqual(math.inf, run("1/0").value)
        self.assertEqual(-math.inf, run("(0-1)/0").value)

        should_be_nan = ["0/0", "5%0", "0%0", "(1/0)%2"]
        for case in should_be_nan:
            self.assertTrue(math.isnan(run(case).value), case)

    def test_left_to_right(self):
        env = create_global_env()
        calls = []

        def record(args, env):
            calls.append(args[0].value)
            return args[0]

        env.declare_var("record", mk_native_fn("record", record), True)

        self.assertEqual(NumberValue(-1), run("record(1) - record(2)", env))
        self.assertEqual([1, 2], calls)

        calls.clear()
        run("record(record(3) * record(4) + record(5))", env)
        self.assertEqual([3, 4, 5, 17], calls)

    def test_non_numbers(self):
        cases = [
            "true + 1",
            "1 - null",
            "let o = {}; o * 2",
            "let o = {}; o + o",
            "print + print",
        ]
        for case in cases:
            self.assertEqual(NullValue(), run(case), case)

    def test_non_numbers_still_evaluated(self):
        env = create_global_env()
        self.assertEqual(NullValue(), run("let x = 1; (x = 5) + true", env))
        self.assertEqual(NumberValue(5), env.lookup_var("x"))


class DeclarationTestCase(unittest.TestCase):

    def test_let(self):
        env = create_global_env()
        self.assertEqual(NumberValue(5), run("let x = 5;", env))
        self.assertEqual(NumberValue(5), run("x", env))

        self.assertEqual(NullValue(), run("let y;", env))
        self.assertEqual(NumberValue(6), run("y = x + 1; y", env))

    def test_const(self):
        self.assertRaises(ResolutionError, run, "const x = 1; x = 2;")

        env = create_global_env()
        run("const x = 1;", env)
        self.assertRaises(ResolutionError, run, "x = 2;", env)
        self.assertEqual(NumberValue(1), run("x", env))

    def test_redeclare(self):
        should_raise = ["let x = 1; let x = 2;", "let x; const x = 1;", "let true = 1;", "let print;"]
        for case in should_raise:
            self.assertRaises(ResolutionError, run, case)

    def test_program(self):
        self.assertEqual(NullValue(), run(""))
        self.assertEqual(NumberValue(3), run("let a = 1; let b = 2; a + b"))
        self.assertEqual(BooleanValue(False), run("false"))


class AssignmentTestCase(unittest.TestCase):

    def test_assign(self):
        env = create_global_env()
        self.assertEqual(NumberValue(3), run("let a = 1; let b = 2; a = b = 3", env))
        self.assertEqual(NumberValue(3), env.lookup_var("a"))
        self.assertEqual(NumberValue(3), env.lookup_var("b"))

    def test_unknown(self):
        self.assertRaises(ResolutionError, run, "x = 1")

    def test_invalid_target(self):
        should_raise = ["let o = { a: 1 }; o.a = 2", "let o = {}; o[1] = 2", "1 = 2"]
        for case in should_raise:
            self.assertRaises(EvaluationError, run, case)

    def test_value_evaluated_first(self):
        env = create_global_env()
        self.assertRaises(EvaluationError, run, "let y = 0; let o = {}; o.a = y = 7", env)
        self.assertEqual(NumberValue(7), env.lookup_var("y"))


class ObjectTestCase(unittest.TestCase):

    def test_literal(self):
        env = create_global_env()
        env.declare_var("b", mk_number(2), False)

        result = run("{ a: 1, b }", env)
        self.assertEqual(ObjectValue({"a": NumberValue(1), "b": NumberValue(2)}), result)
        self.assertEqual(["a", "b"], list(result.properties))

    def test_nested(self):
        result = run("let x = 3; { outer: { x, y: x * 2 }, z: {} }")
        expected = ObjectValue({
            "outer": ObjectValue({"x": NumberValue(3), "y": NumberValue(6)}),
            "z": ObjectValue({}),
        })
        self.assertEqual(expected, result)

    def test_shorthand_is_lookup(self):
        env = create_global_env()
        self.assertEqual(ObjectValue({"b": NumberValue(2)}), run("let b = 1; b = 2; { b }", env))
        self.assertRaises(ResolutionError, run, "{ missing }")

    def test_member_unsupported(self):
        should_raise = ["let o = { a: 1 }; o.a", "let o = { a: 1 }; o[0]"]
        for case in should_raise:
            self.assertRaises(EvaluationError, run, case)

        member = MemberExpr(Identifier("o"), Identifier("a"), computed=False)
        self.assertRaises(EvaluationError, evaluate, member, Environment())
        self.assertRaises(EvaluationError, evaluate, Property("a"), Environment())


class CallTestCase(unittest.TestCase):

    def setUp(self):
        self.env = create_global_env()
        add = FunctionDeclaration("add", ["a", "b"], [BinaryExpr(Identifier("a"), Identifier("b"), "+")])
        self.assertIsInstance(evaluate(add, self.env), FunctionValue)

    def test_user_function(self):
        cases = {
            "add(1, 2)": NumberValue(3),
            "add(1, 2, 3)": NumberValue(3),  # extra args ignored
            "add(1)": NullValue(),           # missing args are null
            "add(add(1, 2), 4)": NumberValue(7),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, run(case, self.env), case)

    def test_function_is_constant(self):
        self.assertRaises(ResolutionError, run, "add = 1", self.env)

    def test_parameters_shadow(self):
        run("let a = 100;", self.env)
        self.assertEqual(NumberValue(3), run("add(1, 2)", self.env))
        self.assertEqual(NumberValue(100), self.env.lookup_var("a"))

    def test_closure_writes_declaring_scope(self):
        run("let count = 0;", self.env)
        bump = FunctionDeclaration("bump", [], [
            AssignmentExpr(Identifier("count"), BinaryExpr(Identifier("count"), NumericLiteral(1), "+")),
        ])
        evaluate(bump, self.env)

        run("bump(); bump();", self.env)
        self.assertEqual(NumberValue(2), self.env.lookup_var("count"))

    def test_captured_scope(self):
        # the function sees the scope it was declared in, not the caller's
        inner = Environment(self.env)
        inner.declare_var("secret", mk_number(42), False)
        evaluate(FunctionDeclaration("reveal", [], [Identifier("secret")]), inner)

        self.env.declare_var("reveal", inner.lookup_var("reveal"), False)
        self.assertEqual(NumberValue(42), run("reveal()", self.env))
        self.assertRaises(ResolutionError, run, "secret", self.env)

    def test_body_last_statement(self):
        evaluate(FunctionDeclaration("noop", [], []), self.env)
        self.assertEqual(NullValue(), run("noop()", self.env))

        body = Parser().produce_ast("let local = x * 2; local + 1").body
        evaluate(FunctionDeclaration("twice", ["x"], body), self.env)
        self.assertEqual(NumberValue(11), run("twice(5)", self.env))
        self.assertNotIn("local", self.env)
        self.assertEqual(NumberValue(7), run("twice(3)", self.env))  # fresh scope each call

    def test_native(self):
        received = []

        def adder(args, env):
            received.append(env)
            return mk_native_fn("inner", lambda more, __: mk_number(args[0].value + more[0].value))

        self.env.declare_var("adder", mk_native_fn("adder", adder), True)
        self.assertEqual(NumberValue(3), run("adder(1)(2)", self.env))
        self.assertIs(self.env, received[0])

    def test_print(self):
        with redirect_stdout(io.StringIO()) as out:
            result = run("let x = 1; print(x, { a: 2 }, 1/4, null)", self.env)
        self.assertEqual(mk_null(), result)
        self.assertEqual("1 { a: 2 } 0.25 null\n", out.getvalue())

    def test_time(self):
        self.assertGreater(run("time()").value, 0)

    def test_errors(self):
        self.assertRaises(ResolutionError, run, "foo()")
        self.assertRaises(ResolutionError, run, "add(1, missing)", self.env)

        should_raise = ["let x = 1; x()", "true()", "null()", "let o = {}; o(1)", "add(1, 2)()"]
        for case in should_raise:
            self.assertRaises(EvaluationError, run, case, self.env)


class ValueDisplayTestCase(unittest.TestCase):

    def test_str(self):
        cases = {
            "5": "5",
            "1/4": "0.25",
            "1/0": "Infinity",
            "(0-1)/0": "-Infinity",
            "0/0": "NaN",
            "true": "true",
            "null": "null",
            "{}": "{}",
            "{ a: 1, b: { c: 2 } }": "{ a: 1, b: { c: 2 } }",
            "print": "<native fn print>",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(run(case)), case)


if __name__ == '__main__':
    unittest.main()
