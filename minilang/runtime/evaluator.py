"""Tree-walking evaluator for minilang. evaluate(node, env) dispatches on the node's class; node kinds without an entry in
EVALUATORS (currently MemberExpr) raise an EvaluationError.

Evaluation is depth-first and recursive, so deeply nested expressions or deeply recursive functions are bounded by
Python's recursion limit (reported as a RecursionError by ErrorHandler).
"""

import math

from minilang.frontend.ast import (AssignmentExpr, BinaryExpr, CallExpr, FunctionDeclaration, Identifier,
                                   NumericLiteral, ObjectLiteral, Program, VarDeclaration)
from minilang.lang.error import EvaluationError
from minilang.runtime.environment import Environment
from minilang.runtime.values import (FunctionValue, NativeFnValue, NumberValue, ObjectValue, mk_null,
                                     mk_number)


def evaluate(node, env):
    """Evaluates node against env and returns the resulting runtime value."""
    try:
        evaluator = EVALUATORS[type(node)]
    except KeyError:
        msg = "AST node '{}' has not yet been set up for interpretation"
        raise EvaluationError(msg, type(node).__name__) from None
    return evaluator(node, env)


# statements

def eval_program(program, env):
    last_evaluated = mk_null()
    for stmt in program.body:
        last_evaluated = evaluate(stmt, env)
    return last_evaluated


def eval_var_declaration(declaration, env):
    value = mk_null() if declaration.value is None else evaluate(declaration.value, env)
    return env.declare_var(declaration.identifier, value, declaration.constant)


def eval_function_declaration(declaration, env):
    fn = FunctionValue(declaration.name, list(declaration.parameters), env, declaration.body)
    return env.declare_var(declaration.name, fn, constant=True)


# expressions

def eval_numeric_literal(literal, env):
    return mk_number(literal.value)


def eval_identifier(ident, env):
    return env.lookup_var(ident.symbol)


def eval_object_expr(obj, env):
    properties = {}
    for prop in obj.properties:
        # shorthand { key } looks up key in the current scope
        properties[prop.key] = env.lookup_var(prop.key) if prop.value is None else evaluate(prop.value, env)
    return ObjectValue(properties)


def divide(lhs, rhs):
    """IEEE division: dividing by zero gives +/-inf, or nan for 0 / 0."""
    try:
        return lhs / rhs
    except ZeroDivisionError:
        if lhs == 0 or math.isnan(lhs):
            return math.nan
        return math.copysign(math.inf, lhs) * math.copysign(1.0, rhs)


def remainder(lhs, rhs):
    """Truncated remainder (sign follows lhs). x % 0 and inf % y are nan."""
    try:
        return math.fmod(lhs, rhs)
    except ValueError:
        return math.nan


OPERATORS = {
    "+": lambda lhs, rhs: lhs + rhs,
    "-": lambda lhs, rhs: lhs - rhs,
    "*": lambda lhs, rhs: lhs * rhs,
    "/": divide,
    "%": remainder,
}


def eval_numeric_binary_expr(lhs, rhs, operator):
    try:
        operation = OPERATORS[operator]
    except KeyError:
        raise EvaluationError("invalid operator '{}'", operator) from None
    return mk_number(operation(lhs.value, rhs.value))


def eval_binary_expr(binop, env):
    lhs = evaluate(binop.left, env)
    rhs = evaluate(binop.right, env)

    if isinstance(lhs, NumberValue) and isinstance(rhs, NumberValue):
        return eval_numeric_binary_expr(lhs, rhs, binop.operator)
    return mk_null()


def eval_assignment(node, env):
    value = evaluate(node.value, env)

    if not isinstance(node.assigne, Identifier):
        raise EvaluationError("invalid left hand side '{}' inside assignment expression", node.assigne.kind)
    return env.assign_var(node.assigne.symbol, value)


def eval_call_expr(call, env):
    fn = evaluate(call.caller, env)
    args = [evaluate(arg, env) for arg in call.args]

    if isinstance(fn, NativeFnValue):
        return fn.call(args, env)

    elif isinstance(fn, FunctionValue):
        scope = Environment(fn.declaration_env)

        # no arity check: missing args are null, extra args are ignored
        for idx, param in enumerate(fn.parameters):
            scope.declare_var(param, args[idx] if idx < len(args) else mk_null())

        result = mk_null()
        for stmt in fn.body:
            result = evaluate(stmt, scope)
        return result

    raise EvaluationError("cannot call value '{}' that is not a function", str(fn))


EVALUATORS = {
    Program: eval_program,
    VarDeclaration: eval_var_declaration,
    FunctionDeclaration: eval_function_declaration,
    NumericLiteral: eval_numeric_literal,
    Identifier: eval_identifier,
    ObjectLiteral: eval_object_expr,
    BinaryExpr: eval_binary_expr,
    AssignmentExpr: eval_assignment,
    CallExpr: eval_call_expr,
}
