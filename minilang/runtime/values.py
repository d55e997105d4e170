"""Runtime values produced by evaluating minilang ASTs. Each value kind is a dataclass with a `type` tag."""

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List

if TYPE_CHECKING:
    from minilang.runtime.environment import Environment


class RuntimeVal:
    type = None


@dataclass
class NullValue(RuntimeVal):
    type = "null"
    value: None = None

    def __str__(self):
        return "null"


@dataclass
class BooleanValue(RuntimeVal):
    type = "boolean"
    value: bool = True

    def __str__(self):
        return "true" if self.value else "false"


@dataclass
class NumberValue(RuntimeVal):
    type = "number"
    value: float = 0.0

    def __str__(self):
        return format_number(self.value)


@dataclass
class ObjectValue(RuntimeVal):
    type = "object"
    properties: Dict[str, RuntimeVal] = field(default_factory=dict)

    def __str__(self):
        if not self.properties:
            return "{}"
        return "{ " + ", ".join(f"{key}: {value}" for key, value in self.properties.items()) + " }"


@dataclass(eq=False)
class NativeFnValue(RuntimeVal):
    """Host callable: call(args, env) -> RuntimeVal."""
    type = "native-fn"
    name: str
    call: Callable

    def __str__(self):
        return f"<native fn {self.name}>"


@dataclass(eq=False)
class FunctionValue(RuntimeVal):
    """User function. declaration_env is shared with the scope the function was declared in, not copied."""
    type = "function"
    name: str
    parameters: List[str]
    declaration_env: "Environment"
    body: list

    def __str__(self):
        return f"<fn {self.name}>"

    def __repr__(self):
        return f"FunctionValue(name={self.name!r}, parameters={self.parameters!r})"


def format_number(num):
    """Formats num like the language prints it: integral values without a trailing '.0'."""
    if math.isnan(num):
        return "NaN"
    elif math.isinf(num):
        return "Infinity" if num > 0 else "-Infinity"
    elif num.is_integer() and abs(num) < 1e21:
        return str(int(num))
    return repr(num)


def mk_null():
    return NullValue()


def mk_bool(value=True):
    return BooleanValue(value)


def mk_number(value=0):
    return NumberValue(float(value))


def mk_native_fn(name, call):
    return NativeFnValue(name, call)
