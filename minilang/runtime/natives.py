"""Native functions bound in the global scope. Each takes (args, env) and returns a runtime value."""

import time

from minilang.runtime.values import mk_null, mk_number


def native_print(args, env):
    """Prints its arguments separated by spaces."""
    print(*(str(arg) for arg in args))
    return mk_null()


def native_time(args, env):
    """Wall-clock time in milliseconds."""
    return mk_number(time.time() * 1000)


NATIVES = {
    "print": native_print,
    "time": native_time,
}
