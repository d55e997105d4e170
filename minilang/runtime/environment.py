"""Lexical scopes for minilang. An Environment maps names to runtime values and links to the scope it was created in;
lookups walk outward through parents, declarations only ever touch the current scope.
"""

from minilang.lang.error import ResolutionError
from minilang.runtime.natives import NATIVES
from minilang.runtime.values import mk_bool, mk_native_fn, mk_null


class Environment:
    """A single scope in a parent-linked chain. Names are unique within a scope but may shadow names in parents."""

    def __init__(self, parent=None):
        self.parent = parent
        self.variables = {}
        self.constants = set()

    def declare_var(self, varname, value, constant=False):
        """Binds varname to value in this scope. Raises ResolutionError if this scope already declares varname."""
        if varname in self.variables:
            raise ResolutionError("cannot declare variable '{}' as it is already defined", varname)

        self.variables[varname] = value
        if constant:
            self.constants.add(varname)

        return value

    def resolve(self, varname):
        """Returns the nearest scope (self or an ancestor) that declares varname."""
        env = self
        while env is not None:
            if varname in env.variables:
                return env
            env = env.parent

        raise ResolutionError("cannot resolve '{}' as it does not exist", varname)

    def assign_var(self, varname, value):
        """Overwrites varname in the scope that declared it. Never creates a new binding."""
        env = self.resolve(varname)

        if varname in env.constants:
            raise ResolutionError("cannot reassign to variable '{}' as it was declared constant", varname)

        env.variables[varname] = value
        return value

    def lookup_var(self, varname):
        return self.resolve(varname).variables[varname]

    def is_constant(self, varname):
        return varname in self.resolve(varname).constants

    def __contains__(self, varname):
        try:
            self.resolve(varname)
        except ResolutionError:
            return False
        return True


def create_global_env():
    """Returns a root Environment seeded with the constant builtins and native functions."""
    env = Environment()

    env.declare_var("true", mk_bool(True), constant=True)
    env.declare_var("false", mk_bool(False), constant=True)
    env.declare_var("null", mk_null(), constant=True)

    for name, call in NATIVES.items():
        env.declare_var(name, mk_native_fn(name, call), constant=True)

    return env
