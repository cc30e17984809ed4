"""Lexical scopes. An Environment maps names to Objects and optionally links to the Environment enclosing it. Lookups
that miss locally walk outward through the chain, never inward.

Environments are shared, not copied: a Function keeps a reference to the Environment it was defined in, so bindings
added to that Environment later on are visible to it.
"""

from monkey.lang.error import IdentifierNotFound


class Environment:

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    def enclosed(self):
        """Returns a new, empty Environment whose outer scope is self."""
        return Environment(self)

    def lookup(self, name):
        """Returns the value bound to name in the nearest enclosing scope. Raises IdentifierNotFound on a miss."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        raise IdentifierNotFound(name)

    def set(self, name, value):
        """Binds name in this scope only, shadowing any outer binding."""
        self.store[name] = value
        return value

    def __contains__(self, name):
        try:
            self.lookup(name)
        except IdentifierNotFound:
            return False
        return True

    def __repr__(self):
        content = ", ".join(self.store)
        return f"[{content}]" + (f" < {self.outer!r}" if self.outer is not None else "")
