"""Persistent name -> value environments.

An Environment is a chain of one-binding frames. Extending an environment creates a new frame that points at the old
one, so the old environment (and every closure holding it) never sees the new binding, and nothing is copied.
"""


class Environment:
    """Immutable mapping of names to values. Use Environment.empty() and extend; never mutate a frame."""
    __slots__ = ("_name", "_value", "_parent")

    def __init__(self, name=None, value=None, parent=None):
        self._name = name
        self._value = value
        self._parent = parent

    @classmethod
    def empty(cls):
        return cls()

    @property
    def is_empty(self):
        return self._parent is None

    def extend(self, name, value):
        """Returns a new environment in which name is bound to value, shadowing any earlier binding of name."""
        return Environment(name, value, self)

    def lookup(self, name):
        """Returns the innermost value bound to name. Raises KeyError if name is unbound."""
        env = self
        while not env.is_empty:
            if env._name == name:
                return env._value
            env = env._parent
        raise KeyError(name)

    def names(self):
        """Visible names, innermost first, without duplicates."""
        seen = []
        env = self
        while not env.is_empty:
            if env._name not in seen:
                seen.append(env._name)
            env = env._parent
        return seen

    def __repr__(self):
        return f"Environment({', '.join(self.names())})"
