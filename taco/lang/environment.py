"""Lexical scopes for the taco language."""

from taco.lang.error import TacoRuntimeError


class Environment:
    """One scope: a mapping from name to Value, plus the scope enclosing it (None for the global scope). Enclosing
    scopes are plain shared references, so any number of inner scopes may hang off one live parent.
    """

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def child(self):
        """Returns a new, empty scope enclosed by this one."""
        return Environment(self)

    def define(self, name, value):
        """Binds name in this scope only, replacing any binding of name already in it."""
        self.values[name] = value

    def resolve(self, name):
        """Returns the innermost scope that defines name, or None."""
        scope = self
        while scope is not None:
            if name in scope.values:
                return scope
            scope = scope.enclosing
        return None

    def assign(self, token, value):
        """Rebinds token's name in the innermost scope that already defines it."""
        scope = self.resolve(token.lexeme)
        if scope is None:
            raise TacoRuntimeError(token, f"Undefined variable '{token.lexeme}'.")
        scope.values[token.lexeme] = value

    def get(self, token):
        """Value bound to token's name in the innermost scope that defines it."""
        scope = self.resolve(token.lexeme)
        if scope is None:
            raise TacoRuntimeError(token, f"Undefined variable '{token.lexeme}'.")
        return scope.values[token.lexeme]

    def __contains__(self, name):
        return self.resolve(name) is not None

    def __repr__(self):
        depth = 0
        scope = self.enclosing
        while scope is not None:
            depth += 1
            scope = scope.enclosing
        return f"Environment(names={sorted(self.values)}, depth={depth})"
