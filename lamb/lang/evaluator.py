"""Evaluation of lamb syntax trees.

Evaluation passes an immutable Environment down the tree:

- a program's value is the value of its last expr
- in an exprList, a define binds its name for the exprs after it (never for itself or anything before it)
- let binds its name for its body only, with the bound value evaluated outside the binding
- lambda captures the environment it is evaluated in, not the one it is called in
- names resolve to built-ins first, then to the environment
- an invocation evaluates every expr in it, then applies the first value to the rest

Closures take exactly one argument: extra operands are evaluated and dropped (with a warning if an ErrorHandler is
given). A closure invoked without any operand is not applied: the invocation evaluates to the closure itself, so
`((lambda (n) n) 3)` applies the inner closure to 3.
"""

from lamb.lang.builtin import BUILTINS
from lamb.lang.environment import Environment
from lamb.lang.error import InvalidOperatorError, UnboundNameError
from lamb.lang.value import Builtin, Closure
from lamb.pure.lexical import TokenKind
from lamb.pure.syntax import Atom, Define, Expr, ExprList, Invocation, Lambda, Let, Number, Program


def evaluate(program: Program, env=None, error_handler=None):
    """Returns the value of program, evaluated in env (empty by default)."""
    values, __ = run(program, env, error_handler)
    return values[-1]


def run(program: Program, env=None, error_handler=None):
    """Evaluates program and returns (values of its top-level exprs, env extended with its top-level defines)."""
    if env is None:
        env = Environment.empty()
    return Evaluator(error_handler).expr_list(program.exprs, env)


class Evaluator:
    """Walks a syntax tree. Holds nothing but the optional ErrorHandler used for warnings."""

    def __init__(self, error_handler=None):
        self.error_handler = error_handler
        self._forms = {
            Atom: self.atom,
            Invocation: self.invocation,
            Let: self.let,
            Define: self.define,
            Lambda: self.lambda_,
        }

    def expr_list(self, exprs: ExprList, env):
        """Returns (values of exprs in order, env extended with the defines among them)."""
        values = []
        for expr in exprs:
            values.append(self.expr(expr, env))
            if isinstance(expr.form, Define):
                env = env.extend(expr.form.name.literal, values[-1])
        return values, env

    def expr(self, expr: Expr, env):
        return self._forms[type(expr.form)](expr.form, env)

    def let(self, let: Let, env):
        value = self.expr(let.value, env)
        return self.expr(let.body, env.extend(let.name.literal, value))

    def define(self, define: Define, env):
        """The binding itself is made by the enclosing exprList."""
        return self.expr(define.value, env)

    def lambda_(self, lambda_: Lambda, env):
        return Closure(lambda_.parameter.literal, lambda_.body, env)

    def atom(self, atom: Atom, env):
        if isinstance(atom.value, Number):
            return atom.value.token.literal
        elif atom.value.kind is TokenKind.STRING:
            return atom.value.literal

        name = atom.value.literal
        if name in BUILTINS:
            return BUILTINS[name]
        try:
            return env.lookup(name)
        except KeyError:
            raise UnboundNameError(name) from None

    def invocation(self, invocation: Invocation, env):
        rator, *rands = self.expr_list(invocation.exprs, env)[0]

        if isinstance(rator, Closure):
            return self.apply_closure(rator, rands, invocation)
        elif isinstance(rator, Builtin):
            return rator.apply(rands)
        raise InvalidOperatorError(rator)

    def apply_closure(self, closure: Closure, rands, invocation):
        if not rands:
            return closure
        elif len(rands) > 1 and self.error_handler is not None:
            self.error_handler.warn("'{}' ignores {} extra operand(s)", (invocation.text, str(len(rands) - 1)))

        return self.expr(closure.body, closure.environment.extend(closure.parameter, rands[0]))
