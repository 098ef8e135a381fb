import operator

from ast_nodes import Print, Assign, If, Block, Var, IntLiteral, StringLiteral, Binary
from errors import NppRuntimeError

COMPARISONS = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}


def wrap_int64(value: int) -> int:
    # two's complement wrap-around, like fixed-width machine integers
    return (value + 2**63) % 2**64 - 2**63


def trunc_div(a: int, b: int) -> int:
    # integer division rounding toward zero (Python's // floors)
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def is_truthy(value) -> bool:
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return len(value) > 0
    return False


def render(value) -> str:
    return str(value)


class Interpreter:
    """Tree-walking evaluator.

    Values are plain Python ``int`` (64-bit range) and ``str``. Variables live
    in one flat ``env`` dict owned by the instance. A failing statement is
    reported on ``out`` and execution continues with the next one.
    """

    def __init__(self, out=None, trace: bool = False):
        self.env = {}
        self.out = out
        self.trace = trace
        self.errors = []

    def report(self, err):
        self.errors.append(err)
        print(err.format(), file=self.out)

    def interpret(self, program):
        if program is None:
            return
        for stmt in program.statements:
            self.execute(stmt)

    def execute(self, stmt):
        if stmt is None:
            return
        try:
            if self.trace:
                print(f"TRACE line={stmt.line} col={stmt.column} {stmt}", file=self.out)
            self.exec_stmt(stmt)
        except NppRuntimeError as e:
            self.report(e)
        except RecursionError:
            self.report(NppRuntimeError.at(stmt.token, "Expression nested too deeply"))

    def execute_block(self, block):
        for stmt in block.statements:
            self.execute(stmt)

    def require(self, node, stmt, what):
        if node is None:
            raise NppRuntimeError.at(stmt.token, f"Invalid {what}")

    # ---------- STATEMENTS ----------
    def exec_stmt(self, stmt):
        if isinstance(stmt, Print):
            self.require(stmt.expr, stmt, "print statement")
            value = self.evaluate(stmt.expr)
            print(render(value), file=self.out)
            return

        if isinstance(stmt, Assign):
            self.require(stmt.value, stmt, "assignment statement")
            # a failed evaluation leaves the previous binding untouched
            self.env[stmt.name] = self.evaluate(stmt.value)
            return

        if isinstance(stmt, If):
            self.require(stmt.condition, stmt, "if statement")
            self.require(stmt.then_block, stmt, "if block")
            condition = self.evaluate(stmt.condition)
            if is_truthy(condition):
                self.execute_block(stmt.then_block)
            elif stmt.else_block is not None:
                self.execute_block(stmt.else_block)
            return

        if isinstance(stmt, Block):
            self.execute_block(stmt)
            return

        raise TypeError(f"Unknown statement node: {stmt.__class__.__name__}")

    # ---------- EXPRESSIONS ----------
    def evaluate(self, expr):
        if isinstance(expr, (IntLiteral, StringLiteral)):
            return expr.value

        if isinstance(expr, Var):
            if expr.name not in self.env:
                raise NppRuntimeError.at(expr.token, f"Undefined variable {expr.name}")
            return self.env[expr.name]

        if isinstance(expr, Binary):
            # iterate down the left spine so long chains do not recurse
            first, spine = expr.left_spine()
            for binary in spine:
                if binary.left is None or binary.right is None:
                    raise NppRuntimeError.at(binary.token, "Invalid binary expression")

            # left first; a failure there stops before the right side runs
            value = self.evaluate(first)
            for binary in spine:
                right = self.evaluate(binary.right)
                value = self.binary_op(binary.token, value, binary.op, right)
            return value

        raise TypeError(f"Unknown expression node: {expr.__class__.__name__}")

    def binary_op(self, token, left, op, right):
        if isinstance(left, int) and isinstance(right, int):
            if op == "+":
                return wrap_int64(left + right)
            if op == "-":
                return wrap_int64(left - right)
            if op == "*":
                return wrap_int64(left * right)
            if op == "/":
                if right == 0:
                    raise NppRuntimeError.at(token, "Division by zero")
                return wrap_int64(trunc_div(left, right))
            if op == "%":
                if right == 0:
                    raise NppRuntimeError.at(token, "Modulo by zero")
                return wrap_int64(left - right * trunc_div(left, right))
            if op in COMPARISONS:
                # booleans are the integers 1 and 0
                return 1 if COMPARISONS[op](left, right) else 0

        if isinstance(left, str) and isinstance(right, str) and op == "+":
            return left + right

        raise NppRuntimeError.at(
            token, f"Invalid operation {op} between {render(left)} and {render(right)}"
        )
