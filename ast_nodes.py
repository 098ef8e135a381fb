class ASTNode:
    # Token the node was built from; used for line/column in diagnostics.
    token = None

    @property
    def line(self):
        return self.token.line if self.token is not None else None

    @property
    def column(self):
        return self.token.column if self.token is not None else None

    def to_source(self):
        """Re-parsable source text for this node."""
        raise NotImplementedError(self.__class__.__name__)


class Program(ASTNode):
    def __init__(self, statements):
        self.statements = statements

    def __str__(self):
        return "".join(f"{stmt}\n" for stmt in self.statements)

    def to_source(self):
        return "".join(f"{stmt.to_source()};\n" for stmt in self.statements)


# ---------- STATEMENTS ----------
class Print(ASTNode):
    def __init__(self, token, expr):
        self.token = token  # suna
        self.expr = expr

    def __str__(self):
        return f"suna {self.expr}"

    def to_source(self):
        return f"suna {self.expr.to_source()}"


class Assign(ASTNode):
    def __init__(self, token, name, value):
        self.token = token  # sun
        self.name = name    # variable name
        self.value = value  # expression

    def __str__(self):
        return f"sun {self.name} = {self.value}"

    def to_source(self):
        return f"sun {self.name} = {self.value.to_source()}"


class Block(ASTNode):
    def __init__(self, token, statements):
        self.token = token  # {
        self.statements = statements

    def __str__(self):
        return "{ ... }"

    def to_source(self):
        if not self.statements:
            return "{ }"
        body = " ".join(f"{stmt.to_source()};" for stmt in self.statements)
        return f"{{ {body} }}"


class If(ASTNode):
    def __init__(self, token, condition, then_block, else_block=None):
        self.token = token  # agar
        self.condition = condition
        self.then_block = then_block
        self.else_block = else_block  # Block | None

    def __str__(self):
        if self.else_block is not None:
            return f"agar {self.condition} {{ ... }} magar {{ ... }}"
        return f"agar {self.condition} {{ ... }}"

    def to_source(self):
        src = f"agar {self.condition.to_source()} {self.then_block.to_source()}"
        if self.else_block is not None:
            src += f" magar {self.else_block.to_source()}"
        return src


# ---------- EXPRESSIONS ----------
class Var(ASTNode):
    def __init__(self, token, name):
        self.token = token
        self.name = name

    def __str__(self):
        return self.name

    def to_source(self):
        return self.name


class IntLiteral(ASTNode):
    def __init__(self, token, value: int):
        self.token = token
        self.value = value

    def __str__(self):
        return str(self.value)

    def to_source(self):
        return str(self.value)


class StringLiteral(ASTNode):
    def __init__(self, token, value: str):
        self.token = token
        self.value = value

    def __str__(self):
        return f'"{self.value}"'

    def to_source(self):
        return f'"{self.value}"'


class Binary(ASTNode):
    def __init__(self, token, left, op, right):
        self.token = token  # operator token
        self.left = left
        self.op = op
        self.right = right

    def left_spine(self):
        # operator chains nest to the left; innermost operand first
        spine = []
        node = self
        while isinstance(node, Binary):
            spine.append(node)
            node = node.left
        spine.reverse()
        return node, spine

    def __str__(self):
        first, spine = self.left_spine()
        text = str(first)
        for node in spine:
            text = f"({text} {node.op} {node.right})"
        return text

    def to_source(self):
        # The parser only builds trees from flat token runs, so the flat
        # rendering parses back to the same shape.
        first, spine = self.left_spine()
        text = first.to_source()
        for node in spine:
            text = f"{text} {node.op} {node.right.to_source()}"
        return text
