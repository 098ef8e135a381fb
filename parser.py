from ast_nodes import Program, Print, Assign, If, Block, Var, IntLiteral, StringLiteral, Binary
from errors import NppError, NppLexicalError, NppSyntaxError
from lexer import RESERVED

# Precedence levels for binary operators
LOWEST = 1
EQUALS = 2       # == !=
LESSGREATER = 3  # < > <= >=
SUM = 4          # + -
PRODUCT = 5      # * / %

PRECEDENCES = {
    "EQEQ": EQUALS,
    "NOTEQ": EQUALS,
    "LT": LESSGREATER,
    "GT": LESSGREATER,
    "LTE": LESSGREATER,
    "GTE": LESSGREATER,
    "PLUS": SUM,
    "MINUS": SUM,
    "STAR": PRODUCT,
    "SLASH": PRODUCT,
    "PERCENT": PRODUCT,
}

INT64_MAX = 2**63 - 1
INT64_DIGITS = len(str(INT64_MAX + 1))

# Deeper nesting would exhaust the Python stack while parsing or running.
MAX_BLOCK_DEPTH = 100


class Parser:
    """Recursive-descent parser over a Lexer.

    Parsing is best-effort: a malformed statement is reported on ``out`` and
    recorded in ``errors``, the offending token is skipped and parsing goes
    on with the next statement.
    """

    def __init__(self, lexer, out=None, debug=False):
        self.lexer = lexer
        self.out = out
        self.debug = debug
        self.errors = []
        self.block_depth = 0
        self.current_token = self.lexer.next_token()
        self.next_token = self.lexer.next_token()

    def advance(self):
        self.current_token = self.next_token
        self.next_token = self.lexer.next_token()

    def at_end(self):
        return self.current_token.type == "EOF"

    def skip_semicolons(self):
        while self.current_token.type == "SEMICOLON":
            self.advance()

    def unexpected(self, message):
        tok = self.current_token
        if tok.type == "ILLEGAL":
            return NppLexicalError.at(tok, f"Illegal character '{tok.value}'")
        if tok.type in RESERVED:
            return NppSyntaxError.at(tok, f"Reserved keyword '{tok.value}' is not supported")
        return NppSyntaxError.at(tok, message)

    def report(self, err):
        self.errors.append(err)
        print(err.format(), file=self.out)

    # ---------- TOP LEVEL ----------
    def parse_program(self):
        statements = []
        self.skip_semicolons()

        while not self.at_end():
            if self.debug:
                tok = self.current_token
                print(f"Debug: Parsing statement at {tok!r} (line {tok.line}, col {tok.column})", file=self.out)
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            else:
                self.advance()
            self.skip_semicolons()

        return Program(statements)

    def parse_statement(self):
        # None means the statement was malformed and has been reported
        try:
            return self.statement()
        except NppError as e:
            self.report(e)
            return None

    def parse_expression(self):
        try:
            return self.expr()
        except NppError as e:
            self.report(e)
            return None

    # ---------- STATEMENTS ----------
    def statement(self):
        tok_type = self.current_token.type

        if tok_type == "SUN":
            return self.assignment_statement()
        if tok_type == "SUNA":
            return self.print_statement()
        if tok_type == "AGAR":
            return self.if_statement()

        raise self.unexpected(f"Invalid statement, got {tok_type}")

    # sun IDENT = expr
    def assignment_statement(self):
        tok = self.current_token
        self.advance()

        if self.current_token.type != "IDENT":
            raise self.unexpected(f"Expected identifier after sun, got {self.current_token.type}")
        name = self.current_token.value
        self.advance()

        if self.current_token.type != "ASSIGN":
            raise self.unexpected(f"Expected = after identifier, got {self.current_token.type}")
        self.advance()

        return Assign(tok, name, self.expr())

    # suna expr
    def print_statement(self):
        tok = self.current_token
        self.advance()
        return Print(tok, self.expr())

    # agar expr block (magar block)?
    def if_statement(self):
        tok = self.current_token
        self.advance()
        condition = self.expr()
        then_block = self.block("condition")

        self.skip_semicolons()

        else_block = None
        if self.current_token.type == "MAGAR":
            self.advance()
            else_block = self.block("magar")

        return If(tok, condition, then_block, else_block)

    def block(self, after):
        tok = self.current_token
        if tok.type != "LBRACE":
            raise self.unexpected(f"Expected {{ after {after}, got {tok.type}")
        if self.block_depth >= MAX_BLOCK_DEPTH:
            raise NppSyntaxError.at(tok, "Blocks nested too deeply")
        self.advance()

        statements = []
        self.block_depth += 1
        try:
            self.skip_semicolons()
            while self.current_token.type not in ("RBRACE", "EOF"):
                stmt = self.parse_statement()
                if stmt is not None:
                    statements.append(stmt)
                else:
                    self.advance()
                self.skip_semicolons()

            if self.current_token.type != "RBRACE":
                raise self.unexpected(f"Expected }} to close block, got {self.current_token.type}")
            self.advance()
        finally:
            self.block_depth -= 1

        return Block(tok, statements)

    # ---------- EXPRESSIONS ----------
    # Precedence climbing: the right operand is parsed at the operator's own
    # level, so operators of equal precedence group to the left.
    def expr(self, precedence=LOWEST):
        tok = self.current_token

        if tok.type == "MINUS":
            # unary minus only applies to integer literals
            self.advance()
            if self.current_token.type != "INT":
                raise self.unexpected(f"Expected number after -, got {self.current_token.type}")
            left = IntLiteral(tok, -self.int_value(self.current_token, negative=True))
            self.advance()
        else:
            left = self.primary()

        while precedence < PRECEDENCES.get(self.current_token.type, LOWEST):
            op_token = self.current_token
            self.advance()
            right = self.expr(PRECEDENCES[op_token.type])
            left = Binary(op_token, left, op_token.value, right)

        return left

    # primary -> INT | STRING | IDENT
    def primary(self):
        tok = self.current_token

        if tok.type == "INT":
            node = IntLiteral(tok, self.int_value(tok))
            self.advance()
            return node

        if tok.type == "STRING":
            self.advance()
            return StringLiteral(tok, tok.value)

        if tok.type == "IDENT":
            self.advance()
            return Var(tok, tok.value)

        raise self.unexpected(f"Expected number, string, or identifier, got {tok.type}")

    def int_value(self, tok, negative=False):
        digits = tok.value.lstrip("0") or "0"
        # too long for int64; also keeps int() away from its digit limit
        if len(digits) > INT64_DIGITS:
            raise NppSyntaxError.at(tok, f"Invalid number {tok.value}")
        value = int(digits)
        limit = INT64_MAX + 1 if negative else INT64_MAX
        if value > limit:
            raise NppSyntaxError.at(tok, f"Invalid number {tok.value}")
        return value
