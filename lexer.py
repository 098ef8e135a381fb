KEYWORDS = {
    "sun": "SUN",        # variable declaration
    "suna": "SUNA",      # print
    "agar": "AGAR",      # if
    "magar": "MAGAR",    # else
    # reserved, rejected by the parser
    "glow": "GLOW",      # function
    "fhek": "FHEK",      # return
    "yas": "YAS",        # true
    "nah": "NAH",        # false
    "grind": "GRIND",    # loop
}

RESERVED = ("GLOW", "FHEK", "YAS", "NAH", "GRIND")

SINGLE_CHAR_TOKENS = {
    "=": "ASSIGN",
    "!": "BANG",
    "<": "LT",
    ">": "GT",
    "+": "PLUS",
    "-": "MINUS",
    "*": "STAR",
    "/": "SLASH",
    "%": "PERCENT",
    ",": "COMMA",
    ";": "SEMICOLON",
    "(": "LPAREN",
    ")": "RPAREN",
    "{": "LBRACE",
    "}": "RBRACE",
}

# two-character operators, keyed by their first character
DOUBLE_CHAR_TOKENS = {
    "=": ("==", "EQEQ"),
    "!": ("!=", "NOTEQ"),
    "<": ("<=", "LTE"),
    ">": (">=", "GTE"),
}


class Token:
    def __init__(self, type, value=None, line=1, column=1):
        self.type = type
        self.value = value
        self.line = line
        self.column = column

    def __repr__(self):
        if self.value is not None:
            return f"{self.type}({self.value})"
        return f"{self.type}"

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.value, self.line, self.column) == (other.type, other.value, other.line, other.column)


class Lexer:
    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.current_char = text[0] if text else None
        self.line = 1
        self.column = 1

    def __iter__(self):
        # yields every token up to and including the first EOF
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == "EOF":
                return

    def advance(self):
        # track line/column based on current_char before moving
        if self.current_char is None:
            return
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1
        if self.pos >= len(self.text):
            self.current_char = None
        else:
            self.current_char = self.text[self.pos]

    def peek(self):
        nxt = self.pos + 1
        if nxt >= len(self.text):
            return None
        return self.text[nxt]

    def skip_whitespace(self):
        while self.current_char and self.current_char in " \t\n\r":
            self.advance()

    def skip_comment(self):
        while self.current_char and self.current_char != "\n":
            self.advance()

    def read_identifier(self):
        start_line, start_col = self.line, self.column
        start = self.pos
        while self.current_char and (self.current_char.isalnum() or self.current_char == "_"):
            self.advance()
        word = self.text[start:self.pos]
        return Token(KEYWORDS.get(word, "IDENT"), word, line=start_line, column=start_col)

    def read_number(self):
        # overflow is checked by the parser, the lexer keeps the digits as text
        start_line, start_col = self.line, self.column
        start = self.pos
        while self.current_char and self.current_char.isdecimal():
            self.advance()
        return Token("INT", self.text[start:self.pos], line=start_line, column=start_col)

    def read_string(self):
        start_line, start_col = self.line, self.column
        self.advance()  # skip opening quote
        start = self.pos

        while self.current_char is not None and self.current_char != '"':
            self.advance()

        # unterminated literal: keep whatever was scanned
        result = self.text[start:self.pos]
        if self.current_char == '"':
            self.advance()  # skip closing quote
        return Token("STRING", result, line=start_line, column=start_col)

    def next_token(self):
        while self.current_char:

            if self.current_char in " \t\n\r":
                self.skip_whitespace()
                continue

            # comments: // to end of line
            if self.current_char == "/" and self.peek() == "/":
                self.skip_comment()
                continue

            if self.current_char.isalpha() or self.current_char == "_":
                return self.read_identifier()

            if self.current_char.isdecimal():
                return self.read_number()

            if self.current_char == '"':
                return self.read_string()

            start_line, start_col = self.line, self.column
            ch = self.current_char

            # ==, !=, <=, >=
            if ch in DOUBLE_CHAR_TOKENS and self.peek() == "=":
                literal, type = DOUBLE_CHAR_TOKENS[ch]
                self.advance()
                self.advance()
                return Token(type, literal, line=start_line, column=start_col)

            self.advance()
            if ch in SINGLE_CHAR_TOKENS:
                return Token(SINGLE_CHAR_TOKENS[ch], ch, line=start_line, column=start_col)

            # the caller decides what to do with characters it cannot use
            return Token("ILLEGAL", ch, line=start_line, column=start_col)

        return Token("EOF", line=self.line, column=self.column)
