class NppError(Exception):
    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    @classmethod
    def at(cls, token, message: str):
        if token is None:
            return cls(message)
        return cls(message, line=token.line, column=token.column)

    def format(self) -> str:
        if self.line is None:
            return f"Error: {self.message}"
        return f"Error at line {self.line}, col {self.column}: {self.message}"

    def __str__(self) -> str:
        return self.format()


class NppLexicalError(NppError):
    pass


class NppSyntaxError(NppError):
    pass


class NppRuntimeError(NppError):
    pass
