import io
import os
import sys
import traceback

from ast_nodes import Program, Print
from interpreter import Interpreter
from lexer import Lexer
from parser import Parser

SOURCE_EXT = ".npp"


# Simple AST printer (so you can SEE what the parser built)
def ast_to_dict(node):
    if node is None:
        return None

    t = node.__class__.__name__
    d = {"type": t}

    if t in ("Program", "Block"):
        d["statements"] = [ast_to_dict(s) for s in node.statements]
    elif t == "Print":
        d["expr"] = ast_to_dict(node.expr)
    elif t == "Assign":
        d["name"] = node.name
        d["value"] = ast_to_dict(node.value)
    elif t == "If":
        d["condition"] = ast_to_dict(node.condition)
        d["then_block"] = ast_to_dict(node.then_block)
        d["else_block"] = ast_to_dict(node.else_block)
    elif t == "Var":
        d["name"] = node.name
    elif t in ("IntLiteral", "StringLiteral"):
        d["value"] = node.value
    elif t == "Binary":
        d["op"] = node.op
        d["left"] = ast_to_dict(node.left)
        d["right"] = ast_to_dict(node.right)
    else:
        d["raw"] = str(node)

    return d


def pretty(obj, indent=0):
    sp = "  " * indent
    if isinstance(obj, dict):
        lines = []
        for k, v in obj.items():
            if isinstance(v, (dict, list)):
                lines.append(f"{sp}{k}:")
                lines.append(pretty(v, indent + 1))
            else:
                lines.append(f"{sp}{k}: {v}")
        return "\n".join(lines)
    if isinstance(obj, list):
        lines = []
        for item in obj:
            lines.append(f"{sp}-")
            lines.append(pretty(item, indent + 1))
        return "\n".join(lines)
    return f"{sp}{obj}"


def run_source(source, out=None, debug=False, trace=False):
    """Lex, parse and run ``source``; returns the Interpreter used."""
    parser = Parser(Lexer(source), out=out, debug=debug)
    program = parser.parse_program()

    interpreter = Interpreter(out=out, trace=trace)
    interpreter.interpret(program)
    return interpreter


def read_source(path):
    if os.path.splitext(path)[1] != SOURCE_EXT:
        raise Exception(f"Invalid file type. Please provide a {SOURCE_EXT} file.")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        raise Exception(f"Cannot read {path}: {e.strerror}")


def cmd_tokens(path):
    try:
        code = read_source(path)
    except Exception as e:
        print(str(e))
        sys.exit(1)

    for tok in Lexer(code):
        print(f"{tok.line}:{tok.column}\t{tok!r}")


def cmd_parse(path, debug=False):
    try:
        code = read_source(path)
    except Exception as e:
        print(str(e))
        sys.exit(1)

    parser = Parser(Lexer(code), debug=debug)
    program = parser.parse_program()
    print(pretty(ast_to_dict(program)))
    if parser.errors:
        sys.exit(1)


def cmd_run(path, debug=False, trace=False):
    try:
        code = read_source(path)
        # diagnostics are part of the normal output; the run itself succeeds
        run_source(code, debug=debug, trace=trace)
    except Exception as e:
        if debug:
            traceback.print_exc()
        else:
            print(str(e))
        sys.exit(1)


def _count_braces_delta(line: str) -> int:
    # Minimal brace balancer for REPL multiline input.
    # Ignores braces inside "..." strings and after // comments.
    delta = 0
    in_string = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "/" and line[i + 1:i + 2] == "/" and not in_string:
            break
        if ch == '"':
            in_string = not in_string
        elif not in_string:
            if ch == "{":
                delta += 1
            elif ch == "}":
                delta -= 1
        i += 1
    return delta


def parse_snippet(source):
    """Parse a REPL snippet. A lone expression becomes a print statement.

    Returns (program, diagnostics) where diagnostics is the text the
    statement parser reported, or "" when the snippet is usable.
    """
    buf = io.StringIO()
    parser = Parser(Lexer(source), out=buf)
    program = parser.parse_program()
    if not parser.errors:
        return program, ""

    expr_parser = Parser(Lexer(source), out=io.StringIO())
    expr = expr_parser.parse_expression()
    expr_parser.skip_semicolons()
    if expr is not None and expr_parser.at_end():
        return Program([Print(expr.token, expr)]), ""

    return program, buf.getvalue()


def cmd_repl(debug: bool = False, trace: bool = False):
    # One interpreter (and so one environment) lives across snippets.
    interpreter = Interpreter(trace=trace)

    print("npp REPL. Type :q to quit.")

    buffer_lines = []
    brace_depth = 0
    while True:
        prompt = "npp> " if not buffer_lines else "...> "
        try:
            line = input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            break

        stripped = line.strip()
        if not buffer_lines and stripped in (":q", ":quit", "quit", "exit"):
            break

        if not stripped and brace_depth == 0 and not buffer_lines:
            continue

        buffer_lines.append(line)
        brace_depth += _count_braces_delta(line)

        # Wait for block completion if braces aren't balanced yet.
        if brace_depth > 0:
            continue

        source = "\n".join(buffer_lines) + "\n"
        buffer_lines = []
        brace_depth = 0

        try:
            program, diagnostics = parse_snippet(source)
            if diagnostics:
                print(diagnostics, end="")
            interpreter.interpret(program)
        except Exception as e:
            if debug:
                traceback.print_exc()
            else:
                print(str(e))


def usage():
    print("Usage:")
    print(f"  npp run <file{SOURCE_EXT}>")
    print(f"  npp parse <file{SOURCE_EXT}>")
    print(f"  npp tokens <file{SOURCE_EXT}>")
    print("  npp repl")
    print("  (optional) --debug to show parser debug output and Python tracebacks")
    print("  (optional) --trace to print each statement before it runs")
    sys.exit(1)


def main():
    argv = sys.argv[1:]
    debug = "--debug" in argv
    trace = "--trace" in argv
    args = [a for a in argv if a not in ("--debug", "--trace")]

    if not args:
        usage()

    cmd = args[0]

    if cmd == "repl":
        if len(args) != 1:
            usage()
        cmd_repl(debug=debug, trace=trace)
        return

    if cmd not in ("run", "parse", "tokens"):
        print(f"Unknown command: {cmd}")
        sys.exit(1)

    if len(args) != 2:
        usage()

    path = args[1]
    if cmd == "run":
        cmd_run(path, debug=debug, trace=trace)
    elif cmd == "parse":
        cmd_parse(path, debug=debug)
    else:
        cmd_tokens(path)


if __name__ == "__main__":
    main()
