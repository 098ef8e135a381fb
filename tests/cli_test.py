import os
import subprocess
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
CLI = os.path.join(ROOT, "cli.py")


def run_cli(*args):
    return subprocess.run(
        [sys.executable, CLI, *args],
        text=True,
        capture_output=True,
        cwd=ROOT,
        timeout=10,
    )


def write(tmp_path, name, code):
    path = tmp_path / name
    path.write_text(code, encoding="utf-8")
    return str(path)


def test_run_example():
    proc = run_cli("run", os.path.join("examples", "hello.npp"))
    assert proc.returncode == 0
    assert proc.stdout == "2\nhello world\nfuck off!\n"


def test_run_reports_diagnostics_and_succeeds(tmp_path):
    path = write(tmp_path, "bad.npp", "suna 1 / 0\nsuna 2\n")
    proc = run_cli("run", path)
    assert proc.returncode == 0
    assert proc.stdout == "Error at line 1, col 8: Division by zero\n2\n"


def test_run_rejects_wrong_extension(tmp_path):
    path = write(tmp_path, "prog.txt", "suna 1\n")
    proc = run_cli("run", path)
    assert proc.returncode == 1
    assert proc.stdout == "Invalid file type. Please provide a .npp file.\n"


def test_run_missing_file(tmp_path):
    proc = run_cli("run", str(tmp_path / "missing.npp"))
    assert proc.returncode == 1
    assert proc.stdout.startswith("Cannot read ")


def test_run_trace(tmp_path):
    path = write(tmp_path, "t.npp", "suna 1\n")
    proc = run_cli("run", path, "--trace")
    assert proc.stdout == "TRACE line=1 col=1 suna 1\n1\n"


def test_parse_prints_tree(tmp_path):
    path = write(tmp_path, "p.npp", "sun x = 1 + 2\n")
    proc = run_cli("parse", path)
    assert proc.returncode == 0
    assert "type: Assign" in proc.stdout
    assert "op: +" in proc.stdout


def test_parse_fails_on_syntax_errors(tmp_path):
    path = write(tmp_path, "p.npp", "sun = 1\n")
    proc = run_cli("parse", path)
    assert proc.returncode == 1
    assert "Expected identifier after sun" in proc.stdout


def test_tokens(tmp_path):
    path = write(tmp_path, "t.npp", "suna 1")
    proc = run_cli("tokens", path)
    assert proc.stdout.splitlines() == ["1:1\tSUNA(suna)", "1:6\tINT(1)", "1:7\tEOF"]


def test_usage_and_unknown_command():
    proc = run_cli()
    assert proc.returncode == 1
    assert proc.stdout.startswith("Usage:")

    proc = run_cli("compile", "x.npp")
    assert proc.returncode == 1
    assert proc.stdout == "Unknown command: compile\n"
