"""CLI tests for the typeflow entry point.

Test cases live in cli/*.tests files. Format:

    === test name
    args: --line 2 --col 0
    source code here
    (stdin for the command)
    ---
    exit: 0
    stderr: error: some message
    stdout-contains: Types: int (1)
    stdout-empty: true
    stderr-empty: true
    ---

Special directives in the input section:
    args:           CLI arguments (first line, required)
    stdin-bytes:    hex-encoded raw bytes instead of text (e.g. "ff fe")

Assertion directives in the expected section:
    exit:             exact exit code
    stderr:           exact stderr content (trailing newline added)
    stderr-contains:  stderr must contain substring
    stderr-empty:     stderr must be empty
    stdout-contains:  stdout must contain substring
    stdout-empty:     stdout must be empty
"""

import json
import subprocess
import sys
from pathlib import Path

import pytest

CLI_DIR = Path(__file__).parent / "cli"
ROOT_DIR = Path(__file__).parent.parent


def parse_cli_test_file(path: Path) -> list[tuple[str, dict]]:
    """Parse a .tests file into (name, case) tuples."""
    lines = path.read_text().split("\n")
    result: list[tuple[str, dict]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            result.append((test_name, _parse_case(input_lines, expected_lines)))
        else:
            i += 1
    return result


def _parse_case(input_lines: list[str], expected_lines: list[str]) -> dict:
    case: dict = {
        "args": [],
        "stdin": None,
        "stdin_bytes": None,
        "assertions": [],
    }
    body_start = 0
    if input_lines and input_lines[0].startswith("args:"):
        args_str = input_lines[0][5:].strip()
        case["args"] = args_str.split() if args_str else []
        body_start = 1
    remaining = input_lines[body_start:]
    if remaining and remaining[0].startswith("stdin-bytes:"):
        case["stdin_bytes"] = bytes.fromhex(remaining[0][len("stdin-bytes:") :].strip())
    else:
        case["stdin"] = "\n".join(remaining)
    for line in expected_lines:
        line = line.strip()
        if not line:
            continue
        if line.startswith("exit:"):
            case["assertions"].append(("exit", int(line[5:].strip())))
        elif line.startswith("stderr:"):
            case["assertions"].append(("stderr", line[7:].strip()))
        elif line.startswith("stderr-contains:"):
            case["assertions"].append(("stderr-contains", line[16:].strip()))
        elif line.startswith("stderr-empty:"):
            case["assertions"].append(("stderr-empty", None))
        elif line.startswith("stdout-contains:"):
            case["assertions"].append(("stdout-contains", line[16:].strip()))
        elif line.startswith("stdout-empty:"):
            case["assertions"].append(("stdout-empty", None))
    return case


def discover_cli_tests() -> list[tuple[str, dict]]:
    """Find all CLI tests across .tests files."""
    results = []
    for test_file in sorted(CLI_DIR.glob("*.tests")):
        for name, case in parse_cli_test_file(test_file):
            results.append((f"{test_file.stem}/{name}", case))
    return results


def run_cli(args: list[str], stdin_data: bytes = b"") -> subprocess.CompletedProcess[bytes]:
    cmd = [sys.executable, "-m", "typeflow.cli", *args]
    return subprocess.run(cmd, input=stdin_data, capture_output=True, cwd=ROOT_DIR)


def check_assertions(result: subprocess.CompletedProcess[bytes], assertions: list[tuple]) -> None:
    """Check all assertions against a CLI result."""
    for kind, value in assertions:
        if kind == "exit":
            assert result.returncode == value, (
                f"expected exit {value}, got {result.returncode}"
                f"\nstderr: {result.stderr.decode(errors='replace')}"
            )
        elif kind == "stderr":
            actual = result.stderr.decode(errors="replace").rstrip("\n")
            assert actual == value, f"expected stderr {value!r}, got {actual!r}"
        elif kind == "stderr-contains":
            actual = result.stderr.decode(errors="replace")
            assert value in actual, f"expected stderr to contain {value!r}, got {actual!r}"
        elif kind == "stderr-empty":
            assert result.stderr == b"", f"expected empty stderr, got {result.stderr!r}"
        elif kind == "stdout-contains":
            actual = result.stdout.decode(errors="replace")
            assert value in actual, f"expected stdout to contain {value!r}, got {actual!r}"
        elif kind == "stdout-empty":
            assert result.stdout == b"", f"expected empty stdout, got {result.stdout[:200]!r}"


def pytest_generate_tests(metafunc):
    """Parametrize test_cli over all .tests files."""
    if "cli_case" in metafunc.fixturenames:
        tests = discover_cli_tests()
        params = [pytest.param(case, id=test_id) for test_id, case in tests]
        metafunc.parametrize("cli_case", params)


def test_cli(cli_case: dict) -> None:
    if cli_case["stdin_bytes"] is not None:
        stdin_data = cli_case["stdin_bytes"]
    else:
        stdin_data = (cli_case["stdin"] or "").encode()
    result = run_cli(cli_case["args"], stdin_data)
    check_assertions(result, cli_case["assertions"])


def test_reads_file_and_writes_output(tmp_path: Path) -> None:
    source = tmp_path / "sample.py"
    source.write_text('def f(p):\n    return p\n\nf("s")\nf(2)\n')
    out = tmp_path / "out.json"
    result = run_cli([str(source), "--line", "1", "--col", "6", "--format", "json", "-o", str(out)])
    assert result.returncode == 0, result.stderr
    assert result.stdout == b""
    data = json.loads(out.read_text())
    assert [t["type"] for t in data["types"]] == ["str", "int"]
    assert data["summary"]["message"] == "Types: str (1), int (1)"


def test_tree_json() -> None:
    result = run_cli(["--mode", "tree", "--format", "json", "--line", "3", "--col", "0"], b"a = 1\nb = a\nb\n")
    assert result.returncode == 0, result.stderr
    tree = json.loads(result.stdout)
    assert tree["type"] == "b"
    assert [c["type"] for c in tree["children"]] == ["a"]
    assert tree["children"][0]["children"][0] == {"type": "int", "count": 1, "lines": [0], "children": []}


def test_unwritable_output(tmp_path: Path) -> None:
    target = tmp_path / "missing-dir" / "out.txt"
    result = run_cli(["--offset", "0", "-o", str(target)], b"x = 1\n")
    assert result.returncode == 1
    assert result.stderr.decode().startswith("error: cannot write")
