"""Command-line entry point: print the types a name may hold."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass

from .backend.text import render_flat, render_graph, render_tree
from .backend.tree import build_tree
from .frontend.anchor import Anchor
from .frontend.parse import ParseError, SourceUnit
from .middleend.graph import GraphTypeResolver
from .options import ResolverOptions
from .serialize import flat_to_dict, graph_to_dict, tree_to_dict

logger = logging.getLogger(__name__)

MODES: list[str] = ["flat", "graph", "tree"]

FORMATS: list[str] = ["text", "json"]

USAGE: str = """\
typeflow [OPTIONS] [INPUT] (--offset N | --line L --col C)

Options:
  --offset N          Character offset of the name to resolve
  --line L            1-based line of the name to resolve
  --col C             0-based column of the name to resolve (with --line)
  --mode MODE         Output: flat, graph, tree (default: flat)
  --format FORMAT     Output format: text, json (default: text)
  --union-parts N     Members kept when splitting a union, or "all" (default: 2)
  --all-children      Record every type of a batch under a new graph node
  -v, --verbose       Log resolution steps to stderr
  -o, --output FILE   Write output to FILE instead of stdout
  -h, --help          Show this help message
"""


@dataclass
class Args:
    input_file: str | None = None
    output_file: str | None = None
    offset: int | None = None
    line: int | None = None
    col: int | None = None
    mode: str = "flat"
    fmt: str = "text"
    max_union_parts: int | None = 2
    commit_all_children: bool = False
    verbose: bool = False


def read_source(input_file: str | None) -> tuple[str, int]:
    """Read source from file or stdin. Returns (source, exit_code) where exit_code 0 means OK."""
    if input_file is not None:
        try:
            with open(input_file, "rb") as f:
                raw = f.read()
        except OSError:
            print("error: cannot open '" + input_file + "'", file=sys.stderr)
            return ("", 1)
    else:
        raw = sys.stdin.buffer.read()
    if len(raw) > 0:
        try:
            source = raw.decode("utf-8")
        except ValueError:
            print("error: invalid utf-8 in input", file=sys.stderr)
            return ("", 1)
        return (source, 0)
    return ("", 0)


def write_output(output: str, output_file: str | None) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(output + "\n")
        except OSError:
            print("error: cannot write '" + output_file + "'", file=sys.stderr)
            return 1
        return 0
    print(output)
    return 0


def _to_json(obj: object) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False)


def run_query(source: str, path: str, args: Args) -> tuple[int, str]:
    """Parse source and resolve the requested position. Returns (exit_code, output)."""
    try:
        unit = SourceUnit.from_source(source, path)
    except ParseError as e:
        print("error:" + str(e.lineno) + ":" + str(e.col) + ": " + e.msg, file=sys.stderr)
        return (1, "")
    if args.offset is not None:
        anchor = Anchor(unit, args.offset)
    else:
        anchor = Anchor.at(unit, args.line, args.col)
    logger.debug("resolving %s at offset %d", path, anchor.offset)
    options = ResolverOptions(
        max_union_parts=args.max_union_parts,
        commit_all_children=args.commit_all_children,
    )
    resolver = GraphTypeResolver(options=options)
    if args.mode == "flat":
        entries = resolver.resolve(anchor)
        if args.fmt == "json":
            return (0, _to_json(flat_to_dict(entries)))
        return (0, render_flat(entries))
    graph = resolver.resolve_graph(anchor)
    if args.mode == "graph":
        if args.fmt == "json":
            return (0, _to_json(graph_to_dict(graph)))
        return (0, render_graph(graph))
    tree = build_tree(graph) if graph is not None else None
    if args.fmt == "json":
        return (0, _to_json(tree_to_dict(tree) if tree is not None else None))
    return (0, render_tree(tree))


def _int_arg(flag: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        print("error: " + flag + " expects an integer, got '" + value + "'", file=sys.stderr)
        sys.exit(2)


def parse_args(argv: list[str] | None = None) -> Args:
    """Parse command-line arguments."""
    args = sys.argv[1:] if argv is None else argv
    result = Args()
    valued = ["--offset", "--line", "--col", "--mode", "--format", "--union-parts", "-o", "--output"]
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(0)
        elif arg in valued:
            if i + 1 >= len(args):
                print("error: " + arg + " requires an argument", file=sys.stderr)
                sys.exit(2)
            value = args[i + 1]
            if arg == "--offset":
                result.offset = _int_arg(arg, value)
            elif arg == "--line":
                result.line = _int_arg(arg, value)
            elif arg == "--col":
                result.col = _int_arg(arg, value)
            elif arg == "--mode":
                result.mode = value
            elif arg == "--format":
                result.fmt = value
            elif arg == "--union-parts":
                if value == "all":
                    result.max_union_parts = None
                else:
                    result.max_union_parts = _int_arg(arg, value)
            else:
                result.output_file = value
            i += 2
        elif arg == "--all-children":
            result.commit_all_children = True
            i += 1
        elif arg == "-v" or arg == "--verbose":
            result.verbose = True
            i += 1
        elif arg.startswith("-") and arg != "-":
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            sys.exit(2)
        else:
            if result.input_file is not None:
                print("error: unexpected argument '" + arg + "'", file=sys.stderr)
                sys.exit(2)
            if arg != "-":
                result.input_file = arg
            i += 1
    if result.mode not in MODES:
        print("error: unknown mode '" + result.mode + "'", file=sys.stderr)
        sys.exit(2)
    if result.fmt not in FORMATS:
        print("error: unknown format '" + result.fmt + "'", file=sys.stderr)
        sys.exit(2)
    if result.max_union_parts is not None and result.max_union_parts < 1:
        print("error: --union-parts must be at least 1", file=sys.stderr)
        sys.exit(2)
    if result.offset is not None:
        if result.line is not None or result.col is not None:
            print("error: --offset cannot be combined with --line/--col", file=sys.stderr)
            sys.exit(2)
    elif result.line is None or result.col is None:
        print("error: a position is required: --offset N or --line L --col C", file=sys.stderr)
        sys.exit(2)
    return result


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(name)s: %(message)s")
    source, err = read_source(args.input_file)
    if err != 0:
        return err
    if len(source) == 0:
        print("error: no input provided", file=sys.stderr)
        return 2
    path = args.input_file if args.input_file is not None else "<stdin>"
    exit_code, output = run_query(source, path, args)
    if exit_code != 0:
        return exit_code
    return write_output(output, args.output_file)


if __name__ == "__main__":
    sys.exit(main())
