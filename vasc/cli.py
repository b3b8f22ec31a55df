"""Command line front end for the VASC compiler.

    vasc build                    # compiles ./index.vasc into ./tmp.vasm
    vasc build prog.vasc -o prog.vasm
    vasc run prog.vasc            # compile, execute, print variables
    vasc run prog.vasm            # execute already generated code
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence

from vasc.compiler import CompileOptions, CompileResult, compile_source
from vasc.errors import VascError
from vasc.vasm_sim import REGISTERS, VasmError, VasmMachine

DEFAULT_SOURCE = Path("index.vasc")
DEFAULT_OUTPUT = Path("tmp.vasm")


def _read_source(path: Path) -> str:
    if not path.exists():
        raise SystemExit(f"error: no {path} found; pass the source file to compile")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SystemExit(f"error: cannot read {path}: {exc}") from exc


def _compile(path: Path, options: CompileOptions, verbose: bool) -> CompileResult:
    text = _read_source(path)
    try:
        result = compile_source(text, str(path), options)
    except VascError as exc:
        raise SystemExit(f"error: {exc}") from exc

    for warning in result.warnings:
        print(f"Warning: {warning}")

    if verbose:
        print(f"\n--- Tokens {path} ---\n")
        for index, token in enumerate(result.tokens):
            print(f"{index:4d}  {token.line}:{token.column}  {token.describe()}")
        print(f"\n--- Bracket pairs {path} ---\n")
        for open_index, close_index in sorted(result.brackets.items()):
            print(f"{open_index:4d} -> {close_index}")
        print(f"\n--- Slot map {path} ---\n")
        print(result.slot_map, end="")
    return result


def cmd_build(args: argparse.Namespace) -> int:
    options = CompileOptions(comments=not args.no_comments)
    result = _compile(args.source, options, args.verbose)
    args.output.write_text(result.text, encoding="utf-8")
    print(f"Wrote {args.output}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    symbols = {}
    declarations = {}
    if args.source.suffix == ".vasm":
        text = _read_source(args.source)
    else:
        result = _compile(args.source, CompileOptions(), args.verbose)
        text = result.text
        symbols = result.symbols
        declarations = result.declarations

    try:
        machine = VasmMachine(text, memory_size=args.memory).run()
    except VasmError as exc:
        raise SystemExit(f"error: {exc}") from exc

    if symbols:
        for name, slot in sorted(symbols.items(), key=lambda item: item[1]):
            # a declaration inside a skipped block never stored anything
            if declarations.get(name) in machine.executed:
                value = machine.slot_values([slot])[0]
            else:
                value = "<unassigned>"
            print(f"{name} = {value}  (slot {slot})")
    else:
        for slot in sorted(machine.touched):
            print(f"slot {slot} = {machine.slot_values([slot])[0]}")
    if args.verbose:
        print(f"\n--- Registers after {machine.steps} steps ---\n")
        for name in REGISTERS:
            print(f"{name} = {machine.register(name)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vasc", description="Compile VASC source into VASM pseudo-assembly")
    sub = parser.add_subparsers(dest="operation", metavar="operation", required=True)

    build = sub.add_parser("build", help="Compile a .vasc file")
    build.add_argument("source", nargs="?", type=Path, default=DEFAULT_SOURCE,
                       help=f"Input .vasc source file (default: {DEFAULT_SOURCE})")
    build.add_argument("-o", "--output", type=Path, default=DEFAULT_OUTPUT,
                       help=f"Output .vasm file (default: {DEFAULT_OUTPUT})")
    build.add_argument("--no-comments", action="store_true", help="Drop // comments from the output")
    build.add_argument("-v", "--verbose", action="store_true", help="Print tokens, bracket pairs and slot map")
    build.set_defaults(func=cmd_build)

    run = sub.add_parser("run", help="Compile (if needed) and execute a program")
    run.add_argument("source", type=Path, help="A .vasc source or .vasm file")
    run.add_argument("--memory", type=int, default=256, help="Number of memory slots (default: 256)")
    run.add_argument("-v", "--verbose", action="store_true", help="Also print compiler internals and registers")
    run.set_defaults(func=cmd_run)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
