"""
assocarray Command-Line Interface (CLI)

Drives an AssociativeArray from the shell via subcommands:
- `run` executes a small operations script against one array
- `bench` runs the timing/space benchmarks and writes a CSV report

Usage examples:
    python -m assocarray.cli run --path ops.txt
    printf 'set a 1\\nget a\\nshow\\n' | python -m assocarray.cli run
    python -m assocarray.cli bench --path bench.csv --base-input 50 --steps 4

Script format (one command per line, `#` starts a comment line):
    set KEY VALUE...   store VALUE (rest of the line) under KEY
    get KEY            print the value stored under KEY
    has KEY            print true/false
    remove KEY         print removed/absent
    size               print the number of pairs
    show               print the array
    clone              continue working on a clone of the array
"""

import argparse
import logging
import sys

from . import bench
from .datastructures import AssociativeArray, KeyNotFoundError
from .logconfig import configure_root_logger, get_level

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Script interpreter
# -------------------------------------------------------------------
class ScriptError(Exception):
    """A malformed line in an operations script."""


# command name -> (min tokens after the command, max tokens or None)
_ARITY = {
    "set": (2, None),
    "get": (1, 1),
    "has": (1, 1),
    "remove": (1, 1),
    "size": (0, 0),
    "show": (0, 0),
    "clone": (0, 0),
}


def _check_arity(cmd, args):
    if cmd not in _ARITY:
        raise ScriptError(f"unknown command {cmd!r}")
    lo, hi = _ARITY[cmd]
    if len(args) < lo or (hi is not None and len(args) > hi):
        raise ScriptError(f"wrong number of arguments for {cmd!r}")


def execute_line(aa, line):
    """Apply one script line to `aa`.

    Returns the (possibly replaced) array and the text to print, or None
    when the line produces no output.
    """
    tokens = line.split()
    cmd, args = tokens[0], tokens[1:]
    _check_arity(cmd, args)

    if cmd == "set":
        # The value is everything after the key, internal spacing preserved.
        value = line.strip().split(None, 2)[2]
        aa.set(args[0], value)
        return aa, None
    if cmd == "get":
        return aa, str(aa.get(args[0]))
    if cmd == "has":
        return aa, "true" if aa.has_key(args[0]) else "false"
    if cmd == "remove":
        return aa, "removed" if aa.remove(args[0]) else "absent"
    if cmd == "size":
        return aa, str(aa.size())
    if cmd == "show":
        return aa, str(aa)
    # clone
    return aa.clone(), "cloned"


def run_script(lines, out=None, err=None):
    """Execute script `lines` against a fresh array; return the error count."""
    out = out or sys.stdout
    err = err or sys.stderr
    aa = AssociativeArray()
    errors = 0
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            aa, text = execute_line(aa, line)
        except KeyNotFoundError as e:
            errors += 1
            print(f"error: key not found: {e.key}", file=err)
            continue
        except ScriptError as e:
            errors += 1
            print(f"error: line {lineno}: {e}", file=err)
            continue
        if text is not None:
            print(text, file=out)
    logger.debug("Script finished with %d pairs and %d errors", aa.size(), errors)
    return errors


# -------------------------------------------------------------------
# Core command handlers
# -------------------------------------------------------------------
def cmd_run(args):
    """Run an operations script from a file or stdin."""
    if args.path in (None, "-"):
        errors = run_script(sys.stdin)
    else:
        with open(args.path, "r", encoding="utf-8") as f:
            errors = run_script(f)
    return 1 if errors else 0


def cmd_bench(args):
    """Run the benchmark suite and write a CSV report."""
    bench.run_benchmarks(
        args.path,
        base_input=args.base_input,
        steps=args.steps,
        iterations=args.iterations,
    )
    return 0


# -------------------------------------------------------------------
# CLI parser setup
# -------------------------------------------------------------------
def build_parser():
    """Build the argparse command-line parser with subcommands."""
    p = argparse.ArgumentParser(prog="assocarray", description="Associative array driver")
    p.add_argument(
        "--log-level",
        default=get_level(),
        help="Logging level (default: $ASSOCARRAY_LOGGING_LEVEL or WARNING)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # --- scripted operations ---
    s = sub.add_parser("run", help="Execute an operations script")
    s.add_argument("--path", default=None, help="Script file ('-' or omitted for stdin)")
    s.set_defaults(func=cmd_run)

    # --- benchmarks ---
    s = sub.add_parser("bench", help="Benchmark operations and write a CSV report")
    s.add_argument("--path", required=True)
    s.add_argument("--base-input", type=int, default=bench.DEFAULT_BASE_INPUT)
    s.add_argument("--steps", type=int, default=bench.DEFAULT_STEPS)
    s.add_argument("--iterations", type=int, default=bench.DEFAULT_ITERATIONS)
    s.set_defaults(func=cmd_bench)

    return p


# -------------------------------------------------------------------
# Entry point
# -------------------------------------------------------------------
def main(argv=None):
    """CLI entry point when invoked via `python -m assocarray.cli`."""
    if argv is None:
        argv = sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_root_logger(level=args.log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
