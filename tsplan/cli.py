# SPDX-License-Identifier: MIT
"""Command-line interface for tsplan."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from tsplan.configure.config import load_options
from tsplan.configure.platform import get_host_triple
from tsplan.core.classify import classify, supported_triples
from tsplan.core.errors import TsplanError
from tsplan.core.layout import ProjectLayout
from tsplan.core.project import plan_build
from tsplan.core.sources import SourceMode, resolve_sources
from tsplan.core.triple import TargetTriple
from tsplan.generators import (
    CompileCommandsGenerator,
    PlanJsonGenerator,
    describe_plan,
)
from tsplan.packages.imported import CacheDirLocator

# Set up logging
logger = logging.getLogger("tsplan")


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
        fmt = "%(levelname)s: %(name)s: %(message)s"
    elif verbose:
        level = logging.INFO
        fmt = "%(levelname)s: %(message)s"
    else:
        level = logging.WARNING
        fmt = "%(levelname)s: %(message)s"

    logging.basicConfig(level=level, format=fmt)


def parse_variables(args: list[str]) -> tuple[dict[str, str], list[str]]:
    """Parse KEY=value arguments from a list.

    Args:
        args: List of arguments.

    Returns:
        Tuple of (variables dict, remaining args).
    """
    variables: dict[str, str] = {}
    remaining: list[str] = []

    for arg in args:
        if "=" in arg and not arg.startswith("-"):
            key, _, value = arg.partition("=")
            if key:  # Valid KEY=value
                variables[key] = value
            else:
                remaining.append(arg)
        else:
            remaining.append(arg)

    return variables, remaining


def resolve_target(target: str | None) -> TargetTriple:
    """Parse --target, or detect the host when it is not given."""
    if target:
        return TargetTriple.parse(target)
    return get_host_triple()


def cmd_plan(args: argparse.Namespace) -> int:
    """Plan a build and print or write the result.

    Without --write the plan is printed as JSON. With --write,
    build_plan.json and compile_commands.json are written to the
    build directory.
    """
    variables, remaining = parse_variables(getattr(args, "extra", []))
    if remaining:
        logger.error("Unexpected arguments: %s", " ".join(remaining))
        return 1

    root = Path(args.root)
    layout = ProjectLayout(root=root)
    triple = resolve_target(args.target)
    options = load_options(
        root,
        variables=variables,
        overrides={
            "enable-wasm": args.enable_wasm,
            "build-shared": args.shared,
            "amalgamated": args.amalgamated,
            "optimize": args.optimize,
        },
    )
    locator = CacheDirLocator(args.deps_dir) if args.deps_dir else None

    plan = plan_build(options, triple, layout=layout, locator=locator)

    if not args.write:
        print(json.dumps(describe_plan(plan, triple), indent=2))
        return 0

    build_dir = Path(args.build_dir)
    for generator in (
        PlanJsonGenerator(),
        CompileCommandsGenerator(directory=Path.cwd(), object_dir=build_dir / "obj"),
    ):
        path = generator.generate(plan, triple, build_dir)
        print(f"Generated {path}")
    return 0


def cmd_classify(args: argparse.Namespace) -> int:
    """Print the wasmtime bundle identifier for a target."""
    triple = TargetTriple.parse(args.triple)
    print(classify(triple))
    return 0


def cmd_targets(args: argparse.Namespace) -> int:
    """List every target with a wasmtime bundle."""
    rows = [(str(triple), identifier) for triple, identifier in supported_triples()]
    width = max(len(name) for name, _ in rows)
    for name, identifier in rows:
        print(f"{name:<{width}}  {identifier}")
    return 0


def cmd_sources(args: argparse.Namespace) -> int:
    """List the sources a build would compile."""
    layout = ProjectLayout(root=Path(args.root))
    mode = SourceMode.AMALGAMATED if args.amalgamated else SourceMode.SPLIT
    for source in resolve_sources(
        mode, layout.source_path, amalgamated_source=layout.amalgamated_source
    ):
        print(source.as_posix())
    return 0


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument("--debug", action="store_true", help="Debug output")


def add_project_args(parser: argparse.ArgumentParser) -> None:
    """Add the project root argument."""
    parser.add_argument(
        "-C",
        "--root",
        default=".",
        help="Project root containing lib/ (default: current directory)",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the tsplan CLI."""
    parser = argparse.ArgumentParser(
        prog="tsplan",
        description="Plan platform-aware builds of the tree-sitter library.",
        epilog="Run 'tsplan <command> --help' for command-specific help.",
    )
    from tsplan import __version__

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    add_common_args(parser)

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # tsplan plan
    plan_parser = subparsers.add_parser("plan", help="Plan a library build")
    add_common_args(plan_parser)
    add_project_args(plan_parser)
    plan_parser.add_argument(
        "-t", "--target", help="Target triple, arch-os[-abi] (default: host)"
    )
    plan_parser.add_argument(
        "--enable-wasm", action="store_true", help="Enable Wasm support"
    )
    plan_parser.add_argument(
        "--shared", action="store_true", help="Build a shared library"
    )
    plan_parser.add_argument(
        "--amalgamated",
        action="store_true",
        help="Build using the amalgamated source",
    )
    plan_parser.add_argument(
        "-O",
        "--optimize",
        metavar="MODE",
        help="Optimization mode: debug, release-safe, release-fast or "
        "release-small (default: debug)",
    )
    plan_parser.add_argument(
        "--deps-dir",
        help="Directory holding fetched wasmtime bundles (default: <root>/deps)",
    )
    plan_parser.add_argument(
        "-B", "--build-dir", default="build", help="Build directory (default: build)"
    )
    plan_parser.add_argument(
        "--write",
        action="store_true",
        help="Write build_plan.json and compile_commands.json to the build directory",
    )
    plan_parser.add_argument(
        "extra",
        nargs="*",
        help="Build options (KEY=value), e.g. enable-wasm=1",
    )
    plan_parser.set_defaults(func=cmd_plan)

    # tsplan classify
    classify_parser = subparsers.add_parser(
        "classify", help="Print the wasmtime bundle for a target"
    )
    add_common_args(classify_parser)
    classify_parser.add_argument("triple", help="Target triple, arch-os[-abi]")
    classify_parser.set_defaults(func=cmd_classify)

    # tsplan targets
    targets_parser = subparsers.add_parser(
        "targets", help="List targets with a wasmtime bundle"
    )
    add_common_args(targets_parser)
    targets_parser.set_defaults(func=cmd_targets)

    # tsplan sources
    sources_parser = subparsers.add_parser(
        "sources", help="List the sources a build would compile"
    )
    add_common_args(sources_parser)
    add_project_args(sources_parser)
    sources_parser.add_argument(
        "--amalgamated",
        action="store_true",
        help="Use the amalgamated source",
    )
    sources_parser.set_defaults(func=cmd_sources)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    setup_logging(args.verbose, args.debug)

    try:
        result: int = args.func(args)
    except TsplanError as e:
        logger.error("%s", e)
        return 1
    return result


if __name__ == "__main__":
    sys.exit(main())
