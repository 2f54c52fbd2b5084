"""
Command-line interface for glslopt-build.

Invoked from the parent crate's build script with the Cargo build
environment (TARGET, SB2_TARGET, OUT_DIR). Link directives are written to
stdout; progress and diagnostics go to stderr.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from glslopt_build import __version__, output
from glslopt_build.build import BuildContext, BuildError, BuildOrchestrator, ToolchainChoice
from glslopt_build.build.errors import ToolInvocationError


@dataclass
class BuildArgs:
    """Arguments for a build run."""

    source_dir: Path
    out_dir: Optional[Path] = None
    target: Optional[str] = None
    sandbox_target: Optional[str] = None
    host_cc: Optional[str] = None
    host_cxx: Optional[str] = None
    archiver: Optional[str] = None
    jobs: int = 1
    toolchain: Optional[ToolchainChoice] = None
    verbose: bool = False


def _report_failure(console: Console, error: BuildError, verbose: bool) -> None:
    console.print(f"[bold red]✗ Build failed:[/bold red] {escape(str(error))}")
    if isinstance(error, ToolInvocationError) and error.command:
        console.print(f"[dim]Command:[/dim] {escape(' '.join(error.command))}", highlight=False)
        if error.stderr and verbose:
            console.print(error.stderr, markup=False, highlight=False)


def build_command(args: BuildArgs) -> None:
    """Build the glsl-optimizer static archives.

    Exits with status 1 on any build failure and 130 on interrupt.
    """
    console = Console(stderr=True)
    output.set_verbose(args.verbose)
    output.log_header("glslopt-build", __version__)

    context = BuildContext.from_environ(
        source_dir=args.source_dir,
        out_dir=args.out_dir,
        target=args.target,
        sandbox_target=args.sandbox_target,
        host_cc=args.host_cc,
        host_cxx=args.host_cxx,
        archiver=args.archiver,
        jobs=args.jobs,
    )

    try:
        orchestrator = BuildOrchestrator(context, toolchain=args.toolchain)
        result = orchestrator.build()
    except KeyboardInterrupt:
        console.print("[yellow]Build interrupted[/yellow]")
        sys.exit(130)
    except BuildError as e:
        _report_failure(console, e, args.verbose)
        sys.exit(1)

    names = ", ".join(archive.archive_path.name for archive in result.archives)
    console.print(f"[bold green]✓ Built {names}[/bold green] ({result.build_time:.2f}s)")


def main(argv: Optional[list[str]] = None) -> None:
    """glslopt-build - build the vendored glsl-optimizer static archives."""
    parser = argparse.ArgumentParser(
        prog="glslopt-build",
        description="Build glsl-optimizer static archives for a Cargo build script",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"glslopt-build {__version__}",
    )
    parser.add_argument(
        "--source-dir",
        type=Path,
        default=Path.cwd(),
        help="Directory containing glsl-optimizer/ (default: current directory)",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Output directory (default: $OUT_DIR)",
    )
    parser.add_argument(
        "--target",
        default=None,
        help="Target triple (default: $TARGET)",
    )
    parser.add_argument(
        "--sandbox-target",
        default=None,
        help="Scratchbox2 target triple (default: $SB2_TARGET)",
    )
    parser.add_argument("--host-cc", default=None, help="Host C compiler for the override path (default: host-cc)")
    parser.add_argument("--host-cxx", default=None, help="Host C++ compiler for the override path (default: host-c++)")
    parser.add_argument("--ar", dest="archiver", default=None, help="Archiver for the override path (default: ar)")
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=1,
        help="Files compiled concurrently on the override path (default: 1)",
    )
    forced = parser.add_mutually_exclusive_group()
    forced.add_argument(
        "--force-override",
        dest="toolchain",
        action="store_const",
        const=ToolchainChoice.HOST_OVERRIDE,
        help="Always use the host override toolchain",
    )
    forced.add_argument(
        "--force-native",
        dest="toolchain",
        action="store_const",
        const=ToolchainChoice.NATIVE_ABSTRACTION,
        help="Always use the setuptools native toolchain",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show build commands and debug logging",
    )

    parsed_args = parser.parse_args(argv)

    if parsed_args.jobs < 1:
        parser.error("--jobs must be at least 1")
    if not parsed_args.source_dir.is_dir():
        parser.error(f"source directory does not exist: {parsed_args.source_dir}")

    logging.basicConfig(
        level=logging.DEBUG if parsed_args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    args = BuildArgs(
        source_dir=parsed_args.source_dir,
        out_dir=parsed_args.out_dir,
        target=parsed_args.target,
        sandbox_target=parsed_args.sandbox_target,
        host_cc=parsed_args.host_cc,
        host_cxx=parsed_args.host_cxx,
        archiver=parsed_args.archiver,
        jobs=parsed_args.jobs,
        toolchain=parsed_args.toolchain,
        verbose=parsed_args.verbose,
    )
    build_command(args)


if __name__ == "__main__":
    main()
