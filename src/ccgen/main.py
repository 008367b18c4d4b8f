"""main.py – ccgen command-line entry point.

Expands every ``-o`` option specification into the cartesian product of
their alternatives and runs the backend once per combination::

    ccgen -e .o -b source -o -c -o -g,debug,,nodebug -o -m32,32,-m64,64 source.c

runs ``cc`` four times, producing ``source_debug_32.o``, ``source_debug_64.o``,
``source_nodebug_32.o`` and ``source_nodebug_64.o``.
"""

from pathlib import Path

import typer

from ccgen import __version__
from ccgen.assembler import Assembler
from ccgen.backend import run_command
from ccgen.cli import Reporter, error_exit
from ccgen.combinations import Combination, enumerate_combinations, iter_combinations
from ccgen.config import build_run_config, load_settings
from ccgen.errors import CcgenError
from ccgen.spec_parser import parse_option_specs

_EPILOG = """\
[bold]Option specifications:[/bold]

An option spec is a comma-separated list read in pairs: the backend value
(formal name), then an optional tag used in the output file name (informal
name).  An empty formal name adds nothing to the command line.

  -o -g,debug,,release      Two alternatives: "-g" (tag debug), "" (tag release)
  -o -m32,32,-m64,64        Two alternatives tagged 32 and 64
  -o -c                     A single, always-present value

[bold]Examples:[/bold]

ccgen -b out -o -c -o -g,debug,,release file.c

    cc -c -g -o out_debug file.c
    cc -c -o out_release file.c

ccgen -n -x gcc -o -O0,O0,-O2,O2 -b t -e o t.c    Print commands only

ccgen --json -o -O1,-O2 -- -DNAME=1 a.c          JSON plan, dash args after --

[dim]Defaults for -x and -e, and the size limits, can be set in a
ccgen.toml found in the current directory or any parent.[/dim]"""

app = typer.Typer(
    help="Run a backend once for every combination of option alternatives.",
    rich_markup_mode="rich",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        print(f"ccgen {__version__}")
        raise typer.Exit()


def _no_arguments(ctx: typer.Context, args: list[str] | None) -> bool:
    if args:
        return False
    # Compare by name: typer may vendor its own click and ParameterSource enum.
    for name in ctx.params:
        if name == "args":
            continue
        source = ctx.get_parameter_source(name)
        if source is not None and source.name != "DEFAULT":
            return False
    return True


@app.command(epilog=_EPILOG, context_settings={"help_option_names": ["-h", "--help"]})
def main(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(
        None, help="Arguments passed verbatim to every backend run.", show_default=False
    ),
    base: str | None = typer.Option(
        None, "-b", "--base", metavar="BASE", help="Output file base name (enables -o <file>)."
    ),
    backend: str | None = typer.Option(
        None, "-x", "--backend", metavar="BACKEND", help="Backend to run (default: cc)."
    ),
    option_specs: list[str] | None = typer.Option(
        None, "-o", "--option", metavar="SPEC", help="Option specification (repeatable)."
    ),
    log_file: Path | None = typer.Option(
        None, "-l", "--log", metavar="FILE", help="Send all of ccgen's output to FILE."
    ),
    extension: str | None = typer.Option(
        None, "-e", "--ext", metavar="EXT", help="Output file extension (used with -b)."
    ),
    dry_run: bool = typer.Option(
        False, "-n", "--dry-run", help="Print the commands without running them."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Print the planned invocations as JSON (implies --dry-run)."
    ),
    config_path: Path | None = typer.Option(
        None, "--config", metavar="PATH", help="Use PATH instead of searching for ccgen.toml."
    ),
    version: bool = typer.Option(
        False,
        "-v",
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print version and exit.",
    ),
) -> None:
    """Expand option alternatives and invoke the backend per combination.

    Every ``-o`` flag declares one option with one or more alternatives; the
    backend is run once for each element of their cartesian product, first
    option varying slowest.  With ``-b`` each run gets an ``-o <file>``
    argument whose name is the base plus the informal tags of the chosen
    alternatives.
    """
    if _no_arguments(ctx, args):
        typer.echo(ctx.get_help())
        raise typer.Exit(code=1)

    reporter = Reporter()
    try:
        settings = load_settings(config_path)
        run_cfg = build_run_config(
            settings,
            backend=backend,
            output_base=base,
            extension=extension,
            log_file=log_file,
            args=args,
        )
        option_set = parse_option_specs(
            option_specs or [],
            max_options=settings.limits.max_options,
            max_alternatives=settings.limits.max_alternatives,
        )
    except CcgenError as e:
        error_exit(reporter, str(e))

    if run_cfg.log_file is not None:
        try:
            reporter = Reporter(run_cfg.log_file)
        except OSError as e:
            error_exit(reporter, f"Cannot open log file {run_cfg.log_file}: {e}")

    assembler = Assembler(run_cfg)

    def _dispatch(combo: Combination) -> None:
        inv = assembler.assemble(combo)
        if dry_run:
            reporter.line(inv.command)
            return
        reporter.executing(inv.command)
        result = run_command(inv, shell=run_cfg.shell)
        if not result.ok:
            detail = f" ({result.error_msg})" if result.error_msg else ""
            reporter.warning(f"Backend exited with status {result.returncode}{detail}")

    with reporter:
        try:
            if json_output:
                plan = [assembler.assemble(c).to_dict() for c in iter_combinations(option_set)]
                reporter.json_print(plan)
            else:
                enumerate_combinations(option_set, _dispatch)
        except CcgenError as e:
            error_exit(reporter, str(e))


def main_entry() -> None:
    """Run the Typer CLI application."""
    app()


if __name__ == "__main__":
    main_entry()
