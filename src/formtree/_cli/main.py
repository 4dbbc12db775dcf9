import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from formtree._eval_engine import evaluate
from formtree._io import env_from_toml, export_to_toml
from formtree._tree import FormTree, debug_paths
from formtree._types import Method

from .config import ConfigError, FormtreeConfig, get_config
from .discover import load_form
from .render import render_evaluation, render_paths, render_tree

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()

FormArgument = Annotated[
    str | None,
    typer.Argument(help="Path to Python script or module path (e.g., examples.signup:form)"),
]
FormVarOption = Annotated[
    str | None,
    typer.Option("--form", help="Name of the form variable (default: `form`, or the only form defined)"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Formtree CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _get_config() -> FormtreeConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2) from e


def _load_tree(path: str | None, form_var: str | None) -> FormTree[Any, Any]:
    """Load a form from the command line or pyproject.toml and resolve it."""
    if path is None:
        config = _get_config()
        if config.form is None:
            err_console.print("[red]No form given and no form configured in pyproject.toml[/red]")
            raise typer.Exit(code=2)
        err_console.print("[cyan]Loading form from pyproject.toml configuration[/cyan]")
        return load_form(config.form, form_var)

    err_console.print(f"[cyan]Loading form:[/cyan] {escape(path)}")
    return load_form(path, form_var)


@app.command(name="eval")
def eval_(
    path: FormArgument = None,
    *,
    form_var: FormVarOption = None,
    input: Annotated[  # noqa: A002
        Path | None,
        typer.Option("-i", "--input", help="Path to input TOML file"),
    ] = None,
    method: Annotated[
        Method | None,
        typer.Option("-m", "--method", help="Evaluation method (get reads defaults, post reads inputs)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
) -> None:
    """Evaluate a form against input data and report its value or errors."""
    tree = _load_tree(path, form_var)

    config = _get_config() if input is None or method is None else None
    if input is None and config is not None:
        input = config.input  # noqa: A001
    if input is None:
        err_console.print("[red]No input given and no input configured in pyproject.toml[/red]")
        raise typer.Exit(code=2)
    if method is None:
        method = (config.method if config is not None else None) or Method.POST

    err_console.print(f"[cyan]Loading input from:[/cyan] {input}")
    env = env_from_toml(input)

    evaluation = evaluate(tree, env, method)
    render_evaluation(evaluation, out_console)

    if output is not None:
        export_to_toml(evaluation, output)
        err_console.print(f"[cyan]Results written to:[/cyan] {output}")

    if not evaluation.success:
        raise typer.Exit(code=1)


@app.command()
def paths(
    path: FormArgument = None,
    *,
    form_var: FormVarOption = None,
) -> None:
    """List the path of every field in a form."""
    tree = _load_tree(path, form_var)
    render_paths(debug_paths(tree), out_console)


@app.command()
def show(
    path: FormArgument = None,
    *,
    form_var: FormVarOption = None,
) -> None:
    """Show the node structure of a form."""
    tree = _load_tree(path, form_var)
    render_tree(tree, out_console, title=path or "form")


def main() -> None:
    app()
