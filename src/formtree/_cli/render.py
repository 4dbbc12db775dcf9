"""Rich rendering utilities for the formtree CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from formtree._tree import Combine, Leaf, Named, Transform
from formtree._types import from_path

if TYPE_CHECKING:
    from rich.console import Console

    from formtree._eval_engine import EvaluationResult
    from formtree._tree import FormTree
    from formtree._types import Path


def _format_path(path: Path) -> str:
    return escape(from_path(path)) if path else "[dim](root)[/dim]"


def _node_label(node: FormTree[Any, Any]) -> str:
    match node:
        case Leaf(field):
            return f"[blue]Leaf[/blue] {escape(repr(field))}"
        case Combine():
            return "[green]Combine[/green]"
        case Transform():
            return "[yellow]Transform[/yellow]"
        case Named(ref):
            return f"[bold]{escape(ref)}[/bold]"
        case _:
            return escape(type(node).__name__)


def _add_tree_node(parent: Tree, node: FormTree[Any, Any]) -> None:
    """Recursively add a node and its sub-trees to a Rich Tree."""
    branch = parent.add(_node_label(node))
    match node:
        case Combine(fn, arg):
            _add_tree_node(branch, fn)
            _add_tree_node(branch, arg)
        case Transform(_, child) | Named(_, child):
            _add_tree_node(branch, child)


def render_tree(tree: FormTree[Any, Any], console: Console, title: str = "form") -> None:
    """Render the node structure of a form using Rich Tree.

    Args:
        tree: The resolved form.
        console: Rich Console to output to.
        title: Label of the root.

    """
    rich_tree = Tree(f"[bold]{escape(title)}[/bold]")
    _add_tree_node(rich_tree, tree)
    console.print(rich_tree)


def render_paths(paths: list[Path], console: Console) -> None:
    if not paths:
        console.print("[dim]The form has no fields[/dim]")
        return
    for path in paths:
        console.print(_format_path(path))


def render_evaluation(evaluation: EvaluationResult[Any], console: Console) -> None:
    """Render an evaluation result: the value on success, an error table otherwise.

    Args:
        evaluation: The result to render.
        console: Rich Console to output to.

    """
    if evaluation.success:
        console.print("[green]✓ Form is valid[/green]")
        console.print(f"[cyan]Value:[/cyan] {escape(repr(evaluation.value))}")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Path", style="bold")
    table.add_column("Error", style="red")
    for path, view in evaluation.errors:
        table.add_row(_format_path(path), escape(str(view)))

    console.print(f"[red]✗ Form is invalid ({len(evaluation.errors)} errors)[/red]")
    console.print(table)
