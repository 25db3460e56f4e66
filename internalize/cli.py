"""CLI for the internalize transformer."""

import logging
from pathlib import Path
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .core.errors import MalformedInvocationError
from .core.gate import GatedItem, internalize, render_gated
from .core.types import DEFAULT_FEATURE, DeclKind, GateConfig
from .dsl.parser import DeclParser
from .dsl.printer import DeclPrinter
from .rules.registry import get_handler

app = typer.Typer(
    name="internalize",
    help="Expose internal items behind a feature flag, with a warning in their docs",
)
console = Console()

KIND_RULES = {
    DeclKind.STRUCT: "fields widened independently, then the struct",
    DeclKind.UNION: "fields widened independently, then the union",
    DeclKind.MOD: "inline body rewritten first, then the module",
    DeclKind.IMPL: "associated consts, fns and types widened; block has no marker",
    DeclKind.FOREIGN_MOD: "foreign fns, statics and types widened; block has no marker",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every widened marker"),
):
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def gate_file(path: Path, feature: str) -> list[GatedItem]:
    """Parse and gate every declaration in a file, exiting on bad input."""
    if not path.exists():
        console.print(f"[red]Error: File {path} not found.[/red]")
        raise typer.Exit(1)

    try:
        config = GateConfig(feature=feature)
    except ValueError as e:
        console.print(f"[red]Invalid feature: {e}[/red]")
        raise typer.Exit(1)

    try:
        items = DeclParser().parse_file(path)
    except MalformedInvocationError as e:
        console.print(f"[red]Parse error: {e}[/red]")
        raise typer.Exit(1)

    return [internalize(item, config) for item in items]


@app.command("expand")
def expand_command(
    source_file: Path = typer.Argument(..., help="Path to a file of declarations"),
    feature: str = typer.Option(DEFAULT_FEATURE, "--feature", "-f", help="Feature that selects the widened variant"),
    out: Path = typer.Option(None, "--out", "-o", help="Write the expansion to this file"),
):
    """Emit both variants of every declaration, gated on the feature."""
    gated = gate_file(source_file, feature)
    printer = DeclPrinter()
    expansion = "\n\n".join(render_gated(g, printer) for g in gated)

    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        with open(out, "w") as f:
            f.write(expansion + "\n")
        console.print(f"[green]Expanded {len(gated)} declarations to {out}[/green]")
        return

    console.print(Syntax(expansion, "rust", theme="ansi_dark"))


@app.command("select")
def select_command(
    source_file: Path = typer.Argument(..., help="Path to a file of declarations"),
    feature: str = typer.Option(DEFAULT_FEATURE, "--feature", "-f", help="Feature that selects the widened variant"),
    enable: bool = typer.Option(True, "--enable/--disable", help="Whether the feature is on in this build"),
):
    """Print the variant a build with the feature on or off would keep."""
    gated = gate_file(source_file, feature)
    enabled = {feature} if enable else set()
    printer = DeclPrinter()
    selected = printer.render_many([g.select(enabled) for g in gated])

    state = "enabled" if enable else "disabled"
    console.print(Panel(f"feature [cyan]{feature}[/cyan] {state}", title="Build"))
    console.print(Syntax(selected, "rust", theme="ansi_dark"))


@app.command("report")
def report_command(
    source_file: Path = typer.Argument(..., help="Path to a file of declarations"),
    feature: str = typer.Option(DEFAULT_FEATURE, "--feature", "-f", help="Feature that selects the widened variant"),
):
    """List every visibility marker and whether it received the notice."""
    gated = gate_file(source_file, feature)

    table = Table(title="Visibility Report")
    table.add_column("Path", style="cyan")
    table.add_column("Kind", style="white")
    table.add_column("Was", style="yellow")
    table.add_column("Notice", style="green")

    annotated = 0
    for g in gated:
        for entry in g.report.entries:
            table.add_row(
                entry.path,
                entry.kind,
                entry.previous.value,
                "Yes" if entry.annotated else "No",
            )
            annotated += entry.annotated

    console.print(table)
    console.print(f"[dim]{annotated} items exposed only by feature '{feature}'.[/dim]")


@app.command("kinds")
def kinds_command():
    """List declaration kinds and how each is widened."""
    table = Table(title="Declaration Kinds")
    table.add_column("Kind", style="cyan")
    table.add_column("Rule", style="white")

    for kind in DeclKind:
        if get_handler(kind) is None:
            rule = "left untouched"
        else:
            rule = KIND_RULES.get(kind, "widened")
        table.add_row(kind.value, rule)

    console.print(table)


if __name__ == "__main__":
    app()
