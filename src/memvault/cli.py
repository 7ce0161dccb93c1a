"""Typer CLI for memvault."""

from __future__ import annotations

import typer
from rich.console import Console

from memvault.core.commands import Command, MemoryArgs
from memvault.core.errors import Err
from memvault.core.settings import load_settings
from memvault.mcp.server import run_server
from memvault.tools.local.memory import MemoryStore
from memvault.tools.registry import ToolRegistry, register_local_tools
from memvault.utils.logging import configure_logging

app = typer.Typer(help="memvault memory tool CLI")
console = Console(soft_wrap=True)

tools_app = typer.Typer(help="Tools operations")
config_app = typer.Typer(help="Configuration")


@app.command()
def serve() -> None:
    """Run the MCP server."""
    settings = load_settings()
    configure_logging(settings.log_level)
    run_server(settings)


@config_app.command("show")
def config_show() -> None:
    settings = load_settings()
    console.print(f"storage_root={settings.storage_root}")
    console.print(f"log_level={settings.log_level}")
    console.print(f"transport={settings.transport}")
    console.print(f"server_name={settings.server_name}")


@tools_app.command("list")
def tools_list() -> None:
    settings = load_settings()
    registry = ToolRegistry()
    register_local_tools(registry, settings)
    for spec in registry.list_specs():
        mode = "destructive" if spec.destructive else "non-destructive"
        console.print(f"{spec.name} ({mode})")


@app.command()
def view(
    path: str,
    start: int | None = typer.Option(None, help="First line (1-based)"),
    end: int | None = typer.Option(None, help="Last line (inclusive)"),
) -> None:
    """Show a file or list a directory."""
    view_range = None
    if start is not None or end is not None:
        view_range = (start or 1, end if end is not None else start or 1)
    _run(MemoryArgs(command=Command.VIEW, path=path, view_range=view_range))


@app.command()
def create(path: str, text: str = typer.Option("", help="File content")) -> None:
    """Create or overwrite a file."""
    _run(MemoryArgs(command=Command.CREATE, path=path, file_text=text))


@app.command("str-replace")
def str_replace(path: str, old_str: str, new_str: str) -> None:
    """Replace the first occurrence of OLD_STR with NEW_STR."""
    _run(
        MemoryArgs(
            command=Command.STR_REPLACE, path=path, old_str=old_str, new_str=new_str
        )
    )


@app.command()
def insert(path: str, line: int, text: str) -> None:
    """Insert TEXT at 1-based LINE."""
    _run(
        MemoryArgs(
            command=Command.INSERT, path=path, insert_line=line, insert_text=text
        )
    )


@app.command()
def delete(path: str) -> None:
    """Delete a file or directory."""
    _run(MemoryArgs(command=Command.DELETE, path=path))


@app.command()
def rename(
    old_path: str,
    new_path: str,
    overwrite: bool = typer.Option(False, help="Replace an existing destination"),
) -> None:
    """Move OLD_PATH to NEW_PATH."""
    _run(
        MemoryArgs(
            command=Command.RENAME,
            old_path=old_path,
            new_path=new_path,
            overwrite=overwrite,
        )
    )


app.add_typer(tools_app, name="tools")
app.add_typer(config_app, name="config")


def _run(args: MemoryArgs) -> None:
    settings = load_settings()
    outcome = MemoryStore(settings.storage_root).execute(args)
    if isinstance(outcome, Err):
        console.print(str(outcome), markup=False, highlight=False)
        raise typer.Exit(code=1)
    console.print(outcome.message, markup=False, highlight=False)
