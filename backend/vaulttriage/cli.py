"""CLI tool for Vault Triage"""

import typer
from rich.console import Console
from rich.table import Table
from pathlib import Path
from typing import Optional

app = typer.Typer(
    name="vault-triage",
    help="Vault Triage - scan and triage a local vault of markdown notes",
)
console = Console()


def _resolve_vault(path: Optional[Path]) -> Path:
    from .config import get_settings

    vault = path or get_settings().vault_path
    if vault is None:
        console.print("[red]No vault path given and VAULT_PATH is not set[/red]")
        raise typer.Exit(code=2)
    return vault


def _notes_table(notes, limit: int) -> Table:
    table = Table(show_header=True)
    table.add_column("Path", style="cyan")
    table.add_column("Title")
    table.add_column("Tags")
    table.add_column("Size", justify="right")
    table.add_column("Modified")

    for note in notes[:limit] if limit > 0 else notes:
        table.add_row(
            note.path,
            note.title,
            ", ".join(note.tags),
            str(note.size),
            note.modified_at,
        )
    return table


def _print_summary(scan) -> None:
    from .models import VaultStatus

    status = VaultStatus.from_scan(scan)
    console.print(f"\n  Vault: {status.path}")
    console.print(f"  Notes: {status.note_count}")
    console.print(f"  Health score: {status.health_score}")
    console.print(f"  Scanned at: {scan.scanned_at}\n")


@app.command()
def scan(
    path: Optional[Path] = typer.Argument(None, help="Vault directory"),
    limit: int = typer.Option(50, "--limit", "-n", help="Rows to show (0 for all)"),
):
    """Scan a vault and rewrite its scan cache"""
    from .errors import VaultError
    from .vault import scan_vault

    vault = _resolve_vault(path)
    try:
        with console.status("Scanning vault..."):
            result = scan_vault(vault)
    except VaultError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    console.print(_notes_table(result.notes, limit))
    console.print("\n[bold green]Scan complete![/bold green]")
    _print_summary(result)


@app.command()
def check(
    path: Optional[Path] = typer.Argument(None, help="Vault directory"),
):
    """Check that a directory looks like a vault"""
    from .connection import VaultConnection
    from .errors import VaultError

    vault = _resolve_vault(path)
    try:
        info = VaultConnection().inspect(vault)
    except VaultError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    table = Table(show_header=True)
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Details")
    table.add_row("Directory", "[green]✓[/green]", info.path)
    table.add_row(
        ".obsidian",
        "[green]✓[/green]" if info.has_obsidian_dir else "[yellow]-[/yellow]",
        "Found" if info.has_obsidian_dir else "Not found",
    )
    table.add_row(
        "Markdown files",
        "[green]✓[/green]" if info.markdown_file_count else "[yellow]-[/yellow]",
        f"{info.markdown_file_count} files",
    )
    console.print(table)
    console.print("\n[green]✓ Looks like a vault[/green]\n")


@app.command()
def cache(
    path: Optional[Path] = typer.Argument(None, help="Vault directory"),
    limit: int = typer.Option(50, "--limit", "-n", help="Rows to show (0 for all)"),
):
    """Show the cached result of the last scan"""
    from .vault import load_scan_cache

    vault = _resolve_vault(path)
    result = load_scan_cache(vault)
    if result is None:
        console.print("[yellow]No scan cache found. Run `vault-triage scan` first.[/yellow]")
        raise typer.Exit(code=1)

    console.print(_notes_table(result.notes, limit))
    _print_summary(result)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h"),
    port: Optional[int] = typer.Option(None, "--port", "-p"),
    reload: bool = typer.Option(False, "--reload", "-r"),
):
    """Start the API server"""
    import uvicorn
    from .config import get_settings

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"\n[bold]Starting Vault Triage server[/bold]")
    console.print(f"  URL: http://{host}:{port}")
    console.print(f"  Docs: http://{host}:{port}/docs\n")

    uvicorn.run(
        "vaulttriage.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
