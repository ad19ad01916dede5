"""Service monitor CLI entry point."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table

from service_monitor.config.models import Environment

if TYPE_CHECKING:
    from service_monitor.checks.runner import CheckRunner

app = typer.Typer(
    name="svcmon",
    help="Service Monitor: environment-aware REST/SOAP health checks",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main_callback(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_runner(catalog: Path | None = None) -> CheckRunner:
    """Load .env and settings, returning a CheckRunner bound to the current environment."""
    from dotenv import load_dotenv

    from service_monitor.checks.runner import CheckRunner
    from service_monitor.config.environment import EnvironmentStore
    from service_monitor.config.loader import load_settings

    load_dotenv()
    store = EnvironmentStore.from_os()
    settings = load_settings(store)
    if catalog is not None:
        settings = settings.model_copy(update={"catalog_path": str(catalog)})
    return CheckRunner(settings, env=store)


@app.command()
def check(
    env: Environment | None = typer.Option(None, "--env", "-e", case_sensitive=False, help="Target environment"),
    service: str | None = typer.Option(None, "--service", "-s", help="Check a single service id"),
    disable: list[str] | None = typer.Option(None, "--disable", "-d", help="Service id to skip (repeatable)"),
    catalog: Path | None = typer.Option(None, "--catalog", "-c", help="Path to the service catalog"),
    as_json: bool = typer.Option(False, "--json", help="Print the batch result as JSON"),
) -> None:
    """Check all services (or one) for an environment."""
    from service_monitor.errors import ConfigLoadError, UnknownServiceError

    try:
        runner = _build_runner(catalog)
        batch = asyncio.run(
            runner.run(
                service_id=service,
                environment=env,
                disabled={service_id: True for service_id in disable or []},
            )
        )
    except (ConfigLoadError, UnknownServiceError) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(batch.to_dict(), indent=2, default=str))
    else:
        table = Table(title=f"Service Checks ({batch.environment.value})")
        table.add_column("Service", style="bold")
        table.add_column("Type")
        table.add_column("URL")
        table.add_column("Status")
        table.add_column("Code")
        table.add_column("Time")
        table.add_column("Details")

        for r in batch.services:
            style = "green" if r.success else "red"
            elapsed = f"{r.response_time_ms:.0f}ms" if r.response_time_ms is not None else "—"
            code = str(r.status_code) if r.status_code is not None else "—"
            table.add_row(
                r.name,
                r.type.value,
                r.url or "—",
                f"[{style}]{r.status}[/{style}]",
                code,
                elapsed,
                r.details,
            )
        console.print(table)
        summary = batch.summary
        console.print(f"Total: {summary.total}  Success: {summary.success}  Failed: {summary.failed}")

    if not batch.success:
        raise typer.Exit(1)


@app.command()
def services(
    env: Environment | None = typer.Option(None, "--env", "-e", case_sensitive=False, help="Target environment"),
    catalog: Path | None = typer.Option(None, "--catalog", "-c", help="Path to the service catalog"),
) -> None:
    """List the services resolved for an environment."""
    from service_monitor.errors import ConfigLoadError

    try:
        runner = _build_runner(catalog)
        resolved = runner.resolve_services(env)
    except ConfigLoadError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    environment = env or runner.settings.environment
    table = Table(title=f"Services ({environment.value})")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("URL")
    table.add_column("Headers")
    for s in resolved:
        url = s.url or "[yellow]unresolved[/yellow]"
        table.add_row(s.id, s.name, s.type.value, url, ", ".join(sorted(s.headers)) or "—")
    console.print(table)


@app.command()
def environments() -> None:
    """List supported environments, marking the current one."""
    from service_monitor.config.loader import load_settings
    from service_monitor.errors import ConfigLoadError

    try:
        current = load_settings().environment
    except ConfigLoadError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    for e in Environment:
        marker = " [green](current)[/green]" if e == current else ""
        console.print(f"  {e.value}{marker}")


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind host"),
    port: int = typer.Option(3000, help="Bind port"),
) -> None:
    """Start the service monitor API server."""
    import uvicorn

    console.print(f"[bold]Service Monitor[/bold] starting on http://{host}:{port}")
    uvicorn.run("service_monitor.api.app:app", host=host, port=port, reload=False)


config_app = typer.Typer(name="config", help="Catalog commands")
app.add_typer(config_app)


@config_app.command("validate")
def config_validate(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to the service catalog"),
) -> None:
    """Validate the service catalog and check URL resolution per environment."""
    from urllib.parse import urlparse

    from service_monitor.config.environment import EnvironmentStore
    from service_monitor.config.loader import load_catalog, load_settings
    from service_monitor.errors import ConfigLoadError
    from service_monitor.resolver.resolver import ConfigurationResolver

    store = EnvironmentStore.from_os()
    try:
        catalog = load_catalog(path=path or load_settings(store).catalog_path, env=store)
    except ConfigLoadError as exc:
        console.print(f"[red]✗ {exc}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Catalog parses correctly ({len(catalog.services)} services)")

    resolver = ConfigurationResolver(store)
    errors: list[str] = []
    warnings: list[str] = []
    for environment in Environment:
        resolved = resolver.resolve(catalog.services, environment)
        for s in resolved:
            if not s.url:
                warnings.append(f"{environment.value}: service '{s.id}' has no URL")
                continue
            parsed = urlparse(s.url)
            if not parsed.scheme or not parsed.netloc:
                errors.append(f"{environment.value}: service '{s.id}' has invalid URL '{s.url}'")
        console.print(f"[green]✓[/green] {environment.value}: {len(resolved)} service(s) apply")

    for w in warnings:
        console.print(f"[yellow]! {w}[/yellow]")
    if errors:
        for err in errors:
            console.print(f"[red]✗ {err}[/red]")
        console.print(f"\n[red bold]{len(errors)} validation error(s) found.[/red bold]")
        raise typer.Exit(1)
    console.print("\n[green bold]Catalog is valid.[/green bold]")


@config_app.command("show")
def config_show(
    path: Path | None = typer.Option(None, "--path", "-p", help="Path to the service catalog"),
    env: Environment | None = typer.Option(None, "--env", "-e", case_sensitive=False, help="Target environment"),
) -> None:
    """Print the catalog as resolved for an environment."""
    from service_monitor.errors import ConfigLoadError

    try:
        runner = _build_runner(path)
        resolved = runner.resolve_services(env)
    except ConfigLoadError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    environment = env or runner.settings.environment
    console.print(f"[bold]Environment:[/bold] {environment.value}\n")
    for s in resolved:
        console.print(f"  {s.id}: {s.name} [{s.type.value} {s.method}] @ {s.url or 'unresolved'}")
        if s.headers:
            console.print(f"    Headers: {', '.join(sorted(s.headers))}")
        if s.expected_status is not None:
            console.print(f"    Expected status: {s.expected_status}")


def main() -> None:
    app()
