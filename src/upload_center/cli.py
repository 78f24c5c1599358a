#!/usr/bin/env python3
"""
Command-line interface for the Upload Center
Each command starts a session, runs one operation and closes the client
"""

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, BarColumn, TextColumn

from .__version__ import __version__
from .config.settings import ClientSettings
from .core.exceptions import UploadCenterError
from .factory import UploadCenterClient, create_client
from .features.registry import FilterSet
from .features.uploads import UploadCandidate
from .utils.formatting import format_file_size, format_timestamp

console = Console()

Operation = Callable[[UploadCenterClient], Awaitable[Any]]


def run_with_client(ctx: click.Context, operation: Operation, needs_session: bool = True) -> Any:
    """Run ``operation`` against a fresh client and report domain errors."""
    async def runner():
        client = ctx.obj["client_factory"](ctx.obj["settings"])
        try:
            if needs_session:
                await client.start()
            return await operation(client)
        finally:
            await client.close()

    try:
        return asyncio.run(runner())
    except UploadCenterError as e:
        console.print(f"[red]❌ {e}[/red]")
        ctx.exit(1)


@click.group()
@click.option("--api-url", envvar="UPLOAD_CENTER_API_URL", help="Upload Center backend URL")
@click.option("--user-api-url", envvar="UPLOAD_CENTER_USER_API_URL", help="Identity endpoint URL")
@click.version_option(__version__, prog_name="upload-center")
@click.pass_context
def cli(ctx, api_url, user_api_url):
    """Upload Center client"""
    ctx.ensure_object(dict)
    overrides = {}
    if api_url:
        overrides["api_url"] = api_url
    if user_api_url:
        overrides["user_api_url"] = user_api_url
    ctx.obj["settings"] = ClientSettings(**overrides)
    ctx.obj.setdefault("client_factory", create_client)


@cli.command()
@click.pass_context
def health(ctx):
    """Check backend health"""
    console.print(Panel.fit("🏥 Health Check", style="bold blue"))

    async def operation(client: UploadCenterClient):
        return await client.health.check()

    status = run_with_client(ctx, operation, needs_session=False)
    if status.is_online:
        console.print(f"[green]✅ Server: {status.server}[/green]")
    else:
        console.print(f"[red]❌ Server: {status.server or 'unknown'}[/red]")
    console.print(f"   Debug mode: {'on' if status.debug_mode else 'off'}")


@cli.command()
@click.pass_context
def whoami(ctx):
    """Show the active user"""
    async def operation(client: UploadCenterClient):
        return client.session.user

    user = run_with_client(ctx, operation)
    console.print(Panel.fit(f"{user.initials}  {user.display_name}", style="bold blue"))
    console.print(f"User: {user.user_name}")
    if user.employee_id:
        console.print(f"Employee ID: {user.employee_id}")
    if user.email_address:
        console.print(f"Email: {user.email_address}")


@cli.group()
def apps():
    """Manage applications"""


@apps.command("list")
@click.option("--search", "-s", help="Only show applications whose name contains this text")
@click.pass_context
def list_apps(ctx, search):
    """List applications"""
    async def operation(client: UploadCenterClient):
        await client.hierarchy.list_applications()
        return client.hierarchy.search_applications(search or "")

    applications = run_with_client(ctx, operation)
    if not applications:
        console.print("[yellow]No applications found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    for application in applications:
        table.add_row(str(application.id), application.name)
    console.print(table)


@apps.command("create")
@click.argument("name")
@click.pass_context
def create_app(ctx, name):
    """Create an application"""
    async def operation(client: UploadCenterClient):
        return await client.hierarchy.create_application(name)

    application = run_with_client(ctx, operation)
    console.print(f"[green]✅ Created application {application.name} (ID {application.id})[/green]")


@cli.group()
def locations():
    """Manage upload locations"""


@locations.command("list")
@click.argument("application_id", type=int)
@click.pass_context
def list_locations(ctx, application_id):
    """List locations of an application"""
    async def operation(client: UploadCenterClient):
        return await client.hierarchy.list_locations(application_id)

    found = run_with_client(ctx, operation)
    if not found:
        console.print("[yellow]No locations found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Path")
    for location in found:
        table.add_row(str(location.id), location.location_name, location.path)
    console.print(table)


@locations.command("create")
@click.argument("application_id", type=int)
@click.argument("name")
@click.argument("path")
@click.pass_context
def create_location(ctx, application_id, name, path):
    """Create a location inside an application"""
    async def operation(client: UploadCenterClient):
        return await client.hierarchy.create_location(application_id, name, path)

    location = run_with_client(ctx, operation)
    console.print(f"[green]✅ Created location {location.location_name} (ID {location.id}) at {location.path}[/green]")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--app", "-a", "application_id", type=int, required=True, help="Target application ID")
@click.option("--location", "-l", "location_id", type=int, required=True, help="Target location ID")
@click.option("--path", "-p", "additional_path", default="", help="Optional sub-path inside the location")
@click.pass_context
def upload(ctx, file, application_id, location_id, additional_path):
    """Upload a file"""
    console.print(Panel.fit("📤 Upload", style="bold blue"))

    async def operation(client: UploadCenterClient):
        controller = client.uploads
        await controller.select_file(UploadCandidate.from_path(file))
        await controller.select_application(application_id)
        await controller.select_location(location_id)
        controller.set_additional_path(additional_path)

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            console=console,
        ) as progress:
            task = progress.add_task(f"Uploading {file.name}", total=100)
            controller.add_progress_listener(lambda value: progress.update(task, completed=value))
            try:
                return await controller.submit()
            except UploadCenterError:
                if controller.last_error:
                    console.print(f"[red]{controller.last_error}[/red]")
                raise

    receipt = run_with_client(ctx, operation)
    console.print(f"[green]✅ Uploaded {receipt.filename} ({format_file_size(receipt.size)})[/green]")
    console.print(f"   Upload ID: {receipt.upload_id}")
    console.print(f"   Location: {receipt.file_location}")


@cli.command()
@click.option("--from-date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Uploaded on or after")
@click.option("--to-date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Uploaded on or before")
@click.option("--search", "-s", help="Filename search text")
@click.option("--app", "-a", "application_id", type=int, help="Application ID")
@click.option("--location", "-l", "location_id", type=int, help="Location ID")
@click.pass_context
def files(ctx, from_date, to_date, search, application_id, location_id):
    """List uploaded files"""
    filters = FilterSet(
        from_date=from_date.date() if from_date else None,
        to_date=to_date.date() if to_date else None,
        search=search,
        application_id=application_id,
        location_id=location_id,
    )

    async def operation(client: UploadCenterClient):
        return await client.registry.query(filters)

    uploads = run_with_client(ctx, operation)
    if not uploads:
        console.print("[yellow]No files found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Filename", style="green")
    table.add_column("Size")
    table.add_column("Uploaded")
    table.add_column("User")
    table.add_column("Downloads", justify="right")
    for item in uploads:
        table.add_row(
            str(item.id),
            item.filename,
            format_file_size(item.size),
            format_timestamp(item.upload_time),
            item.user_id,
            str(item.download_count),
        )
    console.print(table)


@cli.command()
@click.argument("upload_id", type=int)
@click.option("--dest", "-d", "destination", type=click.Path(path_type=Path), help="Target file or directory")
@click.pass_context
def download(ctx, upload_id, destination: Optional[Path]):
    """Download an uploaded file"""
    async def operation(client: UploadCenterClient):
        await client.registry.query()
        return await client.registry.download(upload_id, destination)

    saved = run_with_client(ctx, operation)
    console.print(f"[green]✅ Downloaded to {saved}[/green]")


@cli.command()
@click.argument("upload_id", type=int)
@click.argument("recipient")
@click.pass_context
def share(ctx, upload_id, recipient):
    """Share an uploaded file with another user"""
    async def operation(client: UploadCenterClient):
        return await client.registry.share(upload_id, recipient)

    message = run_with_client(ctx, operation)
    console.print(f"[green]✅ {message}[/green]")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
