"""CLI for browser-launcher -- find the browsers this machine can run tests in."""

import json
import logging
from typing import List, Optional

import httpx
import typer

from browser_launcher.catalog import catalog_for
from browser_launcher.config import LaunchConfig
from browser_launcher.context import LaunchContext, ResolutionContext, normalize_platform
from browser_launcher.launcher import build_command, find_browser, launch_browser
from browser_launcher.resolver import available_browsers

app = typer.Typer(name="browser-launcher", help="Discover and launch local browsers for test runs.")

INVENTORY_URL = "http://127.0.0.1:18322"
DEFAULT_URL = "about:blank"


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log probe results")):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _print_browsers(entries: list[dict], as_json: bool):
    if as_json:
        typer.echo(json.dumps(entries, indent=2))
        return
    if not entries:
        typer.secho("No browsers found.", fg=typer.colors.YELLOW)
        return
    for entry in entries:
        typer.echo(f"{entry['name']:<15} {entry['exe'] or entry['executables'][0]}")


def _fetch_remote(base_url: str, platform: Optional[str]) -> list[dict]:
    """Ask a running inventory server for its available browsers."""
    params = {"platform": platform} if platform else {}
    with httpx.Client(base_url=base_url, timeout=30.0) as client:
        resp = client.get("/browsers", params=params)
        resp.raise_for_status()
        return resp.json()["browsers"]


def _resolve_one(name: str, platform: Optional[str]):
    platform = normalize_platform(platform)
    browser = find_browser(available_browsers(platform, ResolutionContext.from_environment(platform)), name)
    if browser is None:
        typer.secho(f"Browser not available: {name}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    return browser


def _launch_context(url: str, debug_port: Optional[int], headless_args: Optional[List[str]]) -> LaunchContext:
    return LaunchContext(url=url, config=LaunchConfig.from_options(debug_port=debug_port, args=headless_args))


@app.command("list")
def list_browsers(
    platform: Optional[str] = typer.Option(None, help="Platform id (defaults to this machine)"),
    as_json: bool = typer.Option(False, "--json", help="Print descriptors as JSON"),
    remote: bool = typer.Option(False, "--remote", help="Query a running inventory server instead"),
):
    """List the browsers that can be launched here."""
    if remote:
        try:
            entries = _fetch_remote(INVENTORY_URL, platform)
        except httpx.ConnectError:
            typer.secho("Inventory server is not running.", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
    else:
        platform = normalize_platform(platform)
        found = available_browsers(platform, ResolutionContext.from_environment(platform))
        entries = [b.to_dict() for b in found]
    _print_browsers(entries, as_json)


@app.command()
def catalog(
    platform: Optional[str] = typer.Option(None, help="Platform id (defaults to this machine)"),
    as_json: bool = typer.Option(False, "--json", help="Print descriptors as JSON"),
):
    """Show the full catalog for a platform without probing."""
    platform = normalize_platform(platform)
    entries = [b.to_dict() for b in catalog_for(platform, ResolutionContext.from_environment(platform))]
    _print_browsers(entries, as_json)


@app.command()
def command(
    name: str = typer.Argument(help="Browser name, e.g. Firefox"),
    url: str = typer.Option(DEFAULT_URL, help="URL the browser should open"),
    debug_port: Optional[int] = typer.Option(None, help="Remote debugger port for the headless engine"),
    headless_arg: Optional[List[str]] = typer.Option(None, "--headless-arg", help="Raw argument for the headless engine"),
    platform: Optional[str] = typer.Option(None, help="Platform id (defaults to this machine)"),
):
    """Print the command line that would launch a browser."""
    browser = _resolve_one(name, platform)
    args = build_command(browser, _launch_context(url, debug_port, headless_arg))
    typer.echo(" ".join(args))


@app.command()
def launch(
    name: str = typer.Argument(help="Browser name, e.g. Firefox"),
    url: str = typer.Option(DEFAULT_URL, help="URL the browser should open"),
    debug_port: Optional[int] = typer.Option(None, help="Remote debugger port for the headless engine"),
    headless_arg: Optional[List[str]] = typer.Option(None, "--headless-arg", help="Raw argument for the headless engine"),
):
    """Reset a browser's state and launch it. Waits until it exits."""
    browser = _resolve_one(name, None)
    proc = launch_browser(browser, _launch_context(url, debug_port, headless_arg))
    typer.echo(f"{browser.name} PID: {proc.pid}")

    typer.echo("Press Ctrl+C to stop.")
    try:
        proc.wait()
    except KeyboardInterrupt:
        typer.echo("Shutting down...")
        proc.terminate()


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind the inventory server"),
    port: int = typer.Option(18322, help="Port for the inventory server"),
):
    """Start the inventory server."""
    from browser_launcher.inventory.server import run_server

    typer.echo(f"Starting inventory server on {host}:{port}")
    typer.echo("Press Ctrl+C to stop.")
    run_server(host=host, port=port)


if __name__ == "__main__":
    app()
