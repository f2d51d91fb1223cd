"""Command-line interface for inspecting and sending requests."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import os
from collections.abc import Mapping

import typer
from rich.console import Console
from rich.table import Table

from requestkit.client import Client
from requestkit.config import ClientConfig
from requestkit.errors import BuildError, ConfigError, TransportError
from requestkit.methods import HTTPMethod
from requestkit.request import NO_PAYLOAD, BuiltRequest, Request
from requestkit.transport import Response

app = typer.Typer(
    name="requestkit",
    help="Build and send JSON API requests.",
    no_args_is_help=True,
)

console = Console()

PATH_ARG = typer.Argument(..., help="Request path, e.g. /users/1337")
METHOD_OPT = typer.Option("GET", "--method", "-X", help="HTTP method")
HEADER_OPT = typer.Option(None, "--header", "-H", help="Header as 'Name: value' (repeatable)")
QUERY_OPT = typer.Option(None, "--query", "-q", help="Query item as 'key=value' (repeatable)")
DATA_OPT = typer.Option(None, "--data", "-d", help="JSON payload for POST/PUT/PATCH")
HOST_OPT = typer.Option(None, "--host", help="Override the target host")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Build and send JSON API requests."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command("build")
def build_cmd(
    path: str = PATH_ARG,
    method: str = METHOD_OPT,
    header: list[str] | None = HEADER_OPT,
    query: list[str] | None = QUERY_OPT,
    data: str | None = DATA_OPT,
    host: str | None = HOST_OPT,
) -> None:
    """Print the request that would be sent, without sending it."""
    request = _make_request(path, method, header, query, data, host)
    config = _load_config()

    try:
        built = request.build(default_headers=config.default_headers, default_host=config.host)
    except BuildError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from None

    _print_built(built)


@app.command("fetch")
def fetch_cmd(
    path: str = PATH_ARG,
    method: str = METHOD_OPT,
    header: list[str] | None = HEADER_OPT,
    query: list[str] | None = QUERY_OPT,
    data: str | None = DATA_OPT,
    host: str | None = HOST_OPT,
) -> None:
    """Send the request and print the response."""
    request = _make_request(path, method, header, query, data, host)
    config = _load_config()

    try:
        response = asyncio.run(_send(request, config))
    except (BuildError, TransportError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from None

    _print_response(response)


async def _send(request: Request, config: ClientConfig) -> Response:
    async with Client(config=config) as client:
        if request.has_payload:
            return await client.send(request.payload, request)
        return await client.fetch(request)


def _load_config() -> ClientConfig:
    try:
        return ClientConfig.from_env(os.environ)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from None


def _make_request(
    path: str,
    method: str,
    headers: list[str] | None,
    queries: list[str] | None,
    data: str | None,
    host: str | None,
) -> Request:
    try:
        http_method = HTTPMethod.parse(method)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--method") from None

    parsed_headers: dict[str, str] = {}
    for raw in headers or []:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise typer.BadParameter(f"Expected 'Name: value', got {raw!r}", param_hint="--header")
        parsed_headers[name.strip()] = value.strip()

    query_items: list[tuple[str, str | None]] = []
    for raw in queries or []:
        key, sep, value = raw.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected 'key=value', got {raw!r}", param_hint="--query")
        query_items.append((key, value))

    payload = NO_PAYLOAD
    if data is not None:
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as e:
            raise typer.BadParameter(f"Invalid JSON: {e}", param_hint="--data") from None

    return Request(
        path=path,
        method=http_method,
        query_items=query_items or None,
        headers=parsed_headers,
        host=host,
        payload=payload,
    )


def _print_built(built: BuiltRequest) -> None:
    console.print(f"[cyan]{built.method}[/cyan] {built.url}")
    _print_headers("Request Headers", built.headers)
    if built.body is not None:
        console.print_json(built.body.decode("utf-8"))


def _print_response(response: Response) -> None:
    style = "green" if response.ok else "yellow"
    console.print(f"[{style}]{response.status_code}[/{style}] {response.url or ''}")
    _print_headers("Response Headers", response.headers)
    if not response.data:
        return
    if "json" in response.content_type:
        with contextlib.suppress(ValueError):
            console.print_json(response.text)
            return
    console.print(response.text, markup=False)


def _print_headers(title: str, headers: Mapping[str, str]) -> None:
    table = Table(title=title)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    for name, value in headers.items():
        table.add_row(name, value)
    console.print(table)


if __name__ == "__main__":
    app()
