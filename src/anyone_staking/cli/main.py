"""CLI for the Anyone staking adapter."""

import asyncio
import json
import logging
from enum import StrEnum

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.traceback import install

# Import all adapters to trigger auto-registration
from anyone_staking import protocols  # noqa: F401
from anyone_staking.core.addresses import checksum_address
from anyone_staking.core.errors import AdapterError, InvalidAddressError
from anyone_staking.core.models import PositionRecord
from anyone_staking.core.registry import AdapterRegistry
from anyone_staking.data import get_all_supported_chains, get_chain_id
from anyone_staking.protocols.anyone import AnyoneStakingAdapter, DropReason
from anyone_staking.rpc.provider import ApeRPCProvider

# Install rich traceback handler
install(show_locals=True)

app = typer.Typer(
    name="anyone-staking",
    help="Read Anyone Protocol staking positions straight from the HodlerV5 contract",
    add_completion=False,
)

console = Console()
logger = logging.getLogger("anyone_staking")


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _configure_logging(debug: bool) -> None:
    """Route package logs through rich when debugging."""
    if not debug:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _connect_to_chain(chain: str) -> ApeRPCProvider:
    """
    Connect to a specific chain.

    Parameters
    ----------
    chain : str
        Chain name

    Returns
    -------
    ApeRPCProvider
        Connected RPC provider

    Raises
    ------
    typer.Exit
        If connection fails

    """
    rpc_provider = ApeRPCProvider(chain=chain)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task(f"Connecting to {chain} network...", total=None)
        try:
            rpc_provider.connect()
            progress.update(task, description=f"✓ Connected to {chain}")
            progress.stop()
            return rpc_provider
        except Exception as e:
            progress.stop()
            console.print(f"[bold red]Failed to connect to {chain}:[/bold red] {e}")
            console.print("[yellow]Make sure you have set WEB3_INFURA_PROJECT_ID environment variable[/yellow]")
            raise typer.Exit(code=1)


def _require_chain(chain: str) -> None:
    """Exit with an error unless the chain is configured in contracts.yaml."""
    if chain not in get_all_supported_chains():
        console.print(f"[bold red]Unsupported chain:[/bold red] {chain}")
        raise typer.Exit(1)


def _build_adapter(chain: str, chain_query=None) -> AnyoneStakingAdapter:
    _require_chain(chain)

    def log_drop(raw: object, reason: DropReason) -> None:
        logger.debug("Dropped stake %r: %s", raw, reason.value)

    return AnyoneStakingAdapter(chain_query=chain_query, chain_id=get_chain_id(chain), on_drop=log_drop)


@app.command()
def positions(
    address: str = typer.Argument(..., help="Wallet address to query"),
    chain: str = typer.Option("ethereum", "--chain", "-c", help="Chain to query"),
    format: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--format",
        "-f",
        help="Output format",
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """
    Get all Anyone staking positions of a wallet address.

    Examples:

        # Get positions
        anyone-staking positions 0xABC...

        # Output as JSON
        anyone-staking positions 0xABC... --format json
    """
    _configure_logging(debug)
    _require_chain(chain)

    try:
        checksum_address(address)
    except InvalidAddressError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    rpc_provider = _connect_to_chain(chain)
    try:
        adapter = _build_adapter(chain, rpc_provider)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Fetching stakes...", total=None)
            records = asyncio.run(adapter.get_positions(address))
            progress.update(task, description=f"✓ Found {len(records)} positions")

        if format == OutputFormat.JSON:
            _output_json([record.model_dump(mode="json") for record in records])
        else:
            _output_positions_table(address, records)

    except AdapterError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if debug:
            raise
        raise typer.Exit(1)
    finally:
        rpc_provider.disconnect()


@app.command()
def tokens(
    chain: str = typer.Option("ethereum", "--chain", "-c", help="Chain of the adapter"),
    format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
) -> None:
    """List the protocol tokens and their underlying tokens."""
    adapter = _build_adapter(chain)
    protocol_tokens = adapter.list_protocol_tokens()

    if format == OutputFormat.JSON:
        _output_json([token.model_dump(mode="json") for token in protocol_tokens])
        return

    table = Table(title="Protocol Tokens", show_header=True, header_style="bold magenta")
    table.add_column("Symbol", style="cyan")
    table.add_column("Address", style="white")
    table.add_column("Decimals", justify="right")
    table.add_column("Underlying", style="green")

    for token in protocol_tokens:
        underlying = ", ".join(t.symbol for t in token.underlying_tokens)
        table.add_row(token.symbol, token.address, str(token.decimals), underlying)

    console.print(table)


@app.command()
def unwrap(
    token_address: str = typer.Argument(..., help="Protocol token address"),
    chain: str = typer.Option("ethereum", "--chain", "-c", help="Chain of the adapter"),
) -> None:
    """Show the exchange rate of a protocol token to its underlying token."""
    adapter = _build_adapter(chain)
    try:
        rate = adapter.unwrap(token_address)
    except AdapterError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _output_json(rate.model_dump(mode="json"))


@app.command()
def details(
    chain: str = typer.Option("ethereum", "--chain", "-c", help="Chain of the adapter"),
) -> None:
    """Show protocol details and the registered adapters."""
    adapter = _build_adapter(chain)
    info = adapter.get_protocol_details()

    summary_table = Table(show_header=False, box=None)
    summary_table.add_column("Label", style="bold")
    summary_table.add_column("Value", style="green")
    summary_table.add_row("Protocol:", f"{info.name} ({info.protocol_id}/{info.product_id})")
    summary_table.add_row("Description:", info.description)
    summary_table.add_row("Chain ID:", str(info.chain_id))
    summary_table.add_row("Position type:", info.position_type.value)
    summary_table.add_row("Site:", info.site_url)
    summary_table.add_row(
        "Adapters:",
        ", ".join(f"{protocol}/{product}" for protocol, product in AdapterRegistry.list_products()),
    )
    console.print(summary_table)


def _output_positions_table(address: str, records: list[PositionRecord]) -> None:
    """Output positions as rich table."""
    if not records:
        console.print("\n[yellow]No positions found[/yellow]")
        return

    table = Table(
        title=f"Stakes for {address[:10]}...{address[-8:]}",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Operator", style="cyan")
    table.add_column("Token", style="green")
    table.add_column("Balance (raw)", style="white", justify="right")
    table.add_column("Underlying", style="yellow")

    for record in records:
        underlying = ", ".join(f"{u.balance_raw} {u.symbol}" for u in record.underlying)
        table.add_row(record.metadata.get("operator", "-"), record.symbol, record.balance_raw, underlying)

    console.print(table)


def _output_json(data: object) -> None:
    """Output data as JSON."""
    console.print_json(json.dumps(data))


if __name__ == "__main__":
    app()
