import logging
import sys
import typing as t
from pathlib import Path

import typer
from rich import print
from rich.markup import escape

from .config_loader import load_local_config, load_network_config
from .config_template import DEFAULT_CONFIG_TEMPLATE
from .field_errors import ErrorKind, ValidationError
from .probe import CloudStateProbe
from .validator import ConfigValidator

DEFAULT_CONFIG_FILENAME = "aws-vpc-preflight.config.yaml"

app = typer.Typer(
    add_completion=False,
    help="""
Pre-flight validation of an AWS network configuration against the live account

By default, the CLI looks for 'aws-vpc-preflight.config.yaml' in your current directory.
Use --local-config-file to specify a different config file if needed.
"""
)

_KIND_STYLES = {
    ErrorKind.NOT_FOUND: "red",
    ErrorKind.INVALID: "yellow",
    ErrorKind.INTERNAL: "magenta",
}


def _configure_logging(verbose: bool) -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # botocore is very chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _resolve_local_config(local_config_file: t.Optional[Path]) -> Path:
    if local_config_file is not None:
        return local_config_file

    default_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    if default_path.exists():
        return default_path

    print(f"[red]Error: Config file not found at {default_path}[/red]")
    print("[yellow]Run 'aws-vpc-preflight init' first to create a template config.[/yellow]")
    raise typer.Exit(code=1)


def _build_session(profile: t.Optional[str]):
    import boto3

    return boto3.Session(profile_name=profile) if profile else boto3.Session()


def _build_probe(profile: t.Optional[str], region: t.Optional[str], settings) -> CloudStateProbe:
    from .aws.ec2_probe import Ec2StateProbe

    return Ec2StateProbe.from_session(_build_session(profile), region=region, settings=settings)


def _build_ec2_client(profile: t.Optional[str], region: t.Optional[str], settings):
    return _build_session(profile).client("ec2", region_name=region, config=settings.botocore_config())


def _render_errors(errors: t.List[ValidationError]) -> None:
    from rich.console import Console
    from rich.table import Table

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Detail")
    for i, err in enumerate(errors, start=1):
        style = _KIND_STYLES.get(err.kind, "white")
        table.add_row(
            str(i),
            f"[{style}]{err.kind.value}[/{style}]",
            escape(err.field_path),
            escape(err.bad_value or "-"),
            escape(err.detail),
        )
    Console().print(table)


@app.command()
def init(
    force: bool = typer.Option(False, help="Overwrite an existing config file"),
):
    """Write a commented template config to the current directory."""
    path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    if path.exists() and not force:
        print(f"[yellow]Config already exists at {path}; use --force to overwrite.[/yellow]")
        raise typer.Exit(code=1)
    path.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    print(f"[green]Created config template at[/green] {path}")
    print("[bold]Please edit the file to fill environment-specific values, then run 'aws-vpc-preflight validate'.[/bold]")


@app.command()
def validate(
    local_config_file: t.Optional[Path] = typer.Option(None, exists=True, readable=True, help=f"Path to {DEFAULT_CONFIG_FILENAME}"),
    profile: t.Optional[str] = typer.Option(None, envvar="AWS_PROFILE", help="AWS named profile"),
    region: t.Optional[str] = typer.Option(None, envvar="AWS_REGION", help="AWS region (overrides the config file)"),
    connect_timeout: float = typer.Option(10.0, help="Connect timeout per AWS call, in seconds"),
    read_timeout: float = typer.Option(30.0, help="Read timeout per AWS call, in seconds"),
    max_attempts: int = typer.Option(5, min=1, help="Maximum attempts per AWS call (botocore retries)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Validate the declared network configuration against the live AWS account."""
    from .aws.ec2_probe import ProbeSettings

    _configure_logging(verbose)
    local_config_file = _resolve_local_config(local_config_file)

    print("[bold]Loading local YAML config...[/bold]")
    try:
        loaded = load_network_config(local_config_file)
    except ValueError as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    settings = ProbeSettings(connect_timeout=connect_timeout, read_timeout=read_timeout, max_attempts=max_attempts)
    probe = _build_probe(profile, region or loaded.region, settings)

    print(f"[bold]Validating cluster {loaded.network.cluster_name} against live state...[/bold]")
    errors = ConfigValidator(probe).validate(loaded.network)
    if not errors:
        print("[green]✓ Configuration is consistent with the live network state.[/green]")
        return

    _render_errors(errors)
    print(f"[red]✗ Validation failed with {len(errors)} error(s).[/red]")
    raise typer.Exit(code=1)


@app.command()
def validate_config(
    config_file: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        help="Path to configuration file to validate"
    ),
):
    """Validate a configuration file against the schema without calling AWS.

    Examples:
        aws-vpc-preflight validate-config aws-vpc-preflight.config.yaml
    """
    from rich.console import Console
    from rich.panel import Panel

    console = Console()
    console.print(f"[bold]Validating configuration: {config_file}[/bold]")
    try:
        cfg = load_local_config(config_file)
    except ValueError as e:
        console.print()
        console.print(Panel.fit(
            f"[bold red]✗ Configuration validation failed[/bold red]\n\n{escape(str(e))}",
            title="[red]Validation Error[/red]",
            border_style="red"
        ))
        raise typer.Exit(code=1)

    eip_count = sum(1 for z in cfg.networks.zones if z.elastic_ip_allocation_id)
    console.print()
    console.print(Panel.fit(
        f"[bold green]✓ Configuration is valid![/bold green]\n\n"
        f"[dim]Summary:[/dim]\n"
        f"  • Cluster: {cfg.cluster_name}\n"
        f"  • VPC: {cfg.networks.vpc.id or '(new)'}\n"
        f"  • Zones: {len(cfg.networks.zones)}\n"
        f"  • Elastic IP allocations: {eip_count}\n"
        f"  • Schema version: v{cfg.version}",
        title="[green]Validation Passed[/green]",
        border_style="green"
    ))


@app.command()
def add_route(
    vpc_id: str = typer.Option(..., help="VPC whose route table receives the route"),
    gateway_id: str = typer.Option(..., help="Gateway the route points at (e.g., igw-...)"),
    destination_cidr: str = typer.Option(..., help="Destination CIDR block"),
    profile: t.Optional[str] = typer.Option(None, envvar="AWS_PROFILE", help="AWS named profile"),
    region: t.Optional[str] = typer.Option(None, envvar="AWS_REGION", help="AWS region"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Add a route to the VPC's route table (the VPC must have exactly one)."""
    from .aws.ec2_probe import ProbeSettings
    from .aws.routes import RouteTableLookupError, add_default_route

    _configure_logging(verbose)
    client = _build_ec2_client(profile, region, ProbeSettings())
    try:
        add_default_route(client, vpc_id, gateway_id, destination_cidr)
    except RouteTableLookupError as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)
    print(f"[green]Added route {destination_cidr} -> {gateway_id} in VPC {vpc_id}[/green]")


def main():  # console script entry point
    try:
        app()
    except Exception as e:
        print(f"[red]Error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
