from collections import OrderedDict

import click
from ape.utils import ZERO_ADDRESS


def _confirm_deployment(contract_name: str) -> None:
    """Asks the user to confirm the deployment of a single contract."""
    click.confirm(f"Deploy {contract_name}?", abort=True)


def _confirm_zero_address() -> None:
    click.confirm("Zero Address detected for deployment parameter; Continue?", abort=True)


def _confirm_resolution(resolved_params: OrderedDict, contract_name: str) -> None:
    """
    Shows the resolved constructor parameters for a contract and asks the user
    to confirm them. Raises click.Abort if the user declines.
    """
    click.echo(f"\nConstructor parameters for {contract_name}")
    for name, resolved_value in resolved_params.items():
        click.echo(f"\t{name}={resolved_value}")
    _confirm_deployment(contract_name)
    if ZERO_ADDRESS in resolved_params.values():
        _confirm_zero_address()
