#!/usr/bin/python3
import sys

import click
from ape import networks
from ape.cli import ConnectedProviderCommand, account_option, network_option

from deployment.config import ConfigurationError, StakingConfig
from deployment.networks import network_key
from deployment.options import (
    autosign_option,
    params_filepath_option,
    start_time_offset_option,
    start_time_source_option,
    verify_option,
)
from deployment.params import Deployer
from deployment.runner import deploy_staking
from deployment.utils import check_plugins


@click.command(cls=ConnectedProviderCommand, name="deploy-staking")
@account_option()
@network_option(required=True)
@params_filepath_option
@start_time_source_option
@start_time_offset_option
@verify_option
@autosign_option
def cli(
    account,
    network,
    params_filepath,
    start_time_source,
    start_time_offset,
    verify,
    auto,
):
    """
    Deploy the Staking contract.

    Example:
    ape run deploy_staking --network bsc:testnet:node --account deployer --verify
    """
    try:
        config = StakingConfig.from_yaml(params_filepath).with_overrides(
            start_time_source=start_time_source,
            start_time_offset=start_time_offset,
        )
    except ConfigurationError as e:
        raise click.ClickException(f"Invalid params file {params_filepath}: {e}")

    check_plugins(verify=verify)
    deployer = Deployer(verify=verify, account=account, autosign=auto)
    active_network = network_key(network.ecosystem.name, network.name)

    click.echo(
        "\n".join(
            [
                f"Account: {deployer.get_account().address}",
                f"Config: {params_filepath}",
                f"Start time source: {config.start_time_source.value}",
                f"Verify: {verify}",
                f"Network: {active_network}",
                f"Chain ID: {networks.provider.chain_id}",
            ]
        )
    )

    result = deploy_staking(config=config, network=active_network, deployer=deployer)
    sys.exit(result.exit_code)


if __name__ == "__main__":
    cli()
