from pathlib import Path

import click

from deployment.constants import DEFAULT_PARAMS_FILEPATH, START_TIME_SOURCES
from deployment.types import MinInt

params_filepath_option = click.option(
    "--params-filepath",
    "-p",
    help="Filepath of the staking deployment params YAML.",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    default=DEFAULT_PARAMS_FILEPATH,
    show_default=True,
)

start_time_source_option = click.option(
    "--start-time-source",
    "-s",
    help="Where the staking start time comes from; overrides the params file.",
    type=click.Choice(START_TIME_SOURCES),
    required=False,
)

start_time_offset_option = click.option(
    "--start-time-offset",
    help="Seconds added to the current time for the computed-offset start time.",
    type=MinInt(0),
    required=False,
)

verify_option = click.option(
    "--verify",
    help="Publish the contract source to the block explorer.",
    is_flag=True,
)

autosign_option = click.option(
    "--auto",
    help="Automatically sign transactions.",
    is_flag=True,
)
