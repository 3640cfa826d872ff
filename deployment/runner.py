import traceback
from enum import Enum
from typing import Callable, NamedTuple, Optional

import click
from ape.contracts.base import ContractContainer, ContractInstance
from ape.exceptions import ContractLogicError

from deployment.config import ConfigurationError, NetworkKey, StakingConfig
from deployment.params import ConstructorParameters, Deployer, compute_start_time
from deployment.utils import ContractNotFound, get_contract_container

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class ErrorKind(Enum):
    CONFIGURATION = "configuration"
    CONTRACT_LOOKUP = "contract lookup"
    INVALID_PARAMETERS = "invalid parameters"
    ABORTED = "aborted"
    REVERTED = "reverted"
    DEPLOYMENT = "deployment"

    @classmethod
    def from_error(cls, error: BaseException) -> "ErrorKind":
        if isinstance(error, ConfigurationError):
            return cls.CONFIGURATION
        if isinstance(error, ContractNotFound):
            return cls.CONTRACT_LOOKUP
        if isinstance(error, ConstructorParameters.Invalid):
            return cls.INVALID_PARAMETERS
        if isinstance(error, click.Abort):
            return cls.ABORTED
        if isinstance(error, ContractLogicError):
            return cls.REVERTED
        return cls.DEPLOYMENT


class DeploymentResult(NamedTuple):
    """Outcome of a single deployment run. Every error is fatal to the run."""

    instance: Optional[ContractInstance] = None
    error: Optional[Exception] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def success(cls, instance: ContractInstance) -> "DeploymentResult":
        return cls(instance=instance)

    @classmethod
    def failure(cls, error: Exception) -> "DeploymentResult":
        return cls(error=error, error_kind=ErrorKind.from_error(error))

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return EXIT_SUCCESS if self.ok else EXIT_FAILURE


def _report_error(error: Exception, kind: ErrorKind) -> None:
    details = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    click.secho(f"Deployment failed ({kind.value}): {error}", fg="red", err=True)
    click.echo(details, err=True)


def deploy_staking(
    config: StakingConfig,
    network: NetworkKey,
    deployer: Deployer,
    now: Optional[float] = None,
    contract_lookup: Callable[[str], ContractContainer] = get_contract_container,
) -> DeploymentResult:
    """
    Deploys the Staking contract to the given network and waits for the deployment
    to be confirmed. Errors are reported and returned, never raised.
    """
    try:
        start_time = compute_start_time(config, now=now)
        print("startTime", start_time)

        parameters = ConstructorParameters.from_config(
            config=config, start_time=start_time, network=network
        )
        container = contract_lookup(config.contract_name)
        parameters.validate(container)

        staking = deployer.deploy(container, parameters)
    except Exception as error:
        result = DeploymentResult.failure(error)
        _report_error(error, result.error_kind)
        return result

    print(f"staking has been deployed to: {staking.address}")
    return DeploymentResult.success(staking)
