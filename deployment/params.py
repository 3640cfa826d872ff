import time
import typing
from collections import OrderedDict
from typing import Any, List, Optional

from ape.api import AccountAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractContainer, ContractInstance
from web3.auto import w3

from deployment.config import ConfigurationError, NetworkKey, StakingConfig
from deployment.confirm import _confirm_resolution
from deployment.constants import STAKING_CONSTANTS, STAKING_TOKENS, StartTimeSource


def compute_start_time(config: StakingConfig, now: Optional[float] = None) -> int:
    """
    Returns the staking start timestamp (seconds) according to the
    start time source of the config.
    """
    if config.start_time_source == StartTimeSource.FIXED_CONFIGURED:
        start_time = config.constant("START_TIME")
        try:
            return int(start_time)
        except (TypeError, ValueError):
            raise ConfigurationError(f"START_TIME '{start_time}' is not a timestamp.")

    if now is None:
        now = time.time()
    return round(now) + config.start_time_offset


def staking_parameters(config: StakingConfig, start_time: int, network: NetworkKey) -> OrderedDict:
    """
    Returns the Staking constructor parameters in constructor order.
    Token addresses are those configured for the given network.
    """
    parameters = OrderedDict()
    for constant_name, parameter_name in STAKING_CONSTANTS:
        if constant_name == "START_TIME":
            parameters[parameter_name] = start_time
        else:
            parameters[parameter_name] = config.constant(constant_name)

    tokens = config.tokens_for(network)
    (_, dld_name), (_, dls_name) = STAKING_TOKENS
    parameters[dld_name] = tokens.dld
    parameters[dls_name] = tokens.dls
    return parameters


def _validate_constructor_abi_inputs(
    contract_name: str,
    abi_inputs: List[Any],
    resolved_parameters: OrderedDict,
) -> None:
    """Validates the constructor parameters against the constructor ABI."""
    if len(resolved_parameters) != len(abi_inputs):
        raise ConstructorParameters.Invalid(
            f"Constructor parameters length mismatch - "
            f"{contract_name} ABI requires {len(abi_inputs)}, Got {len(resolved_parameters)}."
        )

    # parameter names are positional here; only the types are checked
    codex = enumerate(zip(abi_inputs, resolved_parameters.items()), start=0)
    for position, (abi_input, (name, value)) in codex:
        if not w3.is_encodable(abi_input.type, value):
            raise ConstructorParameters.Invalid(
                f"Constructor param name '{name}' at position {position} has a value '{value}' "
                f"whose type does not match expected ABI type '{abi_input.type}'"
            )


class ConstructorParameters:
    """Represents the resolved constructor parameters of the Staking contract."""

    class Invalid(Exception):
        """Raised when the constructor parameters are invalid"""

    def __init__(self, contract_name: str, parameters: OrderedDict):
        self.contract_name = contract_name
        self.parameters = parameters

    @classmethod
    def from_config(
        cls,
        config: StakingConfig,
        start_time: int,
        network: NetworkKey,
    ) -> "ConstructorParameters":
        parameters = staking_parameters(config=config, start_time=start_time, network=network)
        return cls(contract_name=config.contract_name, parameters=parameters)

    def validate(self, container: ContractContainer) -> None:
        _validate_constructor_abi_inputs(
            contract_name=self.contract_name,
            abi_inputs=container.constructor.abi.inputs,
            resolved_parameters=self.parameters,
        )

    def values(self) -> List[Any]:
        return list(self.parameters.values())


class Deployer:
    """
    Represents an ape account plus validated/annotated deployment execution.
    """

    def __init__(
        self,
        verify: bool = False,
        account: typing.Optional[AccountAPI] = None,
        autosign: bool = False,
    ):
        if account is None:
            self._account = select_account()
        else:
            self._account = account
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self._autosign = autosign
        if hasattr(self._account, "set_autosign"):
            # only keyfile accounts can sign unattended
            self._account.set_autosign(autosign)
        self.verify = verify

    def get_account(self) -> AccountAPI:
        """Returns the deployer account."""
        return self._account

    def _get_kwargs(self) -> typing.Dict[str, Any]:
        """Returns the deployment kwargs."""
        return {"publish": self.verify}

    def deploy(
        self, container: ContractContainer, parameters: ConstructorParameters
    ) -> ContractInstance:
        """Deploys the contract and blocks until the deployment receipt is available."""
        if not self._autosign:
            _confirm_resolution(parameters.parameters, parameters.contract_name)

        return self._account.deploy(container, *parameters.values(), **self._get_kwargs())
