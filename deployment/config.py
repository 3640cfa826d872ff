import typing
from pathlib import Path
from typing import Any, Dict, NamedTuple, Optional

from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from deployment.constants import (
    DEFAULT_START_TIME_OFFSET,
    STAKING_CONSTANTS,
    STAKING_CONTRACT_NAME,
    STAKING_TOKENS,
    StartTimeSource,
)
from deployment.utils import _load_yaml

NetworkKey = str


class ConfigurationError(ValueError):
    """Raised when the params file cannot provide a value the deployment needs"""


class TokenAddresses(NamedTuple):
    """Token contract addresses passed to the Staking constructor for one network."""

    dld: ChecksumAddress
    dls: ChecksumAddress


def _to_address(value: Any, name: str, network: NetworkKey) -> ChecksumAddress:
    try:
        return to_checksum_address(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid {name} '{value}' for network '{network}'.")


def _parse_start_time_source(value: Any) -> StartTimeSource:
    try:
        return StartTimeSource(value)
    except ValueError:
        choices = ", ".join(source.value for source in StartTimeSource)
        raise ConfigurationError(
            f"Unknown start time source '{value}'; expected one of {choices}."
        )


def _parse_start_time_offset(value: Any) -> int:
    try:
        offset = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid start time offset '{value}'; expected seconds.")
    if offset < 0:
        raise ConfigurationError(f"Start time offset must not be negative, got {offset}.")
    return offset


def _section(config: Dict, name: str, required: bool = True) -> Dict:
    """Returns a mapping section of the params file."""
    section = config.get(name)
    if not section:
        if required:
            raise ConfigurationError(f"Params file missing '{name}' field.")
        return dict()
    if not isinstance(section, dict):
        raise ConfigurationError(f"Malformed '{name}' field in params file; expected a mapping.")
    return section


def _parse_networks(networks_config: Dict) -> Dict[NetworkKey, TokenAddresses]:
    token_addresses = dict()
    for network, addresses in networks_config.items():
        if not isinstance(addresses, dict):
            raise ConfigurationError(f"Malformed addresses for network '{network}'.")
        try:
            dld, dls = (addresses[name] for name, _ in STAKING_TOKENS)
        except KeyError as e:
            raise ConfigurationError(f"{e.args[0]} is not set for network '{network}'.")
        token_addresses[network] = TokenAddresses(
            dld=_to_address(dld, "DLD_ADDRESS", network),
            dls=_to_address(dls, "DLS_ADDRESS", network),
        )
    return token_addresses


class StakingConfig:
    """
    Deployment configuration for the Staking contract.

    Holds the constructor constants, the start time policy and the
    token addresses of every network the contract can be deployed to.
    """

    def __init__(
        self,
        constants: Dict[str, Any],
        token_addresses: Dict[NetworkKey, TokenAddresses],
        start_time_source: StartTimeSource = StartTimeSource.COMPUTED_OFFSET,
        start_time_offset: int = DEFAULT_START_TIME_OFFSET,
        contract_name: str = STAKING_CONTRACT_NAME,
        path: Optional[Path] = None,
    ):
        self.constants = constants
        self.token_addresses = token_addresses
        self.start_time_source = start_time_source
        self.start_time_offset = start_time_offset
        self.contract_name = contract_name
        self.path = path

    @classmethod
    def from_dict(cls, config: Dict, path: Optional[Path] = None) -> "StakingConfig":
        if not isinstance(config, dict):
            raise ConfigurationError("Malformed params file.")

        deployment = _section(config, "deployment", required=False)
        constants = _section(config, "constants")

        # START_TIME is only needed by the fixed-configured source
        missing = [
            name for name, _ in STAKING_CONSTANTS if name != "START_TIME" and name not in constants
        ]
        if missing:
            raise ConfigurationError(f"Constants not set in params file: {', '.join(missing)}.")

        networks_config = _section(config, "networks")

        return cls(
            constants=dict(constants),
            token_addresses=_parse_networks(networks_config),
            start_time_source=_parse_start_time_source(
                deployment.get("start_time_source", StartTimeSource.COMPUTED_OFFSET.value)
            ),
            start_time_offset=_parse_start_time_offset(
                deployment.get("start_time_offset", DEFAULT_START_TIME_OFFSET)
            ),
            contract_name=deployment.get("contract", STAKING_CONTRACT_NAME),
            path=path,
        )

    @classmethod
    def from_yaml(cls, filepath: Path) -> "StakingConfig":
        return cls.from_dict(_load_yaml(filepath), path=filepath)

    def with_overrides(
        self,
        start_time_source: typing.Union[str, StartTimeSource, None] = None,
        start_time_offset: Optional[int] = None,
    ) -> "StakingConfig":
        """Returns a copy of this config with the given start time settings replaced."""
        if start_time_source is None:
            start_time_source = self.start_time_source
        elif not isinstance(start_time_source, StartTimeSource):
            start_time_source = _parse_start_time_source(start_time_source)
        if start_time_offset is None:
            start_time_offset = self.start_time_offset
        else:
            start_time_offset = _parse_start_time_offset(start_time_offset)
        return StakingConfig(
            constants=self.constants,
            token_addresses=self.token_addresses,
            start_time_source=start_time_source,
            start_time_offset=start_time_offset,
            contract_name=self.contract_name,
            path=self.path,
        )

    def constant(self, name: str) -> Any:
        try:
            return self.constants[name]
        except KeyError:
            raise ConfigurationError(f"Constant '{name}' not found in params file.")

    def tokens_for(self, network: NetworkKey) -> TokenAddresses:
        """Returns the token addresses configured for the given network."""
        try:
            return self.token_addresses[network]
        except KeyError:
            known = ", ".join(sorted(self.token_addresses)) or "none"
            raise ConfigurationError(
                f"No token addresses configured for network '{network}' (configured: {known})."
            )
