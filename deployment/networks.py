from ape import networks

from deployment.constants import LOCAL_BLOCKCHAIN_ENVIRONMENTS


def network_key(ecosystem_name: str, network_name: str) -> str:
    """Returns the identifier used to look up per-network configuration."""
    return f"{ecosystem_name}:{network_name}"


def is_local_network() -> bool:
    return networks.provider.network.name in LOCAL_BLOCKCHAIN_ENVIRONMENTS
