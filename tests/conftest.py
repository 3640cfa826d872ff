from collections import OrderedDict
from types import SimpleNamespace

import pytest

from deployment.config import StakingConfig
from deployment.params import Deployer

# Common constants
ONE_DAY = 24 * 60 * 60
NETWORK = "bsc:testnet"
DLD_ADDRESS = "0x1111111111111111111111111111111111111111"
DLS_ADDRESS = "0x2222222222222222222222222222222222222222"
STAKING_ADDRESS = "0x3333333333333333333333333333333333333333"
REWARDS_PER_EPOCH = 1000 * 10**18
START_TIME = 1672531200
EPOCH_DURATION = ONE_DAY
HALVING_DURATION = 365 * ONE_DAY
FINE_DURATION = 30 * ONE_DAY
FINE_PERCENTAGE = 10

STAKING_CONSTRUCTOR_ABI = OrderedDict(
    [
        ("rewardsPerEpoch", "uint256"),
        ("startTime", "uint256"),
        ("epochDuration", "uint256"),
        ("halvingDuration", "uint256"),
        ("fineDuration", "uint256"),
        ("finePercentage", "uint256"),
        ("dldAddress", "address"),
        ("dlsAddress", "address"),
    ]
)


class FakeAccount:
    """Stands in for an ape account; records deployments instead of sending them."""

    address = "0x4444444444444444444444444444444444444444"

    def __init__(self, error=None):
        self.error = error
        self.deployments = []

    def deploy(self, container, *args, **kwargs):
        self.deployments.append((container, list(args), kwargs))
        if self.error:
            raise self.error
        return SimpleNamespace(address=STAKING_ADDRESS, contract_type=container.contract_type)


def make_container(abi=STAKING_CONSTRUCTOR_ABI, name="Staking"):
    inputs = [SimpleNamespace(name=n, type=t) for n, t in abi.items()]
    return SimpleNamespace(
        contract_type=SimpleNamespace(name=name),
        constructor=SimpleNamespace(abi=SimpleNamespace(inputs=inputs)),
    )


# Fixtures
@pytest.fixture
def params():
    return {
        "deployment": {"name": "staking", "contract": "Staking"},
        "constants": {
            "REWARDS_PER_EPOCH": REWARDS_PER_EPOCH,
            "START_TIME": START_TIME,
            "EPOCH_DURATION": EPOCH_DURATION,
            "HALVING_DURATION": HALVING_DURATION,
            "FINE_DURATION": FINE_DURATION,
            "FINE_PERCENTAGE": FINE_PERCENTAGE,
        },
        "networks": {
            NETWORK: {"DLD_ADDRESS": DLD_ADDRESS, "DLS_ADDRESS": DLS_ADDRESS},
        },
    }


@pytest.fixture
def staking_config(params):
    return StakingConfig.from_dict(params)


@pytest.fixture
def staking_container():
    return make_container()


@pytest.fixture
def account():
    return FakeAccount()


@pytest.fixture
def deployer(account):
    return Deployer(account=account, autosign=True)
