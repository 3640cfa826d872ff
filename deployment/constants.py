from enum import Enum
from pathlib import Path

#
# Filesystem
#

DEPLOYMENT_DIR = Path(__file__).parent
CONSTRUCTOR_PARAMS_DIR = DEPLOYMENT_DIR / "constructor_params"

DEFAULT_PARAMS_FILEPATH = CONSTRUCTOR_PARAMS_DIR / "staking.yml"

#
# Networks
#

LOCAL_BLOCKCHAIN_ENVIRONMENTS = ["local"]

#
# Contracts
#

STAKING_CONTRACT_NAME = "Staking"

# Seconds added to the wall clock when the start time is computed
DEFAULT_START_TIME_OFFSET = 60


class StartTimeSource(Enum):
    COMPUTED_OFFSET = "computed-offset"
    FIXED_CONFIGURED = "fixed-configured"


START_TIME_SOURCES = [source.value for source in StartTimeSource]

#
# Constructor
#

# Constant name -> constructor parameter name, in constructor order.
# The token addresses come from the per-network section of the params file.
STAKING_CONSTANTS = (
    ("REWARDS_PER_EPOCH", "rewardsPerEpoch"),
    ("START_TIME", "startTime"),
    ("EPOCH_DURATION", "epochDuration"),
    ("HALVING_DURATION", "halvingDuration"),
    ("FINE_DURATION", "fineDuration"),
    ("FINE_PERCENTAGE", "finePercentage"),
)

STAKING_TOKENS = (
    ("DLD_ADDRESS", "dldAddress"),
    ("DLS_ADDRESS", "dlsAddress"),
)
