from armada_bootstrap.core.errors import (
    CallRevertedError,
    ConfigurationError,
    ContractNotFoundError,
    DeploymentError,
)
from armada_bootstrap.core.types import StatusTuple

__all__ = [
    "CallRevertedError",
    "ConfigurationError",
    "ContractNotFoundError",
    "DeploymentError",
    "StatusTuple",
]
