__version__ = "0.1.0"

from armada_bootstrap.core import (
    CallRevertedError,
    ConfigurationError,
    DeploymentError,
    StatusTuple,
)

__all__ = [
    "__version__",
    "CallRevertedError",
    "ConfigurationError",
    "DeploymentError",
    "StatusTuple",
]
