from armada_bootstrap.deploy.env_file import EnvPatchResult, patch_env_file
from armada_bootstrap.deploy.provisioner import (
    AgentProvisioner,
    ProvisionResult,
    ProvisionStatus,
)
from armada_bootstrap.deploy.registry import AddressRegistry
from armada_bootstrap.deploy.runner import (
    DeploymentRunner,
    DeploymentSummary,
    select_deployer,
)
from armada_bootstrap.deploy.settings import DeploymentConfig
from armada_bootstrap.deploy.wiring import WiringOrchestrator, validate_plan

__all__ = [
    "AddressRegistry",
    "AgentProvisioner",
    "DeploymentConfig",
    "DeploymentRunner",
    "DeploymentSummary",
    "EnvPatchResult",
    "ProvisionResult",
    "ProvisionStatus",
    "WiringOrchestrator",
    "patch_env_file",
    "select_deployer",
    "validate_plan",
]
