from __future__ import annotations


class DeploymentError(RuntimeError):
    """Fatal error: the run stops and nothing further is persisted."""


class ConfigurationError(DeploymentError):
    pass


class ContractNotFoundError(LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No address registered for contract {name!r}")


class CallRevertedError(RuntimeError):
    """A submitted call was rejected by the ledger (revert, estimation or signing failure)."""

    def __init__(self, contract: str, method: str, reason: str):
        self.contract = contract
        self.method = method
        self.reason = reason
        super().__init__(f"{contract}.{method} failed: {reason}")


class ContractDeployError(DeploymentError):
    def __init__(self, contract: str, reason: str):
        self.contract = contract
        self.reason = reason
        super().__init__(f"Deploying {contract} failed: {reason}")


class WiringPlanError(DeploymentError):
    pass


class WiringStepError(DeploymentError):
    def __init__(self, step_key: str, description: str, reason: str):
        self.step_key = step_key
        self.description = description
        self.reason = reason
        super().__init__(f"Wiring step {step_key} ({description}) failed: {reason}")


class ArtifactNotFoundError(FileNotFoundError):
    pass
