"""Loading of pre-compiled Hardhat artifacts.

Hardhat writes one JSON file per contract under
``artifacts/contracts/<Name>.sol/<Name>.json`` holding (among others)
``abi`` and ``bytecode``. Compilation itself happens outside this package.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from armada_bootstrap.core.config import get_artifacts_dir
from armada_bootstrap.core.errors import ArtifactNotFoundError


@dataclass(frozen=True)
class ContractArtifact:
    name: str
    abi: list[dict[str, Any]]
    bytecode: str


def artifact_path(name: str, artifacts_dir: Path | None = None) -> Path:
    root = artifacts_dir if artifacts_dir is not None else get_artifacts_dir()
    return root / f"{name}.sol" / f"{name}.json"


def load_artifact(name: str, artifacts_dir: Path | None = None) -> ContractArtifact:
    path = artifact_path(name, artifacts_dir)
    if not path.exists():
        raise ArtifactNotFoundError(f"Artifact for {name} not found at {path}")

    data = json.loads(path.read_text())
    abi = data.get("abi")
    if not isinstance(abi, list):
        raise ValueError(f"Artifact {path} has no ABI")

    bytecode = str(data.get("bytecode") or "")
    if bytecode and not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    if not bytecode or bytecode == "0x":
        raise ValueError(f"Artifact {path} has empty bytecode (abstract contract?)")

    return ContractArtifact(name=name, abi=abi, bytecode=bytecode)


class ArtifactStore:
    """Lazily loads and caches artifacts from one directory."""

    def __init__(self, artifacts_dir: Path | None = None):
        self.artifacts_dir = artifacts_dir
        self._cache: dict[str, ContractArtifact] = {}

    def get(self, name: str) -> ContractArtifact:
        if name not in self._cache:
            self._cache[name] = load_artifact(name, self.artifacts_dir)
        return self._cache[name]

    def abi_or_none(self, name: str) -> list[dict[str, Any]] | None:
        try:
            return self.get(name).abi
        except ArtifactNotFoundError:
            return None
