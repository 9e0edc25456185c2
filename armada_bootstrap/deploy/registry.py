from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path

from eth_utils import is_hex_address, to_checksum_address
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from armada_bootstrap.core.constants.base import (
    ADDRESSES_FILENAME_TEMPLATE,
    ZERO_ADDRESS,
)
from armada_bootstrap.core.constants.chains import CHAIN_ID_TO_NETWORK
from armada_bootstrap.core.errors import ContractNotFoundError
from armada_bootstrap.core.types import AgentRecord


def normalize_address(address: str) -> str:
    if not isinstance(address, str) or not is_hex_address(address):
        raise ValueError(f"Not a 20-byte hex address: {address!r}")
    checksummed = to_checksum_address(address)
    if checksummed == ZERO_ADDRESS:
        raise ValueError("Zero address is not a valid contract address")
    return checksummed


class AgentWalletEntry(BaseModel):
    index: int
    alias: str
    address: str

    @field_validator("address")
    @classmethod
    def _checksum(cls, v: str) -> str:
        return normalize_address(v)


class DeploymentDocument(BaseModel):
    """On-disk shape of ``deployed-addresses-<chainId>.json``."""

    model_config = ConfigDict(populate_by_name=True)

    network: str | None = None
    chain_id: str = Field(alias="chainId")
    deployer: str | None = None
    timestamp: str | None = None
    addresses: dict[str, str]
    agent_wallets: list[AgentWalletEntry] = Field(
        default_factory=list, alias="agentWallets"
    )

    @field_validator("chain_id", mode="before")
    @classmethod
    def _chain_id_as_str(cls, v: object) -> str:
        return str(v)

    @field_validator("addresses")
    @classmethod
    def _checksum_addresses(cls, v: dict[str, str]) -> dict[str, str]:
        return {name: normalize_address(addr) for name, addr in v.items()}


def addresses_file_path(chain_id: int | str, out_dir: str | Path) -> Path:
    return Path(out_dir) / ADDRESSES_FILENAME_TEMPLATE.format(chain_id=chain_id)


class AddressRegistry:
    """Logical contract name -> deployed address for one run.

    Seeded from a baseline and extended as contracts are deployed. Only the
    runner mutates it; everything else reads through ``get``.
    """

    def __init__(self, baseline: Mapping[str, str] | None = None):
        self._addresses: dict[str, str] = {}
        for name, address in (baseline or {}).items():
            self.set(name, address)

    @classmethod
    def load(cls, path: str | Path) -> AddressRegistry:
        """Restore from a persisted file (document form or a flat name->address map)."""
        data = json.loads(Path(path).read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Address file {path} must contain a JSON object")
        if "addresses" in data:
            return cls(DeploymentDocument.model_validate(data).addresses)
        return cls(data)

    def set(self, name: str, address: str) -> str:
        checksummed = normalize_address(address)
        previous = self._addresses.get(name)
        if previous and previous != checksummed:
            logger.info(f"Registry: {name} {previous} -> {checksummed}")
        self._addresses[name] = checksummed
        return checksummed

    def get(self, name: str) -> str:
        try:
            return self._addresses[name]
        except KeyError:
            raise ContractNotFoundError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._addresses

    def __len__(self) -> int:
        return len(self._addresses)

    @property
    def names(self) -> list[str]:
        return list(self._addresses)

    def as_dict(self) -> dict[str, str]:
        return dict(self._addresses)

    def check_collisions(self) -> dict[str, list[str]]:
        by_address: dict[str, list[str]] = {}
        for name, address in self._addresses.items():
            by_address.setdefault(address, []).append(name)

        collisions = {addr: names for addr, names in by_address.items() if len(names) > 1}
        for address, names in collisions.items():
            logger.warning(
                f"Address {address} is registered under several names: {', '.join(names)}"
            )
        return collisions

    def persist(
        self,
        chain_id: int,
        out_dir: str | Path,
        *,
        network: str | None = None,
        deployer: str | None = None,
        agents: Iterable[AgentRecord] = (),
    ) -> Path:
        """Overwrite the address file for *chain_id* and return its path."""
        document = DeploymentDocument(
            network=network or CHAIN_ID_TO_NETWORK.get(int(chain_id)),
            chain_id=str(chain_id),
            deployer=deployer,
            timestamp=datetime.now(UTC).isoformat(),
            addresses=self.as_dict(),
            agent_wallets=[
                AgentWalletEntry(index=a.index, alias=a.alias, address=a.address)
                for a in agents
            ],
        )

        path = addresses_file_path(chain_id, out_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(document.model_dump(by_alias=True), indent=2) + "\n"
        )
        logger.info(f"Saved {len(self)} addresses to {path}")
        return path
