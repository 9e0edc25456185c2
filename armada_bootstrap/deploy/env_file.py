from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values
from loguru import logger

from armada_bootstrap.core.constants.contracts import CONTRACT_ENV_KEYS
from armada_bootstrap.deploy.registry import AddressRegistry


@dataclass
class EnvPatchResult:
    path: Path
    updated: list[str] = field(default_factory=list)
    appended: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


def read_env_file(path: str | Path) -> dict[str, str]:
    return {k: v for k, v in dotenv_values(path).items() if v is not None}


def contract_env_updates(
    registry: AddressRegistry, env_keys: Mapping[str, str] = CONTRACT_ENV_KEYS
) -> dict[str, str]:
    return {
        env_key: registry.get(name)
        for name, env_key in env_keys.items()
        if name in registry
    }


def patch_env_file(
    path: str | Path,
    updates: Mapping[str, str],
    *,
    append_missing: bool = False,
) -> EnvPatchResult:
    """Rewrite ``KEY=...`` lines of an existing env file in place.

    Only the first line starting with ``KEY=`` is replaced; every other line
    is left exactly as it was. Keys with no such line are reported in
    ``missing`` (and appended only when ``append_missing`` is set).

    Raises ``FileNotFoundError`` when *path* does not exist.
    """
    env_path = Path(path)
    if not env_path.is_file():
        raise FileNotFoundError(f"Env file not found: {env_path}")

    with env_path.open(newline="") as fh:
        content = fh.read()
    newline = "\r\n" if "\r\n" in content else "\n"
    result = EnvPatchResult(path=env_path)

    for key, value in updates.items():
        line = f"{key}={value}"
        pattern = re.compile(rf"^{re.escape(key)}=[^\r\n]*", re.MULTILINE)
        content, count = pattern.subn(lambda _m: line, content, count=1)
        if count:
            result.updated.append(key)
        elif append_missing:
            if content and not content.endswith("\n"):
                content += newline
            content += line + newline
            result.appended.append(key)
        else:
            result.missing.append(key)

    with env_path.open("w", newline="") as fh:
        fh.write(content)

    logger.info(
        f"Patched {env_path}: {len(result.updated)} updated, {len(result.appended)} appended"
    )
    if result.missing:
        logger.warning(
            f"Keys not present in {env_path} and left out: {', '.join(result.missing)}"
        )
    return result
