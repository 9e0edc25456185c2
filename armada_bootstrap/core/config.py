import json
import os
from pathlib import Path
from typing import Any

from armada_bootstrap.core.constants.base import DEFAULT_ARTIFACTS_DIR
from armada_bootstrap.core.constants.chains import DEFAULT_RPC_URLS, RPC_URL_ENV_KEYS

_CONFIG_ENV_KEYS = ("ARMADA_CONFIG_PATH", "ARMADA_CONFIG")
_DEFAULT_CONFIG_FILENAME = "config.json"


def _find_project_root(start: Path) -> Path | None:
    cur = start.resolve()
    for parent in [cur, *cur.parents]:
        if (parent / "pyproject.toml").exists():
            return parent
    return None


def _project_root() -> Path | None:
    return _find_project_root(Path.cwd()) or _find_project_root(Path(__file__).parent)


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path is not None:
        return Path(path).expanduser()

    env_path = next(
        (os.getenv(k, "").strip() for k in _CONFIG_ENV_KEYS if os.getenv(k)), ""
    )
    if env_path:
        p = Path(env_path).expanduser()
        if p.is_absolute():
            return p
        root = _project_root()
        return (root / p) if root else p

    root = _project_root()
    return (root / _DEFAULT_CONFIG_FILENAME) if root else Path(_DEFAULT_CONFIG_FILENAME)


def load_config_json(
    path: str | Path | None = None, *, require_exists: bool = False
) -> dict[str, Any]:
    cfg_path = resolve_config_path(path)
    if not cfg_path.exists():
        if require_exists:
            raise FileNotFoundError(f"Config file not found: {cfg_path}")
        return {}
    try:
        return json.loads(cfg_path.read_text())
    except Exception:
        return {}


CONFIG: dict[str, Any] = load_config_json()


def set_config(config: dict[str, Any]) -> None:
    """Replace the global CONFIG dict in-place.

    This allows code that imported CONFIG at module import time to see updates.
    """
    CONFIG.clear()
    CONFIG.update(config)


def load_config(
    path: str | Path | None = None, *, require_exists: bool = False
) -> None:
    """Load config from disk into the global CONFIG dict."""
    set_config(load_config_json(path, require_exists=require_exists))


def get_rpc_urls() -> dict[str, Any]:
    return CONFIG.get("network", {}).get("rpc_urls", {})


def get_rpc_urls_for_chain(chain_id: int) -> list[str]:
    """RPC endpoints for *chain_id*: config.json first, then env, then public defaults."""
    mapping = get_rpc_urls()
    rpcs = mapping.get(str(chain_id))
    if rpcs is None:
        rpcs = mapping.get(chain_id)  # allow int keys
    if rpcs:
        return [rpcs] if isinstance(rpcs, str) else list(rpcs)

    env_key = RPC_URL_ENV_KEYS.get(int(chain_id))
    if env_key and os.getenv(env_key, "").strip():
        return [os.environ[env_key].strip()]

    default = DEFAULT_RPC_URLS.get(int(chain_id))
    return [default] if default else []


def get_artifacts_dir() -> Path:
    network = CONFIG.get("network", {})
    configured = network.get("artifacts_dir")
    if configured:
        return Path(str(configured)).expanduser()
    root = _project_root()
    return (root / DEFAULT_ARTIFACTS_DIR) if root else Path(DEFAULT_ARTIFACTS_DIR)


def get_addresses_dir() -> Path:
    network = CONFIG.get("network", {})
    configured = network.get("addresses_dir")
    if configured:
        return Path(str(configured)).expanduser()
    return _project_root() or Path.cwd()
