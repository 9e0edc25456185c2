from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from armada_bootstrap.core.constants.contracts import DEFAULT_ROSTER
from armada_bootstrap.core.types import AgentRecord, RosterSlot
from armada_bootstrap.core.utils.wallets import account_from_key


def agent_key_env_name(index: int) -> str:
    return f"AGENT_PRIVATE_KEY_{index}"


def build_roster(
    agent_keys: Sequence[str | None],
    initial_bankroll: int,
    slots: Sequence[RosterSlot] = DEFAULT_ROSTER,
) -> list[AgentRecord]:
    """Pair each roster slot with its key; slots without a key are left out."""
    roster: list[AgentRecord] = []
    for index, slot in enumerate(slots):
        key = agent_keys[index] if index < len(agent_keys) else None
        if not key or not key.strip():
            logger.warning(
                f"{agent_key_env_name(index)} not set, skipping agent {slot.alias}"
            )
            continue
        wallet = account_from_key(key, label=agent_key_env_name(index))
        roster.append(
            AgentRecord(
                index=index,
                alias=slot.alias,
                wallet=wallet,
                role=slot.role,
                initial_bankroll=int(initial_bankroll),
                location=slot.location,
                is_pirate=slot.is_pirate,
            )
        )
    return roster
