from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from eth_account.signers.local import LocalAccount
from loguru import logger

from armada_bootstrap.core.clients.RemoteCallClient import RemoteCallClient
from armada_bootstrap.core.constants.contracts import WIRING_DEPENDENCIES, WIRING_PLAN
from armada_bootstrap.core.errors import CallRevertedError, WiringPlanError, WiringStepError
from armada_bootstrap.core.types import Ref, WiringStep


@dataclass(frozen=True)
class WiringOutcome:
    step: WiringStep
    tx_hash: str


def select_steps(
    plan: Sequence[WiringStep], keys: Iterable[str] | None
) -> list[WiringStep]:
    """Restrict *plan* to *keys*, keeping plan order. ``None`` keeps everything."""
    if keys is None:
        return list(plan)
    wanted = list(keys)
    known = {step.key for step in plan}
    unknown = [key for key in wanted if key not in known]
    if unknown:
        raise WiringPlanError(f"Unknown wiring step(s): {', '.join(unknown)}")
    return [step for step in plan if step.key in wanted]


def validate_plan(
    plan: Sequence[WiringStep],
    available: Collection[str],
    dependencies: Iterable[tuple[str, str]] = WIRING_DEPENDENCIES,
) -> None:
    """Check a plan before anything is submitted.

    Every contract a step touches must be available (baseline or deployed
    earlier in the run), step keys must be unique, and for each
    ``(producer, consumer)`` pair where both steps are in the plan the
    producer must come first. Pairs whose producer is absent from the plan
    are treated as already applied.
    """
    positions: dict[str, int] = {}
    for index, step in enumerate(plan):
        if step.key in positions:
            raise WiringPlanError(f"Duplicate wiring step key: {step.key}")
        positions[step.key] = index

    problems: list[str] = []
    for step in plan:
        missing = [name for name in step.references() if name not in available]
        if missing:
            problems.append(
                f"{step.key} references unavailable contract(s): {', '.join(missing)}"
            )

    for producer, consumer in dependencies:
        if producer not in positions or consumer not in positions:
            continue
        if positions[producer] > positions[consumer]:
            problems.append(f"{consumer} is ordered before its dependency {producer}")

    if problems:
        raise WiringPlanError("Invalid wiring plan: " + "; ".join(problems))


class WiringOrchestrator:
    """Runs wiring steps one at a time, each confirmed before the next.

    A rejected step aborts the run; nothing is retried or skipped.
    """

    def __init__(
        self,
        client: RemoteCallClient,
        signer: LocalAccount,
    ):
        self.client = client
        self.signer = signer
        self.logger = logger.bind(phase="wiring")

    def _resolve(self, arg: Any) -> Any:
        if isinstance(arg, Ref):
            return self.client.address_of(arg.name)
        return arg

    async def run(self, plan: Sequence[WiringStep] = WIRING_PLAN) -> list[WiringOutcome]:
        outcomes: list[WiringOutcome] = []
        total = len(plan)
        for index, step in enumerate(plan, start=1):
            description = step.describe()
            self.logger.info(f"[{index}/{total}] {description}")
            args = [self._resolve(arg) for arg in step.args]
            try:
                receipt = await self.client.submit(
                    step.source, step.operation, args, signer=self.signer
                )
            except CallRevertedError as exc:
                self.logger.error(f"Wiring step {step.key} failed: {exc.reason}")
                raise WiringStepError(step.key, description, exc.reason) from exc
            outcomes.append(WiringOutcome(step=step, tx_hash=receipt.tx_hash))

        self.logger.info(f"All {total} wiring steps applied")
        return outcomes
