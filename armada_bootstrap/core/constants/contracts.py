from __future__ import annotations

from armada_bootstrap.core.constants.chains import CHAIN_ID_MONAD_TESTNET
from armada_bootstrap.core.types import (
    DEPLOYER,
    AgentType,
    ContractSpec,
    Ref,
    RosterSlot,
    UpgradeDefinition,
    WiringStep,
)

ARMADA_TOKEN = "ArmadaToken"
ARMADA_GUILD = "ArmadaGuild"
BATTLE_PASS = "BattlePass"
SHIP_NFT = "ShipNFT"
MANTLE_ARMADA = "MantleArmada"
SEAS_TOKEN = "SEASToken"
AGENT_CONTROLLER = "AgentController"
WAGER_ARENA = "WagerArena"
TOURNAMENT_ARENA = "TournamentArena"
PREDICTION_MARKET = "PredictionMarket"

DEPLOY_ORDER: tuple[ContractSpec, ...] = (
    ContractSpec(ARMADA_TOKEN),
    ContractSpec(ARMADA_GUILD),
    ContractSpec(BATTLE_PASS, (Ref(ARMADA_TOKEN),)),
    ContractSpec(SHIP_NFT, (Ref(ARMADA_TOKEN),)),
    ContractSpec(MANTLE_ARMADA),
    ContractSpec(SEAS_TOKEN),
    ContractSpec(AGENT_CONTROLLER, (Ref(MANTLE_ARMADA), Ref(SEAS_TOKEN))),
    ContractSpec(
        WAGER_ARENA,
        (Ref(MANTLE_ARMADA), Ref(AGENT_CONTROLLER), Ref(SEAS_TOKEN), DEPLOYER),
    ),
    ContractSpec(
        TOURNAMENT_ARENA,
        (Ref(MANTLE_ARMADA), Ref(AGENT_CONTROLLER), Ref(SEAS_TOKEN), DEPLOYER),
    ),
    ContractSpec(PREDICTION_MARKET, (Ref(SEAS_TOKEN), DEPLOYER)),
)

ALL_CONTRACTS: tuple[str, ...] = tuple(spec.name for spec in DEPLOY_ORDER)

# Contracts the agent provisioning phase talks to.
PROVISIONING_CONTRACTS: tuple[str, ...] = (SEAS_TOKEN, AGENT_CONTROLLER, MANTLE_ARMADA)

WIRING_PLAN: tuple[WiringStep, ...] = (
    WiringStep(
        "game-ecosystem",
        MANTLE_ARMADA,
        "setEcosystemContracts",
        (Ref(ARMADA_TOKEN), Ref(ARMADA_GUILD), Ref(BATTLE_PASS), Ref(SHIP_NFT)),
    ),
    WiringStep("guild-game", ARMADA_GUILD, "setGameContract", (Ref(MANTLE_ARMADA),)),
    WiringStep(
        "battlepass-game", BATTLE_PASS, "setGameContract", (Ref(MANTLE_ARMADA),)
    ),
    WiringStep("shipnft-game", SHIP_NFT, "setGameContract", (Ref(MANTLE_ARMADA),)),
    WiringStep(
        "token-minter-game",
        ARMADA_TOKEN,
        "addMinter",
        (Ref(MANTLE_ARMADA), MANTLE_ARMADA),
    ),
    WiringStep(
        "token-minter-battlepass",
        ARMADA_TOKEN,
        "addMinter",
        (Ref(BATTLE_PASS), BATTLE_PASS),
    ),
    WiringStep(
        "token-minter-shipnft",
        ARMADA_TOKEN,
        "addMinter",
        (Ref(SHIP_NFT), SHIP_NFT),
    ),
    WiringStep("game-arena", MANTLE_ARMADA, "setArenaContract", (Ref(WAGER_ARENA),)),
    WiringStep(
        "controller-arena", AGENT_CONTROLLER, "setWagerArena", (Ref(WAGER_ARENA),)
    ),
    WiringStep(
        "market-arena", PREDICTION_MARKET, "setWagerArena", (Ref(WAGER_ARENA),)
    ),
    WiringStep(
        "arena-market",
        WAGER_ARENA,
        "setPredictionMarket",
        (Ref(PREDICTION_MARKET),),
    ),
)

# (producer, consumer): the producer step must run before the consumer step.
WIRING_DEPENDENCIES: tuple[tuple[str, str], ...] = (
    ("game-ecosystem", "guild-game"),
    ("game-ecosystem", "battlepass-game"),
    ("game-ecosystem", "shipnft-game"),
    ("game-ecosystem", "token-minter-game"),
    ("battlepass-game", "token-minter-battlepass"),
    ("shipnft-game", "token-minter-shipnft"),
    ("game-arena", "controller-arena"),
    ("controller-arena", "market-arena"),
    ("market-arena", "arena-market"),
)

DEFAULT_ROSTER: tuple[RosterSlot, ...] = (
    RosterSlot("Blackbeard", AgentType.AGGRESSIVE_RAIDER, 10, True),
    RosterSlot("Ironclad", AgentType.DEFENSIVE_TRADER, 30, False),
    RosterSlot("TheGhost", AgentType.ADAPTIVE_LEARNER, 50, True),
    RosterSlot("Admiralty", AgentType.GUILD_COORDINATOR, 70, False),
    RosterSlot("Tempest", AgentType.BALANCED_ADMIRAL, 90, True),
)

DEFAULT_UPGRADES: tuple[UpgradeDefinition, ...] = (
    UpgradeDefinition("Hull Reinforcement", 100, max_hp_bonus=25, defense_bonus=5),
    UpgradeDefinition("Cannon Battery", 150, attack_bonus=8),
    UpgradeDefinition("Speed Sails", 120, speed_bonus=2),
    UpgradeDefinition("Crew Quarters", 200, max_crew_bonus=10),
    UpgradeDefinition("GPM Engine I", 300, gpm_bonus=5),
    UpgradeDefinition("GPM Engine II", 600, gpm_bonus=10),
    UpgradeDefinition("Battle Armor", 250, max_hp_bonus=50, defense_bonus=10),
    UpgradeDefinition("Master Cannons", 400, attack_bonus=15),
)

CONTRACT_ENV_KEYS: dict[str, str] = {
    MANTLE_ARMADA: "NEXT_PUBLIC_GAME_CONTRACT_ADDRESS",
    ARMADA_TOKEN: "NEXT_PUBLIC_ARMADA_TOKEN_ADDRESS",
    ARMADA_GUILD: "NEXT_PUBLIC_GUILD_CONTRACT_ADDRESS",
    BATTLE_PASS: "NEXT_PUBLIC_BATTLE_PASS_ADDRESS",
    SHIP_NFT: "NEXT_PUBLIC_SHIP_NFT_ADDRESS",
    SEAS_TOKEN: "NEXT_PUBLIC_SEAS_TOKEN_ADDRESS",
    AGENT_CONTROLLER: "NEXT_PUBLIC_AGENT_CONTROLLER_ADDRESS",
    WAGER_ARENA: "NEXT_PUBLIC_WAGER_ARENA_ADDRESS",
    TOURNAMENT_ARENA: "NEXT_PUBLIC_TOURNAMENT_ARENA_ADDRESS",
    PREDICTION_MARKET: "NEXT_PUBLIC_PREDICTION_MARKET_ADDRESS",
}

# Last known live deployment, used as the default baseline.
BASELINE_ADDRESSES: dict[int, dict[str, str]] = {
    CHAIN_ID_MONAD_TESTNET: {
        ARMADA_TOKEN: "0x838a6bd4CC99734c0b74b00eDCbC45E316dAC3A2",
        ARMADA_GUILD: "0x88c34fea34fd972F998Bc9115ba6D7F3f2f283E8",
        BATTLE_PASS: "0x4d20A8400295F55470eDdE8bdfD65161eDd7B9FB",
        SHIP_NFT: "0x6dfC9E05C4A24D4cF72e98f31Da1200032fE37eC",
        MANTLE_ARMADA: "0x13733EFB060e4427330F4Aeb0C46550EAE16b772",
        SEAS_TOKEN: "0x91DBBCc719a8F34c273a787D0014EDB9d456cdf6",
        AGENT_CONTROLLER: "0x81f2d233a13859046d45BDCE0F5CF58C60774ADb",
        WAGER_ARENA: "0x1800887213B863Cebd7F067B7ED08f03F02445C9",
        TOURNAMENT_ARENA: "0xac8DfFBCF084bb67c94D75C826ed2701456de29C",
        PREDICTION_MARKET: "0x9d84b98DBE548e6309D70633cA5680631d00588f",
    },
}

# Index of hp / maxHp in the MantleArmada.accounts(address) tuple.
ACCOUNT_HP_INDEX = 4
ACCOUNT_MAX_HP_INDEX = 5
