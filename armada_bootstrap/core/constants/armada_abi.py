from __future__ import annotations

from typing import Any

# Minimal ABIs for the calls the bootstrap issues. Full ABIs (and bytecode)
# come from the Hardhat artifacts when those are available.

_SET_GAME_CONTRACT: dict[str, Any] = {
    "type": "function",
    "name": "setGameContract",
    "stateMutability": "nonpayable",
    "inputs": [{"name": "_gameContract", "type": "address"}],
    "outputs": [],
}

_SET_WAGER_ARENA: dict[str, Any] = {
    "type": "function",
    "name": "setWagerArena",
    "stateMutability": "nonpayable",
    "inputs": [{"name": "_wagerArena", "type": "address"}],
    "outputs": [],
}

_OWNER: dict[str, Any] = {
    "type": "function",
    "name": "owner",
    "stateMutability": "view",
    "inputs": [],
    "outputs": [{"type": "address"}],
}

ARMADA_TOKEN_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "addMinter",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "minter", "type": "address"},
            {"name": "reason", "type": "string"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "checkMinter",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"type": "bool"}],
    },
    _OWNER,
]

ARMADA_GUILD_ABI: list[dict[str, Any]] = [_SET_GAME_CONTRACT, _OWNER]

BATTLE_PASS_ABI: list[dict[str, Any]] = [_SET_GAME_CONTRACT, _OWNER]

SHIP_NFT_ABI: list[dict[str, Any]] = [_SET_GAME_CONTRACT, _OWNER]

MANTLE_ARMADA_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "setEcosystemContracts",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_armadaToken", "type": "address"},
            {"name": "_guildContract", "type": "address"},
            {"name": "_battlePassContract", "type": "address"},
            {"name": "_shipNFTContract", "type": "address"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "setArenaContract",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "_arena", "type": "address"}],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "addUpgrade",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "name", "type": "string"},
            {"name": "cost", "type": "uint256"},
            {"name": "gpmBonus", "type": "uint256"},
            {"name": "maxHpBonus", "type": "uint256"},
            {"name": "speedBonus", "type": "uint256"},
            {"name": "attackBonus", "type": "uint256"},
            {"name": "defenseBonus", "type": "uint256"},
            {"name": "maxCrewBonus", "type": "uint256"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "createAccount",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "boatName", "type": "string"},
            {"name": "isPirate", "type": "bool"},
            {"name": "startLocation", "type": "uint256"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "accounts",
        "stateMutability": "view",
        "inputs": [{"name": "", "type": "address"}],
        "outputs": [
            {"name": "boatName", "type": "string"},
            {"name": "isPirate", "type": "bool"},
            {"name": "gold", "type": "uint256"},
            {"name": "diamonds", "type": "uint256"},
            {"name": "hp", "type": "uint256"},
            {"name": "maxHp", "type": "uint256"},
            {"name": "speed", "type": "uint256"},
            {"name": "attack", "type": "uint256"},
            {"name": "defense", "type": "uint256"},
            {"name": "crew", "type": "uint256"},
            {"name": "maxCrew", "type": "uint256"},
            {"name": "location", "type": "uint256"},
            {"name": "gpm", "type": "uint256"},
            {"name": "lastCheckIn", "type": "uint256"},
            {"name": "checkInStreak", "type": "uint256"},
            {"name": "lastWrecked", "type": "uint256"},
            {"name": "travelEnd", "type": "uint256"},
            {"name": "lastGPMClaim", "type": "uint256"},
            {"name": "repairEnd", "type": "uint256"},
        ],
    },
    {
        "type": "function",
        "name": "nextUpgradeId",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"type": "uint256"}],
    },
    _OWNER,
]

SEAS_TOKEN_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"type": "uint256"}],
    },
    {
        "type": "function",
        "name": "allowance",
        "stateMutability": "view",
        "inputs": [
            {"name": "owner", "type": "address"},
            {"name": "spender", "type": "address"},
        ],
        "outputs": [{"type": "uint256"}],
    },
    {
        "type": "function",
        "name": "approve",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "spender", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"type": "bool"}],
    },
    {
        "type": "function",
        "name": "transfer",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"type": "bool"}],
    },
    {
        "type": "function",
        "name": "mint",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "claimFaucet",
        "stateMutability": "nonpayable",
        "inputs": [],
        "outputs": [],
    },
]

AGENT_CONTROLLER_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "isRegistered",
        "stateMutability": "view",
        "inputs": [{"name": "", "type": "address"}],
        "outputs": [{"type": "bool"}],
    },
    {
        "type": "function",
        "name": "registerAgent",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "agentType", "type": "uint8"},
            {"name": "initialBankroll", "type": "uint256"},
            {"name": "agentAlias", "type": "string"},
        ],
        "outputs": [],
    },
    _SET_WAGER_ARENA,
    _OWNER,
]

WAGER_ARENA_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "setPredictionMarket",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "_predictionMarket", "type": "address"}],
        "outputs": [],
    },
    _OWNER,
]

TOURNAMENT_ARENA_ABI: list[dict[str, Any]] = [_OWNER]

PREDICTION_MARKET_ABI: list[dict[str, Any]] = [_SET_WAGER_ARENA, _OWNER]

CONTRACT_ABIS: dict[str, list[dict[str, Any]]] = {
    "ArmadaToken": ARMADA_TOKEN_ABI,
    "ArmadaGuild": ARMADA_GUILD_ABI,
    "BattlePass": BATTLE_PASS_ABI,
    "ShipNFT": SHIP_NFT_ABI,
    "MantleArmada": MANTLE_ARMADA_ABI,
    "SEASToken": SEAS_TOKEN_ABI,
    "AgentController": AGENT_CONTROLLER_ABI,
    "WagerArena": WAGER_ARENA_ABI,
    "TournamentArena": TOURNAMENT_ARENA_ABI,
    "PredictionMarket": PREDICTION_MARKET_ABI,
}
