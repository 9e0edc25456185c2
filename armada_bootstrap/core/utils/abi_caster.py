"""Casting of plain Python values to Solidity ABI types.

Constructor and wiring arguments are assembled from config (strings, ints,
registry addresses); this normalises them before web3 encodes the call.
"""

from __future__ import annotations

from typing import Any

from web3 import Web3


def cast_single(arg: Any, abi_type: str) -> Any:
    t = abi_type.strip()

    if t == "bool":
        if isinstance(arg, bool):
            return arg
        if isinstance(arg, str):
            return arg.lower() in ("true", "1", "yes")
        return bool(arg)

    if t.startswith("uint") or t.startswith("int"):
        if isinstance(arg, bool):
            return int(arg)
        if isinstance(arg, str) and arg.startswith("0x"):
            return int(arg, 16)
        return int(arg)

    if t == "address":
        return Web3.to_checksum_address(str(arg))

    if t == "string":
        return str(arg)

    if t.startswith("bytes"):
        if isinstance(arg, bytes):
            return arg
        s = str(arg)
        if s.startswith("0x"):
            return bytes.fromhex(s[2:])
        return s.encode("utf-8")

    return arg


def cast_args(args: list[Any], abi_inputs: list[dict[str, Any]]) -> list[Any]:
    """Cast *args* positionally against *abi_inputs* (arrays handled element-wise)."""
    if len(args) != len(abi_inputs):
        raise ValueError(
            f"Argument count mismatch: got {len(args)}, expected {len(abi_inputs)}"
        )

    return [_cast_value(arg, inp) for arg, inp in zip(args, abi_inputs, strict=True)]


def _cast_value(arg: Any, inp: dict[str, Any]) -> Any:
    t = inp.get("type", "").strip()

    if t.endswith("]"):
        element_type = t[: t.rindex("[")]
        if not isinstance(arg, (list, tuple)):
            raise TypeError(f"Expected list for {t}, got {type(arg).__name__}")
        return [_cast_value(item, {"type": element_type}) for item in arg]

    return cast_single(arg, t)


def get_constructor_inputs(abi: list[dict[str, Any]]) -> list[dict[str, Any]]:
    for entry in abi:
        if entry.get("type") == "constructor":
            return entry.get("inputs", [])
    return []


def get_function_inputs(
    abi: list[dict[str, Any]], fn_name: str, arg_count: int
) -> list[dict[str, Any]] | None:
    """Inputs of the *fn_name* overload taking *arg_count* arguments, if any."""
    for entry in abi:
        if entry.get("type") != "function" or entry.get("name") != fn_name:
            continue
        inputs = entry.get("inputs", [])
        if len(inputs) == arg_count:
            return inputs
    return None
