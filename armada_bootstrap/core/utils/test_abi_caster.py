import pytest

from armada_bootstrap.core.constants.armada_abi import CONTRACT_ABIS
from armada_bootstrap.core.utils.abi_caster import (
    cast_args,
    cast_single,
    get_function_inputs,
)
from armada_bootstrap.core.utils.units import format_units, to_raw_units

ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


def test_cast_single_scalars():
    assert cast_single("true", "bool") is True
    assert cast_single("0x10", "uint256") == 16
    assert cast_single(ADDRESS.lower(), "address") == ADDRESS
    assert cast_single(7, "string") == "7"
    assert cast_single("0xdead", "bytes") == b"\xde\xad"


def test_cast_args_arrays_and_count():
    inputs = [{"type": "address[]"}, {"type": "uint8"}]
    assert cast_args([[ADDRESS.lower()], "3"], inputs) == [[ADDRESS], 3]

    with pytest.raises(ValueError, match="Argument count mismatch"):
        cast_args([1], inputs)


def test_function_inputs_for_register_agent():
    inputs = get_function_inputs(CONTRACT_ABIS["AgentController"], "registerAgent", 3)
    assert [i["type"] for i in inputs] == ["uint8", "uint256", "string"]
    assert get_function_inputs(CONTRACT_ABIS["AgentController"], "registerAgent", 1) is None


def test_units():
    assert to_raw_units("0.01") == 10**16
    assert to_raw_units(1000) == 1000 * 10**18
    assert format_units(15 * 10**17) == "1.5"
    assert format_units(0) == "0"
    with pytest.raises(ValueError):
        to_raw_units("-1")
    with pytest.raises(ValueError):
        to_raw_units("lots")
