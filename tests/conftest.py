"""
Shared fixtures
"""

import json
import pytest
from hexbytes import HexBytes


# First Hardhat node account and the address of its first deployment
DEPLOYER = '0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266'
XOXO_ADDRESS = '0x5FbDB2315678afecb367f032d93F642f64180aa3'
TX_HASH = HexBytes(b"\xab" * 32)
TX_HASH_HEX = "0x" + "ab" * 32


@pytest.fixture
def xoxo_artifacts(tmp_path):
    """Artifacts directory holding a compiled XOXO contract"""
    directory = tmp_path / "artifacts" / "contracts" / "XOXO.sol"
    directory.mkdir(parents=True)

    (directory / "XOXO.json").write_text(json.dumps({
        "_format": "hh-sol-artifact-1",
        "contractName": "XOXO",
        "sourceName": "contracts/XOXO.sol",
        "abi": [
            {"inputs": [], "stateMutability": "nonpayable", "type": "constructor"}
        ],
        "bytecode": "0x6080604052348015600f57600080fd5b50",
        "deployedBytecode": "0x6080604052",
        "linkReferences": {},
        "deployedLinkReferences": {}
    }))

    return tmp_path / "artifacts"
