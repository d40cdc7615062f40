"""
Artifact Store Tests
"""

import json
import pytest

from blockchain.artifacts import ArtifactStore
from blockchain.exceptions import (
    ArtifactNotFoundError,
    AmbiguousArtifactError,
    InvalidArtifactError
)


XOXO_ABI = [
    {"inputs": [], "stateMutability": "nonpayable", "type": "constructor"},
    {
        "inputs": [],
        "name": "name",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function"
    }
]


def write_artifact(root, source_name, contract_name, bytecode="0x6080604052", abi=None, **extra):
    """Write a Hardhat-style artifact file"""
    directory = root.joinpath(*source_name.split('/'))
    directory.mkdir(parents=True, exist_ok=True)

    data = {
        "_format": "hh-sol-artifact-1",
        "contractName": contract_name,
        "sourceName": source_name,
        "abi": XOXO_ABI if abi is None else abi,
        "bytecode": bytecode,
        "deployedBytecode": "0x6080",
    }
    data.update(extra)

    path = directory / f"{contract_name}.json"
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def artifacts_dir(tmp_path):
    root = tmp_path / "artifacts"
    write_artifact(root, "contracts/XOXO.sol", "XOXO")
    # Debug files and build-info sit next to real artifacts
    (root / "contracts" / "XOXO.sol" / "XOXO.dbg.json").write_text('{"buildInfo": "x"}')
    build_info = root / "build-info"
    build_info.mkdir()
    (build_info / "abc123.json").write_text('{"solcVersion": "0.8.9"}')
    return root


class TestReadArtifact:
    """Test artifact lookup"""

    def test_read_by_name(self, artifacts_dir):
        store = ArtifactStore(str(artifacts_dir))

        artifact = store.read_artifact("XOXO")

        assert artifact.contract_name == "XOXO"
        assert artifact.source_name == "contracts/XOXO.sol"
        assert artifact.bytecode == "0x6080604052"
        assert artifact.abi == XOXO_ABI
        assert artifact.fully_qualified_name == "contracts/XOXO.sol:XOXO"

    def test_read_by_fully_qualified_name(self, artifacts_dir):
        store = ArtifactStore(str(artifacts_dir))

        artifact = store.read_artifact("contracts/XOXO.sol:XOXO")

        assert artifact.contract_name == "XOXO"

    def test_missing_artifact(self, artifacts_dir):
        store = ArtifactStore(str(artifacts_dir))

        with pytest.raises(ArtifactNotFoundError) as exc_info:
            store.read_artifact("Missing")

        assert "npx hardhat compile" in str(exc_info.value)
        assert exc_info.value.contract_name == "Missing"
        assert "Available artifacts: contracts/XOXO.sol:XOXO" in str(exc_info.value)

    def test_missing_fully_qualified_name(self, artifacts_dir):
        store = ArtifactStore(str(artifacts_dir))

        with pytest.raises(ArtifactNotFoundError):
            store.read_artifact("contracts/Other.sol:XOXO")

    def test_missing_artifacts_directory(self, tmp_path):
        store = ArtifactStore(str(tmp_path / "nope"))

        with pytest.raises(ArtifactNotFoundError) as exc_info:
            store.read_artifact("XOXO")

        assert "Available artifacts" not in str(exc_info.value)

    def test_ambiguous_name(self, artifacts_dir):
        write_artifact(artifacts_dir, "contracts/legacy/XOXO.sol", "XOXO")
        store = ArtifactStore(str(artifacts_dir))

        with pytest.raises(AmbiguousArtifactError) as exc_info:
            store.read_artifact("XOXO")

        assert exc_info.value.candidates == [
            "contracts/XOXO.sol:XOXO",
            "contracts/legacy/XOXO.sol:XOXO"
        ]

        # Fully qualified name resolves the ambiguity
        artifact = store.read_artifact("contracts/legacy/XOXO.sol:XOXO")
        assert artifact.source_name == "contracts/legacy/XOXO.sol"

    def test_invalid_json(self, artifacts_dir):
        bad = artifacts_dir / "contracts" / "Bad.sol"
        bad.mkdir(parents=True)
        (bad / "Bad.json").write_text("{not json")
        store = ArtifactStore(str(artifacts_dir))

        with pytest.raises(InvalidArtifactError):
            store.read_artifact("Bad")

    def test_missing_bytecode_field(self, artifacts_dir):
        path = write_artifact(artifacts_dir, "contracts/NoCode.sol", "NoCode")
        data = json.loads(path.read_text())
        del data["bytecode"]
        path.write_text(json.dumps(data))
        store = ArtifactStore(str(artifacts_dir))

        with pytest.raises(InvalidArtifactError, match="bytecode"):
            store.read_artifact("NoCode")

    def test_artifacts_are_cached(self, artifacts_dir):
        store = ArtifactStore(str(artifacts_dir))

        first = store.read_artifact("XOXO")
        (artifacts_dir / "contracts" / "XOXO.sol" / "XOXO.json").unlink()

        assert store.read_artifact("XOXO") is first


class TestArtifactQueries:
    """Test store listing and artifact flags"""

    def test_fully_qualified_names_skip_debug_files(self, artifacts_dir):
        write_artifact(artifacts_dir, "contracts/IXOXO.sol", "IXOXO", bytecode="0x")
        store = ArtifactStore(str(artifacts_dir))

        assert store.get_all_fully_qualified_names() == [
            "contracts/IXOXO.sol:IXOXO",
            "contracts/XOXO.sol:XOXO"
        ]

    def test_files_at_artifacts_root_ignored(self, artifacts_dir):
        (artifacts_dir / "Stray.json").write_text('{"abi": [], "bytecode": "0x6080"}')
        store = ArtifactStore(str(artifacts_dir))

        assert store.get_all_fully_qualified_names() == ["contracts/XOXO.sol:XOXO"]
        with pytest.raises(ArtifactNotFoundError):
            store.read_artifact("Stray")

    def test_interface_is_not_deployable(self, artifacts_dir):
        write_artifact(artifacts_dir, "contracts/IXOXO.sol", "IXOXO", bytecode="0x")
        store = ArtifactStore(str(artifacts_dir))

        assert not store.read_artifact("IXOXO").is_deployable()
        assert store.read_artifact("XOXO").is_deployable()

    def test_unlinked_library_placeholder(self, artifacts_dir):
        write_artifact(
            artifacts_dir, "contracts/Linked.sol", "Linked",
            bytecode="0x6080__$0123456789abcdef0123456789abcdef01$__6080"
        )
        store = ArtifactStore(str(artifacts_dir))

        assert store.read_artifact("Linked").has_unlinked_libraries()
