"""
Artifact Store
Reads Hardhat compilation artifacts (ABI + bytecode) from the artifacts directory
"""

import os
import json
from typing import Dict, List
from dataclasses import dataclass
from loguru import logger

from .exceptions import (
    ArtifactNotFoundError,
    AmbiguousArtifactError,
    InvalidArtifactError
)


@dataclass
class Artifact:
    """Compiled contract data"""
    contract_name: str
    source_name: str
    abi: List[Dict]
    bytecode: str

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.contract_name}"

    def is_deployable(self) -> bool:
        """False for interfaces and abstract contracts (empty bytecode)"""
        return self.bytecode not in ('', '0x')

    def has_unlinked_libraries(self) -> bool:
        return '__$' in self.bytecode


class ArtifactStore:
    """
    Locates artifacts in the Hardhat layout:
    <artifacts_dir>/<source path>/<ContractName>.json
    """

    def __init__(self, artifacts_dir: str = "artifacts"):
        """
        Initialize Artifact Store

        Args:
            artifacts_dir: Root of the compilation output
        """
        self.artifacts_dir = artifacts_dir
        self._cache: Dict[str, Artifact] = {}

    def read_artifact(self, name: str) -> Artifact:
        """
        Read the artifact of a contract

        Args:
            name: Bare contract name ("XOXO") or fully qualified
                name ("contracts/XOXO.sol:XOXO")

        Returns:
            Artifact

        Raises:
            ArtifactNotFoundError: No matching artifact
            AmbiguousArtifactError: Bare name matches several sources
            InvalidArtifactError: Artifact file is malformed
        """
        if name in self._cache:
            return self._cache[name]

        if ':' in name:
            source_name, contract_name = name.rsplit(':', 1)
            path = os.path.join(self.artifacts_dir, source_name, f"{contract_name}.json")
            if not os.path.isfile(path):
                raise self._not_found(name, contract_name)
        else:
            contract_name = name
            matches = self._find_artifact_paths(contract_name)

            if not matches:
                raise self._not_found(name, contract_name)

            if len(matches) > 1:
                candidates = sorted(
                    f"{self._source_name(path)}:{contract_name}" for path in matches
                )
                raise AmbiguousArtifactError(contract_name, candidates)

            path = matches[0]

        artifact = self._load(path, contract_name)
        self._cache[name] = artifact

        logger.debug(f"Loaded artifact {artifact.fully_qualified_name}")
        return artifact

    def get_all_fully_qualified_names(self) -> List[str]:
        """List every artifact in the store"""
        names = []

        for path in self._iter_artifact_files():
            contract_name = os.path.basename(path)[:-len('.json')]
            names.append(f"{self._source_name(path)}:{contract_name}")

        return sorted(names)

    def _not_found(self, name: str, contract_name: str) -> ArtifactNotFoundError:
        message = f"Artifact for contract \"{name}\" not found in {self.artifacts_dir}."

        available = self.get_all_fully_qualified_names()
        if available:
            message += " Available artifacts: " + ", ".join(available) + "."

        return ArtifactNotFoundError(
            f"{message} Run 'npx hardhat compile' first",
            contract_name=contract_name
        )

    def _find_artifact_paths(self, contract_name: str) -> List[str]:
        filename = f"{contract_name}.json"
        return [
            path for path in self._iter_artifact_files()
            if os.path.basename(path) == filename
        ]

    def _iter_artifact_files(self):
        if not os.path.isdir(self.artifacts_dir):
            return

        for root, dirs, files in os.walk(self.artifacts_dir):
            # build-info holds raw solc output, not artifacts
            dirs[:] = sorted(d for d in dirs if d != 'build-info')

            # artifacts always sit under their source path
            if root == self.artifacts_dir:
                continue

            for filename in sorted(files):
                if filename.endswith('.json') and not filename.endswith('.dbg.json'):
                    yield os.path.join(root, filename)

    def _source_name(self, path: str) -> str:
        relative = os.path.relpath(os.path.dirname(path), self.artifacts_dir)
        return relative.replace(os.sep, '/')

    def _load(self, path: str, contract_name: str) -> Artifact:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidArtifactError(
                f"Invalid JSON in artifact {path}: {e}",
                contract_name=contract_name
            ) from e

        for key in ('abi', 'bytecode'):
            if key not in data:
                raise InvalidArtifactError(
                    f"Missing '{key}' in artifact {path}",
                    contract_name=contract_name
                )

        return Artifact(
            contract_name=data.get('contractName', contract_name),
            source_name=data.get('sourceName', self._source_name(path)),
            abi=data['abi'],
            bytecode=data['bytecode']
        )
