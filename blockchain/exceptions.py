"""
Deployer Exceptions
Error types raised by the runtime, artifact store, signer and factories
"""

from typing import List, Optional


class DeployerError(Exception):
    """Base exception for all deployer errors"""
    pass


class ConfigError(DeployerError):
    """Invalid or incomplete network configuration"""
    pass


class NetworkConnectionError(DeployerError):
    """Node unreachable or serving the wrong chain"""
    pass


class SignerError(DeployerError):
    """No usable account to send transactions from"""
    pass


class ArtifactError(DeployerError):
    """Base class for compilation artifact problems"""

    def __init__(self, message: str, contract_name: Optional[str] = None):
        self.contract_name = contract_name
        super().__init__(message)


class ArtifactNotFoundError(ArtifactError):
    """No artifact exists for the requested contract"""
    pass


class AmbiguousArtifactError(ArtifactError):
    """Several artifacts share the requested contract name"""

    def __init__(self, contract_name: str, candidates: List[str]):
        self.candidates = candidates
        listing = "\n".join(f"  * {name}" for name in candidates)
        super().__init__(
            f"There are multiple artifacts for contract \"{contract_name}\", "
            f"please use a fully qualified name instead:\n{listing}",
            contract_name=contract_name
        )


class InvalidArtifactError(ArtifactError):
    """Artifact is malformed or cannot be deployed"""
    pass


class DeploymentError(DeployerError):
    """Deployment could not be submitted"""
    pass


class DeploymentFailedError(DeploymentError):
    """Deployment transaction was mined but produced no contract"""

    def __init__(self, message: str, tx_hash: Optional[str] = None):
        self.tx_hash = tx_hash
        super().__init__(message)
