"""
Blockchain Interaction Package
Handles artifact loading, signing and contract deployment
"""

from .artifacts import Artifact, ArtifactStore
from .contract_factory import ContractFactory, DeployedContract
from .signer import Signer

__all__ = [
    'Artifact',
    'ArtifactStore',
    'ContractFactory',
    'DeployedContract',
    'Signer'
]
