"""
Contract Deployment
===================

Sequential deployment of the Nalnda contracts:
- runner: DeploymentRunner and result types
- backend: web3.py backend for Hardhat artifacts
- deploy: command line entry point
"""

from .errors import (
    ArtifactMissing,
    BackendUnavailable,
    ConfigurationError,
    ConfirmationTimeout,
    DeploymentError,
    DeploymentRejected,
)
from .runner import DeploymentResult, DeploymentRunner, DeploymentSpec, RunOutcome, RunState, run

__all__ = [
    'ArtifactMissing', 'BackendUnavailable', 'ConfigurationError', 'ConfirmationTimeout',
    'DeploymentError', 'DeploymentRejected', 'DeploymentResult', 'DeploymentRunner',
    'DeploymentSpec', 'RunOutcome', 'RunState', 'run',
]
