"""
Deployment error types
"""

from typing import Optional


class DeploymentError(Exception):
    """Base error for a failed contract deployment"""

    def __init__(self, reason: str, resource: Optional[str] = None):
        self.reason = reason
        self.resource = resource
        super().__init__(reason)

    def __str__(self):
        if self.resource:
            return f"{self.resource}: {self.reason}"
        return self.reason


class BackendUnavailable(DeploymentError):
    """The RPC node or provider cannot be reached"""


class ArtifactMissing(DeploymentError):
    """No compiled artifact exists for the requested contract"""


class ConfirmationTimeout(DeploymentError):
    """Transaction was sent but no receipt arrived in time"""


class DeploymentRejected(DeploymentError):
    """The network rejected the deployment (revert, failed receipt)"""


class ConfigurationError(Exception):
    """Invalid deployment configuration"""
