"""
Sequential contract deployment runner

Deploys an ordered list of contracts one at a time against a backend,
stopping at the first failure.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from .errors import DeploymentError, DeploymentRejected

logger = logging.getLogger(__name__)


class DeploymentBackend(Protocol):
    """Anything that can deploy a named contract and wait for confirmation"""

    def deploy(self, name: str, constructor_args: Sequence[Any]) -> str:
        ...


@dataclass(frozen=True)
class DeploymentSpec:
    """Contract to deploy"""
    name: str
    constructor_args: Tuple[Any, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DeploymentResult:
    """Result of a single deployment"""
    spec: DeploymentSpec
    address: Optional[str] = None
    error: Optional[DeploymentError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.address is not None


@dataclass(frozen=True)
class RunOutcome:
    """All results of one run, in declaration order"""
    results: Tuple[DeploymentResult, ...]
    success: bool

    @property
    def failure(self) -> Optional[DeploymentResult]:
        for result in self.results:
            if not result.succeeded:
                return result
        return None

    @property
    def addresses(self) -> Dict[str, str]:
        return {r.spec.name: r.address for r in self.results if r.succeeded}

    @property
    def exit_code(self) -> int:
        return 0 if self.success else 1


class RunState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class DeploymentRunner:
    """Runs deployments strictly in order, one confirmation at a time"""

    def __init__(self, specs: Sequence[DeploymentSpec]):
        if not specs:
            raise ValueError("At least one deployment spec is required")
        self.specs: Tuple[DeploymentSpec, ...] = tuple(specs)
        self.state = RunState.NOT_STARTED

    def run(self, backend: DeploymentBackend) -> RunOutcome:
        """
        Deploy every spec in order against the backend

        Args:
            backend: Deployment backend; deploy() blocks until confirmed

        Returns:
            RunOutcome with one result per attempted spec
        """
        results: List[DeploymentResult] = []
        self.state = RunState.RUNNING
        logger.info(f"Deploying {len(self.specs)} contract(s)")

        for spec in self.specs:
            logger.info(f"Deploying {spec.name} with args {list(spec.constructor_args)}")
            try:
                address = backend.deploy(spec.name, spec.constructor_args)
            except DeploymentError as e:
                error = e
            except Exception as e:
                error = DeploymentError(str(e) or type(e).__name__, resource=spec.name)
                error.__cause__ = e
            else:
                if not address:
                    error = DeploymentRejected("backend returned no address", resource=spec.name)
                else:
                    results.append(DeploymentResult(spec=spec, address=address))
                    print(f"{spec.name} deployed to: {address}")
                    logger.info(f"{spec.name} confirmed at {address}")
                    continue

            results.append(DeploymentResult(spec=spec, error=error))
            logger.error(f"Deployment of {spec.name} failed: {error}")
            self.state = RunState.FAILED
            return RunOutcome(results=tuple(results), success=False)

        self.state = RunState.COMPLETED
        return RunOutcome(results=tuple(results), success=True)


def run(specs: Sequence[DeploymentSpec], backend: DeploymentBackend) -> RunOutcome:
    """Deploy specs sequentially against backend"""
    return DeploymentRunner(specs).run(backend)
