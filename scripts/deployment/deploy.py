#!/usr/bin/env python3
"""
Deploy the Nalnda marketplace contracts

Deploys NalndaToken and then MarketplaceFactory, printing each address.
Exits 0 when every contract is confirmed, 1 otherwise.
"""

import sys
import logging
import traceback
from typing import Optional, Sequence

from contracts.core import MARKETPLACE_FACTORY, NALNDA_TOKEN

from .backend import Web3DeploymentBackend
from .config import DeploySettings, setup_logging
from .errors import ConfigurationError, DeploymentError
from .notify import notify_slack
from .runner import DeploymentBackend, DeploymentRunner, DeploymentSpec

logger = logging.getLogger(__name__)

DEPLOYMENT_SEQUENCE = (
    DeploymentSpec(NALNDA_TOKEN),
    DeploymentSpec(MARKETPLACE_FACTORY),
)


def _report(error: BaseException):
    traceback.print_exception(type(error), error, error.__traceback__, file=sys.stderr)


def main(specs: Optional[Sequence[DeploymentSpec]] = None,
         backend: Optional[DeploymentBackend] = None,
         settings: Optional[DeploySettings] = None) -> int:
    """Run the deployment and return the process exit code"""
    if specs is None:
        specs = DEPLOYMENT_SEQUENCE
    try:
        if settings is None:
            settings = DeploySettings.from_env()
        if backend is None:
            backend = Web3DeploymentBackend(settings)
    except (ConfigurationError, DeploymentError) as e:
        logger.error(f"Deployment could not start: {e}")
        _report(e)
        return 1

    outcome = DeploymentRunner(specs).run(backend)

    if settings.slack_webhook:
        notify_slack(settings.slack_webhook, outcome)

    if not outcome.success:
        _report(outcome.failure.error)
    return outcome.exit_code


def cli():
    """Console entry point"""
    try:
        settings = DeploySettings.from_env()
    except ConfigurationError as e:
        _report(e)
        sys.exit(1)
    setup_logging(settings.log_file)
    sys.exit(main(settings=settings))


if __name__ == "__main__":
    cli()
