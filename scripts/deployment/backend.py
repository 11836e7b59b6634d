"""
web3.py deployment backend for Hardhat-compiled contracts
"""

import os
import glob
import json
import logging
from typing import Any, Dict, Optional, Sequence

import requests
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3RPCError
from web3.middleware import ExtraDataToPOAMiddleware

from .config import DeploySettings
from .errors import (
    ArtifactMissing,
    BackendUnavailable,
    ConfigurationError,
    ConfirmationTimeout,
    DeploymentRejected,
)

logger = logging.getLogger(__name__)


def find_artifact(artifacts_dir: str, name: str) -> Optional[str]:
    """Locate <name>.json, preferring Hardhat's <name>.sol/<name>.json layout"""
    direct = os.path.join(artifacts_dir, f"{name}.sol", f"{name}.json")
    if os.path.isfile(direct):
        return direct
    matches = sorted(glob.glob(os.path.join(artifacts_dir, "**", f"{name}.json"), recursive=True))
    return matches[0] if matches else None


def load_artifact(artifacts_dir: str, name: str) -> Dict[str, Any]:
    """Loads a contract's ABI and bytecode from its JSON artifact."""
    path = find_artifact(artifacts_dir, name)
    if path is None:
        raise ArtifactMissing(f"no artifact found under {artifacts_dir} (run `npx hardhat compile`)", resource=name)

    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ArtifactMissing(f"could not read artifact {path}: {e}", resource=name) from e

    abi = data.get('abi')
    bytecode = data.get('bytecode')
    if abi is None or not bytecode or bytecode == "0x":
        raise ArtifactMissing(f"artifact {path} has no deployable bytecode", resource=name)
    return {'abi': abi, 'bytecode': bytecode}


class Web3DeploymentBackend:
    """Deploys contracts through a JSON-RPC node and waits for the receipt"""

    def __init__(self, settings: DeploySettings, w3: Optional[Web3] = None):
        self.settings = settings
        self.w3 = w3 if w3 is not None else self._connect(settings.rpc_url)

        try:
            connected = self.w3.is_connected()
        except requests.exceptions.RequestException:
            connected = False
        if not connected:
            raise BackendUnavailable(f"Could not connect to RPC URL: {settings.rpc_url}")
        logger.info(f"Connected to blockchain at {settings.rpc_url}")

        self.account = None
        if settings.private_key:
            try:
                self.account = self.w3.eth.account.from_key(settings.private_key)
            except ValueError as e:
                raise ConfigurationError(f"PRIVATE_KEY is not a valid private key: {e}") from e
            self.deployer = self.account.address
        else:
            try:
                accounts = self.w3.eth.accounts
            except (Web3RPCError, requests.exceptions.RequestException) as e:
                raise BackendUnavailable(f"Could not list node accounts: {e}") from e
            if not accounts:
                raise BackendUnavailable("PRIVATE_KEY not set and the node has no unlocked accounts")
            self.deployer = accounts[0]
        logger.info(f"Using deployer account: {self.deployer}")

    @staticmethod
    def _connect(rpc_url: str) -> Web3:
        w3 = Web3(Web3.HTTPProvider(rpc_url))
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
        return w3

    def deploy(self, name: str, constructor_args: Sequence[Any]) -> str:
        """
        Deploy a contract and block until its creation is confirmed

        Args:
            name: Contract name as compiled by Hardhat
            constructor_args: Positional constructor arguments

        Returns:
            Checksum address of the deployed contract
        """
        artifact = load_artifact(self.settings.artifacts_dir, name)
        factory = self.w3.eth.contract(abi=artifact['abi'], bytecode=artifact['bytecode'])
        constructor = factory.constructor(*constructor_args)

        try:
            tx_hash = self._send(constructor)
            logger.info(f"{name} deployment transaction sent: {tx_hash.hex()}")
            receipt = self.w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.settings.confirmation_timeout
            )
        except TimeExhausted as e:
            raise ConfirmationTimeout(
                f"no receipt after {self.settings.confirmation_timeout}s", resource=name
            ) from e
        except ContractLogicError as e:
            raise DeploymentRejected(f"execution reverted: {e}", resource=name) from e
        except Web3RPCError as e:
            raise DeploymentRejected(str(e), resource=name) from e
        except requests.exceptions.RequestException as e:
            raise BackendUnavailable(str(e), resource=name) from e

        if receipt['status'] != 1:
            raise DeploymentRejected(f"transaction {tx_hash.hex()} failed", resource=name)
        address = receipt.get('contractAddress')
        if not address:
            raise DeploymentRejected(f"receipt for {tx_hash.hex()} has no contract address", resource=name)

        logger.info(f"{name} confirmed in block {receipt['blockNumber']}")
        return Web3.to_checksum_address(address)

    def _send(self, constructor):
        if self.account is None:
            params = {'from': self.deployer}
            if self.settings.gas_limit:
                params['gas'] = self.settings.gas_limit
            return constructor.transact(params)

        params = {
            'from': self.deployer,
            'nonce': self.w3.eth.get_transaction_count(self.deployer),
            'gasPrice': self.w3.eth.gas_price,
            'chainId': self.settings.chain_id,
        }
        if self.settings.gas_limit:
            params['gas'] = self.settings.gas_limit
        tx = constructor.build_transaction(params)
        signed_tx = self.w3.eth.account.sign_transaction(tx, self.settings.private_key)
        return self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
