"""Signing identity bound to a blockchain RPC connection"""
import logging
from dataclasses import dataclass

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3

from functions_secrets.errors import ConfigurationError

logger = logging.getLogger(__name__)

@dataclass
class Signer:
    """Account that signs DON requests, connected to an RPC endpoint"""
    account: LocalAccount
    web3: AsyncWeb3
    rpc_url: str

    @property
    def address(self) -> str:
        return self.account.address

    @property
    def private_key(self) -> str:
        """0x-prefixed hex private key"""
        return AsyncWeb3.to_hex(self.account.key)

def create_signer(private_key: str, rpc_url: str) -> Signer:
    """Derive the signing account from the private key and bind it to the RPC provider"""
    try:
        account = Account.from_key(private_key)
    except (ValueError, TypeError) as e:
        raise ConfigurationError(f"invalid private key: {e}")

    web3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
    logger.debug(f"Signer {account.address} bound to RPC provider")
    return Signer(account=account, web3=web3, rpc_url=rpc_url)
