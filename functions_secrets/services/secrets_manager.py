"""Secrets management client for a Functions DON"""
import logging
import re
from typing import List, Optional

from web3 import AsyncWeb3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from functions_secrets.errors import (
    ConfigurationError,
    EncryptionError,
    NetworkError,
    ToolkitError,
    UploadError,
)
from functions_secrets.models.secrets import EncryptedSecrets, SecretsPayload, UploadResult
from functions_secrets.services.toolkit import FunctionsToolkit
from functions_secrets.signer import Signer

logger = logging.getLogger(__name__)

MIN_EXPIRATION_MINUTES = 5

HEX_STRING = re.compile(r"^0x[0-9a-fA-F]*$")

ROUTER_ABI = [
    {
        "name": "getContractById",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "id", "type": "bytes32"}],
        "outputs": [{"name": "", "type": "address"}],
    },
]

def encode_don_id(don_id: str) -> bytes:
    """Encode a DON id as a right-padded bytes32 string"""
    encoded = don_id.encode("utf-8")
    if len(encoded) > 31:
        raise ConfigurationError(f"DON ID {don_id} is longer than 31 bytes")
    return encoded.ljust(32, b"\0")

class SecretsManager:
    """Encrypts secrets for a DON and uploads them to its gateways"""

    def __init__(self, signer: Signer, functions_router_address: str, don_id: str,
                 toolkit: Optional[FunctionsToolkit] = None):
        self.signer = signer
        self.functions_router_address = functions_router_address
        self.don_id = don_id
        self.toolkit = toolkit or FunctionsToolkit()
        self.initialized = False

    async def initialize(self) -> None:
        """Check the RPC connection and that the router knows the DON"""
        don_id_bytes = encode_don_id(self.don_id)
        web3 = self.signer.web3

        if not await web3.is_connected():
            raise NetworkError(f"Unable to connect to RPC endpoint {self.signer.rpc_url}")
        chain_id = await web3.eth.chain_id

        try:
            router = web3.eth.contract(
                address=AsyncWeb3.to_checksum_address(self.functions_router_address),
                abi=ROUTER_ABI
            )
            await router.functions.getContractById(don_id_bytes).call()
        except (ContractLogicError, BadFunctionCallOutput, ValueError) as e:
            logger.error(f"Error resolving DON {self.don_id} on router {self.functions_router_address}: {e}")
            raise ConfigurationError(
                f"DON ID {self.don_id} could not be resolved on router {self.functions_router_address}",
                details={"error": str(e)}
            )

        self.initialized = True
        logger.info(f"Secrets manager initialized for DON {self.don_id} on chain {chain_id}")

    async def encrypt_secrets(self, secrets: SecretsPayload) -> EncryptedSecrets:
        """Encrypt a mapping of secret names to values for the DON"""
        if not self.initialized:
            raise EncryptionError("SecretsManager has not been initialized, call initialize() first")

        if not isinstance(secrets, dict) or not secrets:
            raise EncryptionError("Secrets must be a non-empty mapping of names to values")
        for name, value in secrets.items():
            if not isinstance(name, str) or not isinstance(value, str):
                raise EncryptionError(f"Secret {name!r} must map a string name to a string value")

        try:
            result = await self.toolkit.call(
                self.signer, self.functions_router_address, self.don_id,
                "encryptSecrets", secrets
            )
        except ToolkitError as e:
            logger.error(f"Error encrypting secrets: {e}")
            raise EncryptionError(f"Failed to encrypt secrets: {e.message}", details=e.details)

        if not isinstance(result, dict) or not result.get("encryptedSecrets"):
            raise EncryptionError("Functions toolkit returned no encrypted secrets")

        return EncryptedSecrets.model_validate(result)

    def _validate_upload(self, encrypted_secrets_hexstring: str, gateway_urls: List[str],
                         slot_id: int, minutes_until_expiration: int) -> None:
        if not isinstance(encrypted_secrets_hexstring, str) or not HEX_STRING.match(encrypted_secrets_hexstring):
            raise UploadError("encryptedSecretsHexstring must be a 0x-prefixed hex string")
        if not gateway_urls:
            raise UploadError("gatewayUrls must contain at least one URL")
        if isinstance(slot_id, bool) or not isinstance(slot_id, int) or slot_id < 0:
            raise UploadError(f"slotId must be a non-negative integer, got {slot_id!r}")
        if isinstance(minutes_until_expiration, bool) or not isinstance(minutes_until_expiration, int) \
                or minutes_until_expiration < MIN_EXPIRATION_MINUTES:
            raise UploadError(
                f"minutesUntilExpiration must be an integer of at least {MIN_EXPIRATION_MINUTES}, "
                f"got {minutes_until_expiration!r}"
            )

    async def upload_encrypted_secrets_to_don(self, encrypted_secrets_hexstring: str, gateway_urls: List[str],
                                              slot_id: int, minutes_until_expiration: int) -> UploadResult:
        """Upload encrypted secrets to the DON gateways in a single round trip"""
        if not self.initialized:
            raise UploadError("SecretsManager has not been initialized, call initialize() first")

        self._validate_upload(encrypted_secrets_hexstring, gateway_urls, slot_id, minutes_until_expiration)

        try:
            result = await self.toolkit.call(
                self.signer, self.functions_router_address, self.don_id,
                "uploadEncryptedSecretsToDON",
                {
                    "encryptedSecretsHexstring": encrypted_secrets_hexstring,
                    "gatewayUrls": list(gateway_urls),
                    "slotId": slot_id,
                    "minutesUntilExpiration": minutes_until_expiration,
                }
            )
        except ToolkitError as e:
            logger.error(f"Error uploading secrets: {e}")
            raise UploadError(f"Failed to upload secrets: {e.message}", details=e.details)

        if not isinstance(result, dict):
            raise UploadError("Functions toolkit returned no upload result")

        return UploadResult.model_validate(result)
