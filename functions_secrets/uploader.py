"""Encrypt secrets and upload them to the DON gateways"""
import logging
from typing import Callable, Optional

from functions_secrets.config import EXPIRATION_MINUTES, SLOT_ID, NetworkConfig, Settings
from functions_secrets.errors import ConfigurationError, UploadError
from functions_secrets.models.secrets import SecretsPayload
from functions_secrets.services.secrets_manager import SecretsManager
from functions_secrets.services.toolkit import FunctionsToolkit
from functions_secrets.signer import create_signer

logger = logging.getLogger(__name__)

class SecretsUploader:
    """Uploads the Alpaca credentials as DON-hosted secrets and reports the version"""

    def __init__(self, settings: Settings, network: Optional[NetworkConfig] = None,
                 manager_factory: Optional[Callable[..., SecretsManager]] = None):
        self.settings = settings
        self.network = network or settings.network
        self.manager_factory = manager_factory or SecretsManager

    def build_secrets(self) -> SecretsPayload:
        """Secrets taken from the environment, empty when unset"""
        api_key = self.settings.ALPACA_API_KEY
        secret_key = self.settings.ALPACA_SECRET_KEY
        return {
            'alpacaKey': api_key if api_key is not None else '',
            'alpacaSecret': secret_key if secret_key is not None else '',
        }

    async def run(self) -> int:
        """
        Encrypt the secrets, upload them and return the DON-hosted secrets version.

        The version is parsed with int(), so a value such as "3.0" or "3abc" is
        rejected with UploadError rather than truncated to 3.

        Raises:
            ConfigurationError: If the private key or RPC URL is missing or invalid
            EncryptionError: If the secrets cannot be encrypted
            UploadError: If the gateways report a failed upload
        """
        private_key = self.settings.PRIVATE_KEY
        if not private_key:
            raise ConfigurationError('private key not provided - check your environment variables')

        rpc_url = self.settings.SEPOLIA_RPC_URL
        if not rpc_url:
            raise ConfigurationError('rpcUrl not provided - check your environment variables')

        secrets = self.build_secrets()
        signer = create_signer(private_key, rpc_url)

        secrets_manager = self.manager_factory(
            signer=signer,
            functions_router_address=self.network.router_address,
            don_id=self.network.don_id,
            toolkit=FunctionsToolkit(
                node_binary=self.settings.NODE_BINARY,
                node_path=self.settings.FUNCTIONS_TOOLKIT_NODE_PATH
            )
        )
        await secrets_manager.initialize()

        encrypted = await secrets_manager.encrypt_secrets(secrets)

        logger.info(
            f"Upload encrypted secret to gateways {','.join(self.network.gateway_urls)}. "
            f"slotId {SLOT_ID}. Expiration in minutes: {EXPIRATION_MINUTES}"
        )

        upload_result = await secrets_manager.upload_encrypted_secrets_to_don(
            encrypted_secrets_hexstring=encrypted.encrypted_secrets,
            gateway_urls=self.network.gateway_urls,
            slot_id=SLOT_ID,
            minutes_until_expiration=EXPIRATION_MINUTES
        )

        if not upload_result.success:
            raise UploadError(f"Failed to upload secrets: {upload_result.error_message}")

        logger.info(f"\nSecrets uploaded successfully, response {upload_result.summary()}")

        try:
            don_hosted_secrets_version = int(upload_result.version)
        except (TypeError, ValueError):
            raise UploadError(f"Upload succeeded but returned no usable version: {upload_result.version!r}")

        logger.info(f"Secrets version: {don_hosted_secrets_version}")
        return don_hosted_secrets_version
