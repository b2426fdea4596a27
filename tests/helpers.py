"""Test doubles shared across the test modules"""
from functions_secrets.config import Settings
from functions_secrets.models.secrets import EncryptedSecrets, UploadResult

TEST_PRIVATE_KEY = "0x" + "11" * 32
TEST_RPC_URL = "https://example"
ENCRYPTED_HEX = "0xdeadbeef"


def make_settings(**overrides) -> Settings:
    """Settings isolated from the process environment and any .env file"""
    values = {
        "PRIVATE_KEY": TEST_PRIVATE_KEY,
        "SEPOLIA_RPC_URL": TEST_RPC_URL,
        "ALPACA_API_KEY": None,
        "ALPACA_SECRET_KEY": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeSecretsManager:
    """Records the calls the uploader makes instead of reaching the network"""

    instances = []

    def __init__(self, signer, functions_router_address, don_id, toolkit=None,
                 upload_result=None, encrypt_error=None):
        self.signer = signer
        self.functions_router_address = functions_router_address
        self.don_id = don_id
        self.toolkit = toolkit
        self.calls = []
        self.encrypted_with = None
        self.upload_kwargs = None
        self.upload_result = upload_result or UploadResult(success=True, version="3")
        self.encrypt_error = encrypt_error
        FakeSecretsManager.instances.append(self)

    async def initialize(self):
        self.calls.append("initialize")

    async def encrypt_secrets(self, secrets):
        self.calls.append("encrypt_secrets")
        self.encrypted_with = secrets
        if self.encrypt_error:
            raise self.encrypt_error
        return EncryptedSecrets(encrypted_secrets=ENCRYPTED_HEX)

    async def upload_encrypted_secrets_to_don(self, **kwargs):
        self.calls.append("upload_encrypted_secrets_to_don")
        self.upload_kwargs = kwargs
        return self.upload_result


class AwaitableValue:
    """Stand-in for awaitable properties such as web3.eth.chain_id"""

    def __init__(self, value):
        self.value = value

    def __await__(self):
        if False:
            yield
        return self.value
