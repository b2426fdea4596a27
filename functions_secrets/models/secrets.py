"""Secrets payload and DON upload result models"""
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

# Secret name -> secret value, exactly as handed to the DON
SecretsPayload = Dict[str, str]

class EncryptedSecrets(BaseModel):
    """
    Ciphertext returned by the Functions toolkit.

    encrypted_secrets is an opaque 0x-prefixed hex string, only ever passed on
    to the gateways.
    """
    model_config = ConfigDict(populate_by_name=True)

    encrypted_secrets: str = Field(..., alias="encryptedSecrets")

class UploadResult(BaseModel):
    """Outcome of uploading encrypted secrets to the DON gateways"""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    version: Optional[Union[int, str]] = None
    error_message: Optional[str] = Field(None, alias="errorMessage")

    def summary(self) -> Dict[str, Any]:
        """Loggable view of the result"""
        return self.model_dump(exclude_none=True)
