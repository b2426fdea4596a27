"""Entry point for uploading DON-hosted secrets"""
import asyncio
import logging
import sys
import traceback

from functions_secrets.config import Settings
from functions_secrets.uploader import SecretsUploader

logging.basicConfig(level=logging.INFO, format='%(message)s', stream=sys.stdout)

def run() -> None:
    """Upload the secrets, exiting non-zero on any error."""
    try:
        settings = Settings()
        asyncio.run(SecretsUploader(settings).run())
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        traceback.print_exc()
        sys.exit(1)

if __name__ == "__main__":
    run()
