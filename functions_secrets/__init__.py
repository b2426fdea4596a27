"""Encrypt credential secrets and upload them to Chainlink Functions DON gateways"""

__version__ = "0.1.0"
