"""HTTP smoke-check client and test tokens."""

from mumpa_admin.api_client.client import EndpointStatus, MumpaApiClient
from mumpa_admin.api_client.tokens import create_test_token, decode_token

__all__ = ["EndpointStatus", "MumpaApiClient", "create_test_token", "decode_token"]
