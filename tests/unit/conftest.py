"""Pytest configuration and shared fixtures for unit tests."""

import json

import pytest
from mchn import ApiProvider, CommerceClient
from mchn.signing import encode_request, sign

SHARED_KEY = "K"
PRIVATE_KEY = "P"
BASE_URL = "https://api.mchn.io"


def expected_hash(path, body=None, shared_key=SHARED_KEY, private_key=PRIVATE_KEY):
    """Hash the server would compute for a request to *path*."""
    return sign(encode_request(path, body, shared_key), private_key)


def paginated(data, next_page=None, **pagination):
    """Build a list payload carrying ``metadata.pagination``."""
    pagination["nextPage"] = next_page
    return json.dumps({"data": data, "metadata": {"pagination": pagination}})


@pytest.fixture
def provider():
    """An ApiProvider with the test key pair."""
    with ApiProvider(shared_key=SHARED_KEY, private_key=PRIVATE_KEY) as api:
        yield api


@pytest.fixture
def client():
    """A CommerceClient with the test key pair."""
    with CommerceClient(shared_key=SHARED_KEY, private_key=PRIVATE_KEY) as commerce:
        yield commerce
