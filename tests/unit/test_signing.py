"""Tests for canonical request encoding and request signing."""

import base64
import json

import pytest
from mchn.auth import Credential
from mchn.exceptions import UnsupportedAlgorithm
from mchn.signing import (
    encode_request,
    normalize_algorithm,
    sign,
    signed_headers,
)

# HMAC-SHA256 / HMAC-MD5 of the canonical bytes of GET /v1/orders/14 with
# shared key "K" and private key "P"
ORDER_14_SHA256 = "B57ZLaHWzzRAGIBnS5vO/PFAbMoVrtiZ63cRkxyZoK0="
ORDER_14_MD5 = "EPxuFtAVATmLnM8X/KIQfw=="


class TestEncodeRequest:
    """Tests for encode_request."""

    def test_exact_bytes(self):
        """Keys come in a fixed order with no whitespace."""
        assert encode_request("/v1/orders/14", None, "K") == (
            b'{"data":{"input":null,"requestURI":"/v1/orders/14"},"sharedKey":"K"}'
        )

    def test_body_is_embedded_as_input(self):
        encoded = encode_request("/v1/orders/", {"price": 10, "isCompleted": True}, "K")
        assert encoded == (
            b'{"data":{"input":{"price":10,"isCompleted":true},'
            b'"requestURI":"/v1/orders/"},"sharedKey":"K"}'
        )

    def test_slashes_are_not_escaped(self):
        """A value such as "a/b" must never be written as a\\/b."""
        encoded = encode_request("/v1/products/", {"url": "a/b"}, "K")

        assert b"\\/" not in encoded
        assert b'"url":"a/b"' in encoded
        assert b'"requestURI":"/v1/products/"' in encoded

    @pytest.mark.parametrize("body", [None, {}, [], ""], ids=["none", "dict", "list", "str"])
    def test_empty_body_is_null(self, body):
        assert b'"input":null' in encode_request("/v1/orders", body, "K")

    def test_non_ascii_is_escaped(self):
        encoded = encode_request("/v1/products/", {"title": "Café"}, "K")
        assert b'"title":"Caf\\u00e9"' in encoded

    def test_path_is_taken_verbatim(self):
        """Only the executor substitutes spaces; the encoder changes nothing."""
        encoded = encode_request("/v1/articles?search=a%20b&tags=x,y", None, "K")
        assert b'"requestURI":"/v1/articles?search=a%20b&tags=x,y"' in encoded

    def test_output_is_valid_json(self):
        document = json.loads(encode_request("/v1/orders/14", {"a": [1, 2]}, "K"))
        assert document == {
            "data": {"input": {"a": [1, 2]}, "requestURI": "/v1/orders/14"},
            "sharedKey": "K",
        }


class TestSign:
    """Tests for sign."""

    def test_known_sha256_vector(self):
        assert sign(encode_request("/v1/orders/14", None, "K"), "P") == ORDER_14_SHA256

    def test_known_md5_vector(self):
        canonical = encode_request("/v1/orders/14", None, "K")
        assert sign(canonical, "P", "md5") == ORDER_14_MD5

    def test_deterministic(self):
        canonical = encode_request("/v1/products?limit=10", {"a/b": "c"}, "K")
        hashes = {sign(canonical, "P", "sha256") for _ in range(5)}
        assert len(hashes) == 1

    def test_output_is_base64_of_raw_digest(self):
        digest = base64.b64decode(sign(b"payload", "P", "sha256"))
        assert len(digest) == 32

    def test_different_keys_differ(self):
        canonical = encode_request("/v1/orders/14", None, "K")
        assert sign(canonical, "P") != sign(canonical, "Q")

    def test_empty_private_key_is_accepted(self):
        canonical = encode_request("/v1/orders/14", None, "K")

        empty = sign(canonical, "")

        assert empty
        assert empty == sign(canonical, None)
        assert empty != sign(canonical, "P")

    def test_unsupported_algorithm(self):
        with pytest.raises(UnsupportedAlgorithm, match="nope"):
            sign(b"payload", "P", "nope")

    def test_unsupported_algorithm_is_a_value_error(self):
        with pytest.raises(ValueError):
            sign(b"payload", "P", "shake_128")


class TestNormalizeAlgorithm:
    """Tests for digest name normalisation."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("SHA256", "sha256"),
            ("sha256", "sha256"),
            ("SHA-256", "sha256"),
            ("sha1", "sha1"),
            ("SHA512", "sha512"),
            (None, "sha256"),
            ("", "sha256"),
        ],
    )
    def test_names(self, name, expected):
        assert normalize_algorithm(name) == expected

    def test_same_hash_for_aliases(self):
        canonical = encode_request("/v1/orders/14", None, "K")
        assert sign(canonical, "P", "SHA-256") == sign(canonical, "P", "sha256")

    def test_sha3_alias(self):
        canonical = encode_request("/v1/orders/14", None, "K")
        assert sign(canonical, "P", "SHA3-256") == sign(canonical, "P", "sha3_256")


class TestHeaders:
    """Tests for the authentication headers."""

    def test_signed_headers(self):
        headers = signed_headers("/v1/orders/14", None, "K", "P")
        assert headers == {"x-api-key": "K", "hash": ORDER_14_SHA256}

    def test_credential_headers(self):
        credential = Credential(shared_key="K", private_key="P")
        assert credential.headers_for("/v1/orders/14")["hash"] == ORDER_14_SHA256

    def test_credential_repr_hides_private_key(self):
        credential = Credential(shared_key="K", private_key="super-secret")
        assert "super-secret" not in repr(credential)
        assert "K" in repr(credential)

    def test_credential_from_dict(self):
        credential = Credential.from_dict({"sharedKey": "K", "privateKey": "P"})
        assert credential == Credential("K", "P")
        assert credential.is_complete()
        assert not Credential("K").is_complete()
