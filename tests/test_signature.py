"""
Tests for auth/signature.py
Logic testing: golden values, Boundary, Determinism coverage
"""
import pytest

from api_client.auth.signature import (
    generate_nonce,
    generate_timestamp,
    normalize_base_url,
    normalize_parameters,
    percent_decode,
    percent_encode,
    sign,
    signature_base_string,
    signing_key,
)

SCENARIO_A_PARAMS = {
    "oauth_consumer_key": "ck",
    "oauth_nonce": "n1",
    "oauth_signature_method": "HMAC-SHA1",
    "oauth_timestamp": "1000000000",
    "oauth_version": "1.0",
}

# Published worked example for HMAC-SHA1 request signing (Twitter API docs).
TWITTER_PARAMS = [
    ("status", "Hello Ladies + Gentlemen, a signed OAuth request!"),
    ("include_entities", "true"),
    ("oauth_consumer_key", "xvz1evFS4wEEPTGEFPHBog"),
    ("oauth_nonce", "kYjzVBB8Y0ZFabxSWbWovY3uYSQ2pTgmZeNu2VS4cg"),
    ("oauth_signature_method", "HMAC-SHA1"),
    ("oauth_timestamp", "1318622958"),
    ("oauth_token", "370773112-GmHxMAgYyLbNEtIKZeRNFsMKPR9EyMZeS9weJAEb"),
    ("oauth_version", "1.0"),
]
TWITTER_CONSUMER_SECRET = "kAcSOqF21Fu85e7zjz7ZN2U4ZRhfV3WpwPAoE3Z7kBw"
TWITTER_TOKEN_SECRET = "LswwdoUaIvS8ltyTt5jkRh4J50vUPVVHtR2YPi5kE"


class TestPercentEncode:
    """Tests for percent_encode function."""

    # Boundary: unreserved characters pass through
    def test_unreserved_untouched(self):
        value = "AZaz09-._~"
        assert percent_encode(value) == value

    # Decision: reserved characters are encoded
    @pytest.mark.parametrize(
        "raw, encoded",
        [
            (" ", "%20"),
            ("+", "%2B"),
            ("/", "%2F"),
            ("=", "%3D"),
            ("&", "%26"),
            ("!", "%21"),
            ("*", "%2A"),
            ("%", "%25"),
        ],
    )
    def test_reserved_encoded(self, raw, encoded):
        assert percent_encode(raw) == encoded

    # Path: multi-byte characters encode as UTF-8 with uppercase hex
    def test_utf8(self):
        assert percent_encode("☃") == "%E2%98%83"

    # Path: non-string values are stringified
    def test_non_string(self):
        assert percent_encode(1000000000) == "1000000000"

    # Round-trip over the unreserved set and a few reserved characters
    @pytest.mark.parametrize("value", ["abc-._~XYZ019", "a b&c=d", "café/+"])
    def test_round_trip(self, value):
        assert percent_decode(percent_encode(value)) == value


class TestNormalizeParameters:
    """Tests for normalize_parameters function."""

    # Path: sorted by encoded key
    def test_sorted_by_key(self):
        result = normalize_parameters({"b": "2", "a": "1", "c": "3"})
        assert result == "a=1&b=2&c=3"

    # Decision: duplicate keys sorted by encoded value
    def test_duplicate_keys_sorted_by_value(self):
        result = normalize_parameters([("a", "z"), ("a", "b"), ("a", "m")])
        assert result == "a=b&a=m&a=z"

    # Path: sort happens on encoded bytes, not raw strings
    def test_sort_uses_encoded_form(self):
        # raw "a-" < "a/", but encoded "a%2F" < "a-"
        result = normalize_parameters({"a-": "2", "a/": "1"})
        assert result == "a%2F=1&a-=2"

    # Boundary: empty mapping
    def test_empty(self):
        assert normalize_parameters({}) == ""


class TestNormalizeBaseUrl:
    """Tests for normalize_base_url function."""

    def test_strips_query_and_fragment(self):
        assert normalize_base_url("https://api.example.com/a?x=1#frag") == "https://api.example.com/a"

    def test_lowercases_scheme_and_host(self):
        assert normalize_base_url("HTTPS://API.Example.COM/Path") == "https://api.example.com/Path"

    # Decision: default ports dropped, others kept
    def test_default_port_dropped(self):
        assert normalize_base_url("https://api.example.com:443/r") == "https://api.example.com/r"
        assert normalize_base_url("http://api.example.com:80/r") == "http://api.example.com/r"

    def test_non_default_port_kept(self):
        assert normalize_base_url("http://api.example.com:8080/r") == "http://api.example.com:8080/r"

    # Boundary: empty path becomes "/"
    def test_empty_path(self):
        assert normalize_base_url("https://api.example.com") == "https://api.example.com/"

    # Path: IPv6 literal hosts keep their brackets
    def test_ipv6_host(self):
        assert normalize_base_url("http://[::1]:8080/x") == "http://[::1]:8080/x"
        assert normalize_base_url("https://[2001:DB8::1]:443/x?a=1") == "https://[2001:db8::1]/x"


class TestSigningKey:
    """Tests for signing_key function."""

    # Boundary: empty token secret still yields "secret&"
    def test_empty_token_secret(self):
        assert signing_key("cs", "") == "cs&"
        assert signing_key("cs", None) == "cs&"

    def test_with_token_secret(self):
        assert signing_key("cs", "ts") == "cs&ts"

    def test_encodes_both_parts(self):
        assert signing_key("c&s", "t s") == "c%26s&t%20s"


class TestSign:
    """Tests for sign function."""

    def test_base_string_scenario_a(self):
        base = signature_base_string("post", "https://api.example.com/token", SCENARIO_A_PARAMS)
        assert base == (
            "POST&https%3A%2F%2Fapi.example.com%2Ftoken&"
            "oauth_consumer_key%3Dck%26oauth_nonce%3Dn1%26oauth_signature_method%3DHMAC-SHA1"
            "%26oauth_timestamp%3D1000000000%26oauth_version%3D1.0"
        )

    # Golden value: request-token phase, empty token secret
    def test_scenario_a_golden(self):
        result = sign("POST", "https://api.example.com/token", SCENARIO_A_PARAMS, "cs", "")
        assert result == "Bpf7hxBq9TVFLHQYYOqirWwkTyc="

    # Golden value: published access-token example
    def test_twitter_example_golden(self):
        result = sign(
            "POST",
            "https://api.twitter.com/1.1/statuses/update.json",
            TWITTER_PARAMS,
            TWITTER_CONSUMER_SECRET,
            TWITTER_TOKEN_SECRET,
        )
        assert result == "hCtSmYh+iHYCEqBWrE7C7hYmtUk="

    # Determinism: same inputs, same signature
    def test_deterministic(self):
        first = sign("GET", "https://api.example.com/x", SCENARIO_A_PARAMS, "cs", "ts")
        second = sign("GET", "https://api.example.com/x", dict(SCENARIO_A_PARAMS), "cs", "ts")
        assert first == second

    # Decision: method case does not matter
    def test_method_case_insensitive(self):
        upper = sign("POST", "https://api.example.com/token", SCENARIO_A_PARAMS, "cs")
        lower = sign("post", "https://api.example.com/token", SCENARIO_A_PARAMS, "cs")
        assert upper == lower

    # Decision: parameter order does not matter
    def test_parameter_order_irrelevant(self):
        reversed_params = list(reversed(list(SCENARIO_A_PARAMS.items())))
        assert sign("POST", "https://api.example.com/token", reversed_params, "cs") == sign(
            "POST", "https://api.example.com/token", SCENARIO_A_PARAMS, "cs"
        )

    # Path: any input change changes the signature
    @pytest.mark.parametrize(
        "changes",
        [
            {"method": "GET"},
            {"base_url": "https://api.example.com/other"},
            {"consumer_secret": "other"},
            {"token_secret": "ts"},
        ],
    )
    def test_inputs_affect_signature(self, changes):
        args = {
            "method": "POST",
            "base_url": "https://api.example.com/token",
            "parameters": SCENARIO_A_PARAMS,
            "consumer_secret": "cs",
            "token_secret": "",
        }
        baseline = sign(**args)
        args.update(changes)
        assert sign(**args) != baseline


class TestNonceAndTimestamp:
    """Tests for generate_nonce and generate_timestamp."""

    def test_nonce_is_hex_of_16_bytes(self):
        nonce = generate_nonce()
        assert len(nonce) == 32
        int(nonce, 16)

    def test_nonce_uses_injected_source(self):
        assert generate_nonce(lambda size: b"\xab" * size) == "ab" * 16

    # State: consecutive calls differ
    def test_nonce_not_reused(self):
        nonces = {generate_nonce() for _ in range(50)}
        assert len(nonces) == 50

    def test_timestamp_is_unix_seconds(self):
        assert generate_timestamp(lambda: 1000000000.9) == "1000000000"
