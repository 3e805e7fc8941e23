"""OAuth 1.0 HMAC-SHA1 request signing for the FatSecret Platform API.

FatSecret uses the two-legged ("signed request") flow: there is no access
token, so the signing key is the encoded consumer secret followed by a bare
``&``. Signatures follow OAuth 1.0 Core section 9.2 / RFC 5849 section 3.4.
"""

import base64
import hashlib
import hmac
import secrets
import string
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from urllib.parse import quote

from forq.config import FatSecretCredentials

SIGNATURE_METHOD = "HMAC-SHA1"
OAUTH_VERSION = "1.0"
_NONCE_ALPHABET = string.ascii_letters + string.digits
_NONCE_LENGTH = 26


@dataclass(frozen=True)
class SignatureRequest:
    """Inputs to a single signature computation."""

    http_method: str
    base_url: str
    parameters: dict[str, str]


def percent_encode(value: object) -> str:
    """Percent-encode a value with the RFC 3986 unreserved character set."""
    return quote(str(value), safe="~")


def normalize_parameters(parameters: Mapping[str, object]) -> str:
    """Encode, sort and join request parameters into the parameter string."""
    encoded = sorted(
        (percent_encode(key), percent_encode(value))
        for key, value in parameters.items()
    )
    return "&".join(f"{key}={value}" for key, value in encoded)


def signature_base_string(
    method: str, base_url: str, parameters: Mapping[str, object]
) -> str:
    """Build the signature base string for a request."""
    return "&".join(
        (
            method.upper(),
            percent_encode(base_url),
            percent_encode(normalize_parameters(parameters)),
        )
    )


def sign(
    method: str,
    base_url: str,
    parameters: Mapping[str, object],
    consumer_secret: str,
) -> str:
    """Return the base64 HMAC-SHA1 signature for a request."""
    base_string = signature_base_string(method, base_url, parameters)
    signing_key = f"{percent_encode(consumer_secret)}&"
    digest = hmac.new(
        signing_key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def sign_request(request: SignatureRequest, consumer_secret: str) -> str:
    """Sign a prepared signature request."""
    return sign(
        request.http_method, request.base_url, request.parameters, consumer_secret
    )


def generate_nonce() -> str:
    """Return a random alphanumeric nonce from the OS CSPRNG."""
    return "".join(secrets.choice(_NONCE_ALPHABET) for _ in range(_NONCE_LENGTH))


def generate_timestamp() -> str:
    """Return the current unix time in whole seconds."""
    return str(int(time.time()))


@dataclass
class OAuthSigner:
    """Builds signed parameter sets for outbound FatSecret calls."""

    credentials: FatSecretCredentials
    base_url: str
    http_method: str = "POST"
    clock: Callable[[], str] = generate_timestamp
    nonce_factory: Callable[[], str] = generate_nonce
    _issued_at: str | None = field(default=None, init=False, repr=False)
    _issued_nonces: set[str] = field(default_factory=set, init=False, repr=False)

    def build_request(
        self, api_method: str, api_params: Mapping[str, object] | None = None
    ) -> SignatureRequest:
        """Assemble the unsigned parameter map for one API call."""
        parameters = {
            key: str(value)
            for key, value in (api_params or {}).items()
            if value is not None
        }
        parameters["method"] = api_method
        parameters["format"] = "json"
        timestamp = self.clock()
        parameters.update(
            {
                "oauth_consumer_key": self.credentials.consumer_key,
                "oauth_signature_method": SIGNATURE_METHOD,
                "oauth_timestamp": timestamp,
                "oauth_nonce": self._fresh_nonce(timestamp),
                "oauth_version": OAUTH_VERSION,
            }
        )
        return SignatureRequest(
            http_method=self.http_method,
            base_url=self.base_url,
            parameters=parameters,
        )

    def build_parameters(
        self, api_method: str, api_params: Mapping[str, object] | None = None
    ) -> dict[str, str]:
        """Return the full parameter map including ``oauth_signature``."""
        request = self.build_request(api_method, api_params)
        signature = sign_request(request, self.credentials.consumer_secret)
        return {**request.parameters, "oauth_signature": signature}

    def build_authenticated_request_body(
        self, api_method: str, api_params: Mapping[str, object] | None = None
    ) -> str:
        """Return the signed parameters as a form-urlencoded body."""
        return encode_form(self.build_parameters(api_method, api_params))

    def _fresh_nonce(self, timestamp: str) -> str:
        # Nonces only need to be unique per timestamp.
        if timestamp != self._issued_at:
            self._issued_at = timestamp
            self._issued_nonces = set()
        nonce = self.nonce_factory()
        while nonce in self._issued_nonces:
            nonce = self.nonce_factory()
        self._issued_nonces.add(nonce)
        return nonce


def encode_form(parameters: Mapping[str, str]) -> str:
    """Serialize parameters as ``application/x-www-form-urlencoded``."""
    return "&".join(
        f"{percent_encode(key)}={percent_encode(value)}"
        for key, value in parameters.items()
    )


def build_authenticated_request_body(
    api_method: str,
    api_params: Mapping[str, object],
    consumer_key: str,
    consumer_secret: str,
    base_url: str = "https://platform.fatsecret.com/rest/server.api",
) -> str:
    """Sign a single POST call and return its form-urlencoded body."""
    signer = OAuthSigner(
        credentials=FatSecretCredentials(consumer_key, consumer_secret),
        base_url=base_url,
    )
    return signer.build_authenticated_request_body(api_method, api_params)
