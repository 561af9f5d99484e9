"""Validators for identifiers carried in AnonCreds objects."""

import re

from base58 import alphabet
from marshmallow.validate import Regexp

B58 = alphabet if isinstance(alphabet, str) else alphabet.decode("ascii")


class DIDKey(Regexp):
    """Validate value against DID key specification."""

    EXAMPLE = "did:key:z6MkpTHR8VNsBxYAAWHut2Geadd9jSwuBV8xRoAnwWsdvktH"
    PATTERN = re.compile(rf"^did:(key):(z[{B58}]+)\Z")

    def __init__(self):
        """Initialize the instance."""

        super().__init__(
            DIDKey.PATTERN, error="Value {input} is not in W3C did:key format"
        )


class DIDWeb(Regexp):
    """Validate value against DID web specification.

    Any non-empty method-specific identifier is accepted; the document itself
    is never fetched here.
    """

    EXAMPLE = "did:web:example.com"
    PATTERN = re.compile(r"^did:(web):(.+)\Z")

    def __init__(self):
        """Initialize the instance."""

        super().__init__(
            DIDWeb.PATTERN, error="Value {input} is not in W3C did:web format"
        )


class IpfsUri(Regexp):
    """Validate value as a content-addressed `ipfs://<cid>` URI."""

    EXAMPLE = "ipfs://QmbWqxBEKC3P8tqsKc98xmWNzrzDtRLMiMPL8wBuTGsMnR"
    PATTERN = re.compile(r"^ipfs://([a-zA-Z0-9]+)\Z")

    def __init__(self):
        """Initialize the instance."""

        super().__init__(
            IpfsUri.PATTERN, error="Value {input} is not an ipfs:// identifier"
        )


class IssuerId(Regexp):
    """Validate value as an issuer DID (did:key or did:web)."""

    EXAMPLE = DIDKey.EXAMPLE
    PATTERN = re.compile(f"{DIDKey.PATTERN.pattern}|{DIDWeb.PATTERN.pattern}")

    def __init__(self):
        """Initialize the instance."""

        super().__init__(
            IssuerId.PATTERN, error="Value {input} is not a did:key or did:web DID"
        )


DID_KEY_EXAMPLE = DIDKey.EXAMPLE
DID_WEB_EXAMPLE = DIDWeb.EXAMPLE
IPFS_URI_EXAMPLE = IpfsUri.EXAMPLE
ISSUER_ID_EXAMPLE = IssuerId.EXAMPLE
