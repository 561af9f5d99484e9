"""Parsing and validation of the identifiers handled by the registry.

Objects are addressed by `ipfs://<cid>` URIs. Issuers are `did:key` or
`did:web` DIDs. Revocation registry identifiers may also arrive in one of the
two Indy forms, which are parsed into their components.
"""

import re
from typing import NamedTuple, Optional, Pattern

from ..messaging.valid import B58, DIDKey, DIDWeb, IpfsUri, IssuerId
from .base import InvalidIdentifierError

SUPPORTED_IDENTIFIER = re.compile(
    rf"(?:^did:key:z[{B58}]+\Z)"
    rf"|(?:{IpfsUri.PATTERN.pattern})"
    r"|(?:^did:web:.+\Z)"
)
DID_PATTERN = IssuerId.PATTERN

NAMESPACED_REV_REG_DEF_ID = re.compile(
    r"^did:indy:(?P<namespace>[a-z0-9:]+):(?P<namespace_identifier>[^/:]+)"
    r"/anoncreds/v0/REV_REG_DEF"
    r"/(?P<schema_seq_no>[0-9]+)"
    r"/(?P<credential_definition_tag>[^/]+)"
    r"/(?P<revocation_registry_tag>[^/]+)\Z"
)
LEGACY_REV_REG_DEF_ID = re.compile(
    r"^(?P<did>[^:]+):4:(?P=did):3:CL"
    r":(?P<schema_seq_no>[0-9]+)"
    r":(?P<credential_definition_tag>[^:]+)"
    r":CL_ACCUM:(?P<revocation_registry_tag>.+)\Z"
)


class ParsedDid(NamedTuple):
    """Method and method-specific identifier of a DID."""

    namespace: str
    namespace_identifier: str


class ParsedRevocationRegistryId(NamedTuple):
    """Components of a revocation registry definition identifier."""

    did: str
    schema_seq_no: int
    credential_definition_tag: str
    revocation_registry_tag: str
    namespace: Optional[str] = None
    namespace_identifier: Optional[str] = None


def validate(identifier: str) -> bool:
    """Check whether an identifier has one of the supported forms."""
    if not isinstance(identifier, str):
        return False
    return bool(SUPPORTED_IDENTIFIER.match(identifier))


def parse_content_id(identifier: str) -> str:
    """Extract the content id from an `ipfs://<cid>` identifier."""
    match = IpfsUri.PATTERN.match(identifier) if isinstance(identifier, str) else None
    if not match:
        raise InvalidIdentifierError(f"Invalid content identifier: {identifier}")
    return match.group(1)


def make_content_id_uri(cid: str) -> str:
    """Build the identifier of an object stored under a content id."""
    return f"ipfs://{cid}"


def parse_did(did: str, pattern: Pattern = DID_PATTERN) -> ParsedDid:
    """Split a DID into method and method-specific identifier.

    The pattern may hold several alternatives; the first pair of groups that
    matched is used.
    """
    match = pattern.fullmatch(did) if isinstance(did, str) else None
    if not match:
        raise InvalidIdentifierError(f"Invalid DID: {did}")
    groups = [group for group in match.groups() if group is not None]
    if len(groups) < 2:
        raise InvalidIdentifierError(f"Invalid DID: {did}")
    return ParsedDid(groups[0], groups[1])


def is_issuer_did(did: str) -> bool:
    """Check whether a value is a did:key or did:web DID."""
    return isinstance(did, str) and bool(
        DIDKey.PATTERN.match(did) or DIDWeb.PATTERN.match(did)
    )


def parse_revocation_registry_id(identifier: str) -> ParsedRevocationRegistryId:
    """Parse a namespaced or legacy revocation registry definition identifier."""
    if not isinstance(identifier, str):
        raise InvalidIdentifierError(
            f"Invalid revocation registry identifier: {identifier}"
        )

    match = NAMESPACED_REV_REG_DEF_ID.match(identifier)
    if match:
        return ParsedRevocationRegistryId(
            did=f"did:indy:{match['namespace']}:{match['namespace_identifier']}",
            schema_seq_no=int(match["schema_seq_no"]),
            credential_definition_tag=match["credential_definition_tag"],
            revocation_registry_tag=match["revocation_registry_tag"],
            namespace=match["namespace"],
            namespace_identifier=match["namespace_identifier"],
        )

    match = LEGACY_REV_REG_DEF_ID.match(identifier)
    if match:
        return ParsedRevocationRegistryId(
            did=match["did"],
            schema_seq_no=int(match["schema_seq_no"]),
            credential_definition_tag=match["credential_definition_tag"],
            revocation_registry_tag=match["revocation_registry_tag"],
            namespace_identifier=match["did"],
        )

    raise InvalidIdentifierError(
        f"Invalid revocation registry identifier: {identifier}"
    )


def make_unqualified_rev_reg_def_id(
    did: str, schema_seq_no: int, cred_def_tag: str, rev_reg_tag: str
) -> str:
    """Derive the legacy (unqualified) revocation registry definition id."""
    return f"{did}:4:{did}:3:CL:{schema_seq_no}:{cred_def_tag}:CL_ACCUM:{rev_reg_tag}"
