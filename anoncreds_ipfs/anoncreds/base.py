"""Base Registry."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Pattern, Sequence

from ..core.error import BaseError
from .models.anoncreds_cred_def import (
    CredDef,
    CredDefResult,
    GetCredDefResult,
)
from .models.anoncreds_revocation import (
    GetRevListResult,
    GetRevRegDefResult,
    RevList,
    RevListResult,
    RevRegDef,
    RevRegDefResult,
)
from .models.anoncreds_schema import AnonCredsSchema, GetSchemaResult, SchemaResult


class BaseAnonCredsError(BaseError):
    """Base error class for AnonCreds."""


class AnonCredsResolutionError(BaseAnonCredsError):
    """Raised when resolving an AnonCreds object fails."""


class InvalidIdentifierError(BaseAnonCredsError):
    """Raised when an identifier does not have a supported form."""


class RevocationListCapacityError(BaseAnonCredsError):
    """Raised when a delta index falls outside the registry capacity."""


class BaseAnonCredsHandler(ABC):
    """Base Anon Creds Handler."""

    @property
    @abstractmethod
    def supported_identifiers_regex(self) -> Pattern:
        """Regex to match supported identifiers."""

    async def supports(self, identifier: str) -> bool:
        """Determine whether this registry supports the given identifier."""
        return bool(self.supported_identifiers_regex.fullmatch(identifier))


class BaseAnonCredsResolver(BaseAnonCredsHandler):
    """Base Anon Creds Resolver.

    The `profile` argument is the caller's execution context. It is passed
    through untouched and may be None.
    """

    @abstractmethod
    async def get_schema(self, profile: Any, schema_id: str) -> GetSchemaResult:
        """Get a schema from the registry."""

    @abstractmethod
    async def get_credential_definition(
        self, profile: Any, credential_definition_id: str
    ) -> GetCredDefResult:
        """Get a credential definition from the registry."""

    @abstractmethod
    async def get_revocation_registry_definition(
        self, profile: Any, revocation_registry_id: str
    ) -> GetRevRegDefResult:
        """Get a revocation registry definition from the registry."""

    @abstractmethod
    async def get_revocation_list(
        self, profile: Any, revocation_registry_id: str, timestamp: int
    ) -> GetRevListResult:
        """Get the revocation list of a registry as of a timestamp."""

    @abstractmethod
    async def get_revocation_status_list(
        self, profile: Any, revocation_list_id: str
    ) -> GetRevListResult:
        """Get a registered revocation list by its own identifier."""


class BaseAnonCredsRegistrar(BaseAnonCredsHandler):
    """Base Anon Creds Registrar."""

    @abstractmethod
    async def register_schema(
        self,
        profile: Any,
        schema: AnonCredsSchema,
        options: Optional[dict] = None,
    ) -> SchemaResult:
        """Register a schema on the registry."""

    @abstractmethod
    async def register_credential_definition(
        self,
        profile: Any,
        credential_definition: CredDef,
        options: Optional[dict] = None,
    ) -> CredDefResult:
        """Register a credential definition on the registry."""

    @abstractmethod
    async def register_revocation_registry_definition(
        self,
        profile: Any,
        revocation_registry_definition: RevRegDef,
        options: Optional[dict] = None,
    ) -> RevRegDefResult:
        """Register a revocation registry definition on the registry."""

    @abstractmethod
    async def register_revocation_list(
        self,
        profile: Any,
        rev_reg_def: RevRegDef,
        rev_list: RevList,
        options: Optional[dict] = None,
    ) -> RevListResult:
        """Register a revocation list on the registry."""

    @abstractmethod
    async def update_revocation_list(
        self,
        profile: Any,
        rev_reg_def: RevRegDef,
        prev_list: RevList,
        curr_list: RevList,
        revoked: Sequence[int],
        options: Optional[dict] = None,
    ) -> RevListResult:
        """Update a revocation list on the registry."""
