"""IPFS content-addressed AnonCreds registry."""

import json
import logging
from typing import Any, NamedTuple, Optional, Pattern, Sequence, Type, Union

from ....ipfs import IpfsClient, IpfsError
from ....messaging.models.base import BaseModel, BaseModelError
from ....messaging.valid import IpfsUri
from ...base import (
    AnonCredsResolutionError,
    BaseAnonCredsRegistrar,
    BaseAnonCredsResolver,
    InvalidIdentifierError,
)
from ...identifiers import (
    SUPPORTED_IDENTIFIER,
    make_content_id_uri,
    parse_content_id,
    parse_did,
)
from ...models.anoncreds_cred_def import (
    CredDef,
    CredDefResult,
    CredDefState,
    GetCredDefResult,
)
from ...models.anoncreds_revocation import (
    GetRevListResult,
    GetRevRegDefResult,
    RevList,
    RevListResult,
    RevListState,
    RevRegDef,
    RevRegDefResult,
    RevRegDefState,
)
from ...models.anoncreds_schema import (
    AnonCredsSchema,
    GetSchemaResult,
    SchemaResult,
    SchemaState,
)

LOGGER = logging.getLogger(__name__)

ERROR_INVALID = "invalid"
ERROR_NOT_FOUND = "notFound"
ERROR_UNKNOWN = "unknownError"

MESSAGE_INVALID_ID = "id provided is invalid"
MESSAGE_FETCH_ERROR = "ipfs fetch error"
MESSAGE_UNPARSABLE = "contents could not be parsed"


class FetchSuccess(NamedTuple):
    """Object fetched from the store."""

    result: BaseModel


class FetchFailure(NamedTuple):
    """Resolution failure, as reported in resolution metadata."""

    error: str
    message: str

    @property
    def resolution_metadata(self) -> dict:
        """Resolution metadata describing the failure."""
        return {"error": self.error, "message": self.message}


FetchResult = Union[FetchSuccess, FetchFailure]


def canonical_bytes(obj: BaseModel) -> bytes:
    """Serialize a model to the exact bytes that get uploaded."""
    return json.dumps(
        obj.serialize(), sort_keys=True, separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def project_rev_reg_def(content: dict) -> dict:
    """Keep only the fields of a stored revocation registry definition."""
    value = content["value"]
    return {
        "issuerId": content["issuerId"],
        "revocDefType": content["revocDefType"],
        "value": {
            "maxCredNum": value["maxCredNum"],
            "tailsHash": value["tailsHash"],
            "tailsLocation": value["tailsLocation"],
            "publicKeys": {
                "accumKey": {"z": value["publicKeys"]["accumKey"]["z"]},
            },
        },
        "tag": content["tag"],
        "credDefId": content["credDefId"],
    }


class IpfsRegistry(BaseAnonCredsResolver, BaseAnonCredsRegistrar):
    """Resolve and register AnonCreds objects stored on IPFS.

    Objects are written as canonical JSON and identified by `ipfs://<cid>`,
    where the content id is minted by the gateway. Nothing is ever updated
    or deleted in place.
    """

    method_name = "ipfs"

    def __init__(
        self,
        ipfs: IpfsClient,
        *,
        logger: logging.Logger = None,
        expose_error_cause: bool = True,
    ):
        """Initialize the registry.

        Args:
            ipfs: client for the IPFS gateway
            logger: logger for failures, the module logger by default
            expose_error_cause: report upload failure causes in registration
                metadata

        """
        self._ipfs = ipfs
        self._logger = logger or LOGGER
        self._expose_error_cause = expose_error_cause
        self._supported_identifiers_regex = SUPPORTED_IDENTIFIER

    @property
    def supported_identifiers_regex(self) -> Pattern:
        """Supported Identifiers regex."""
        return self._supported_identifiers_regex

    async def _get_object(
        self, object_id: str, model_class: Type[BaseModel], project=None
    ) -> FetchResult:
        """Fetch and decode the object stored under an `ipfs://` identifier."""
        try:
            cid = parse_content_id(object_id)
        except InvalidIdentifierError:
            return FetchFailure(ERROR_INVALID, MESSAGE_INVALID_ID)

        try:
            content = await self._ipfs.get_file(cid)
        except IpfsError as err:
            self._logger.error(
                "Failed to fetch %s from IPFS",
                cid,
                extra={"cid": cid, "error": err.roll_up},
            )
            return FetchFailure(ERROR_NOT_FOUND, MESSAGE_FETCH_ERROR)

        try:
            data = json.loads(content.decode("utf-8"))
            if project:
                data = project(data)
            result = model_class.deserialize(data)
        except (ValueError, KeyError, TypeError, BaseModelError) as err:
            self._logger.error(
                "Failed to parse content of %s",
                cid,
                extra={"cid": cid, "error": str(err)},
            )
            return FetchFailure(ERROR_INVALID, MESSAGE_UNPARSABLE)

        return FetchSuccess(result)

    async def _upload(self, obj: BaseModel, kind: str) -> str:
        """Upload an object and return its new identifier."""
        cid = await self._ipfs.upload_file(canonical_bytes(obj))
        self._logger.info("Registered %s as %s", kind, make_content_id_uri(cid))
        return make_content_id_uri(cid)

    def _upload_failed(self, kind: str, obj: BaseModel, err: IpfsError) -> dict:
        """Log an upload failure and build the registration metadata."""
        self._logger.error(
            "Failed to upload %s to IPFS",
            kind,
            extra={"object": obj.serialize(), "error": err.roll_up},
        )
        if not self._expose_error_cause:
            return {}
        return {"cause": {"type": err.__class__.__name__, "message": err.roll_up}}

    async def get_schema(self, profile: Any, schema_id: str) -> GetSchemaResult:
        """Get a schema from the registry."""
        fetched = await self._get_object(schema_id, AnonCredsSchema)
        if isinstance(fetched, FetchFailure):
            return GetSchemaResult(
                schema=None,
                schema_id=schema_id,
                resolution_metadata=fetched.resolution_metadata,
                schema_metadata={},
            )
        return GetSchemaResult(
            schema=fetched.result,
            schema_id=schema_id,
            resolution_metadata={},
            schema_metadata={},
        )

    async def register_schema(
        self,
        profile: Any,
        schema: AnonCredsSchema,
        options: Optional[dict] = None,
    ) -> SchemaResult:
        """Register a schema on the registry."""
        try:
            schema_id = await self._upload(schema, "schema")
        except IpfsError as err:
            return SchemaResult(
                schema_state=SchemaState(
                    state=SchemaState.STATE_FAILED,
                    schema_id=None,
                    schema=schema,
                    reason=ERROR_UNKNOWN,
                ),
                registration_metadata=self._upload_failed("schema", schema, err),
                schema_metadata={},
            )

        return SchemaResult(
            schema_state=SchemaState(
                state=SchemaState.STATE_FINISHED,
                schema_id=schema_id,
                schema=schema,
            ),
            registration_metadata={},
            schema_metadata={},
        )

    async def get_credential_definition(
        self, profile: Any, credential_definition_id: str
    ) -> GetCredDefResult:
        """Get a credential definition from the registry."""
        fetched = await self._get_object(credential_definition_id, CredDef)
        if isinstance(fetched, FetchFailure):
            return GetCredDefResult(
                credential_definition_id=credential_definition_id,
                credential_definition=None,
                resolution_metadata=fetched.resolution_metadata,
                credential_definition_metadata={},
            )
        return GetCredDefResult(
            credential_definition_id=credential_definition_id,
            credential_definition=fetched.result,
            resolution_metadata={},
            credential_definition_metadata={},
        )

    async def register_credential_definition(
        self,
        profile: Any,
        credential_definition: CredDef,
        options: Optional[dict] = None,
    ) -> CredDefResult:
        """Register a credential definition on the registry.

        The referenced schema must resolve first; otherwise nothing is
        uploaded.
        """
        schema_id = credential_definition.schema_id
        schema_result = await self.get_schema(profile, schema_id)
        if schema_result.error:
            self._logger.error(
                "Schema ID %s does not correspond to a valid schema",
                schema_id,
                extra={
                    "credential_definition": credential_definition.serialize(),
                    "schema_error": schema_result.error,
                },
            )
            return self._cred_def_failed(credential_definition, ERROR_INVALID, {})

        try:
            cred_def_id = await self._upload(
                credential_definition, "credential definition"
            )
        except IpfsError as err:
            return self._cred_def_failed(
                credential_definition,
                ERROR_UNKNOWN,
                self._upload_failed(
                    "credential definition", credential_definition, err
                ),
            )

        return CredDefResult(
            credential_definition_state=CredDefState(
                state=CredDefState.STATE_FINISHED,
                credential_definition_id=cred_def_id,
                credential_definition=credential_definition,
            ),
            registration_metadata={},
            credential_definition_metadata={},
        )

    def _cred_def_failed(
        self, credential_definition: CredDef, reason: str, metadata: dict
    ) -> CredDefResult:
        return CredDefResult(
            credential_definition_state=CredDefState(
                state=CredDefState.STATE_FAILED,
                credential_definition_id=None,
                credential_definition=credential_definition,
                reason=reason,
            ),
            registration_metadata=metadata,
            credential_definition_metadata={},
        )

    async def get_revocation_registry_definition(
        self, profile: Any, revocation_registry_id: str
    ) -> GetRevRegDefResult:
        """Get a revocation registry definition from the registry."""
        fetched = await self._get_object(
            revocation_registry_id, RevRegDef, project=project_rev_reg_def
        )
        if isinstance(fetched, FetchFailure):
            return GetRevRegDefResult(
                revocation_registry=None,
                revocation_registry_id=revocation_registry_id,
                resolution_metadata=fetched.resolution_metadata,
                revocation_registry_metadata={},
            )
        return GetRevRegDefResult(
            revocation_registry=fetched.result,
            revocation_registry_id=revocation_registry_id,
            resolution_metadata={},
            revocation_registry_metadata={},
        )

    async def register_revocation_registry_definition(
        self,
        profile: Any,
        revocation_registry_definition: RevRegDef,
        options: Optional[dict] = None,
    ) -> RevRegDefResult:
        """Register a revocation registry definition on the registry."""
        try:
            rev_reg_def_id = await self._upload(
                revocation_registry_definition, "revocation registry definition"
            )
        except IpfsError as err:
            return RevRegDefResult(
                revocation_registry_definition_state=RevRegDefState(
                    state=RevRegDefState.STATE_FAILED,
                    revocation_registry_definition_id=None,
                    revocation_registry_definition=revocation_registry_definition,
                    reason=ERROR_UNKNOWN,
                ),
                registration_metadata=self._upload_failed(
                    "revocation registry definition",
                    revocation_registry_definition,
                    err,
                ),
                revocation_registry_definition_metadata={},
            )

        return RevRegDefResult(
            revocation_registry_definition_state=RevRegDefState(
                state=RevRegDefState.STATE_FINISHED,
                revocation_registry_definition_id=rev_reg_def_id,
                revocation_registry_definition=revocation_registry_definition,
            ),
            registration_metadata={},
            revocation_registry_definition_metadata={},
        )

    async def get_revocation_list(
        self, profile: Any, revocation_registry_id: str, timestamp: int
    ) -> GetRevListResult:
        """Get the revocation list of a registry as of a timestamp.

        Lists are stored as standalone objects, so there is no history to
        search. Use `get_revocation_status_list` with the list's own id.
        """
        raise AnonCredsResolutionError(
            "Revocation list lookup by registry and timestamp is not implemented"
        )

    async def get_revocation_status_list(
        self, profile: Any, revocation_list_id: str
    ) -> GetRevListResult:
        """Get a registered revocation list by its own identifier."""
        fetched = await self._get_object(revocation_list_id, RevList)
        if isinstance(fetched, FetchFailure):
            return GetRevListResult(
                revocation_list=None,
                resolution_metadata=fetched.resolution_metadata,
                revocation_registry_metadata={},
                revocation_list_id=revocation_list_id,
            )
        return GetRevListResult(
            revocation_list=fetched.result,
            resolution_metadata={},
            revocation_registry_metadata={},
            revocation_list_id=revocation_list_id,
        )

    def _check_rev_list(self, rev_reg_def: RevRegDef, rev_list: RevList) -> bool:
        """Check that a list belongs with its registry definition."""
        try:
            def_issuer = parse_did(rev_reg_def.issuer_id)
            list_issuer = parse_did(rev_list.issuer_id)
        except InvalidIdentifierError as err:
            self._logger.error(
                "Revocation list issuer is not a supported DID",
                extra={"error": err.roll_up},
            )
            return False

        if def_issuer != list_issuer:
            self._logger.error(
                "Revocation list issuer %s does not match registry issuer %s",
                rev_list.issuer_id,
                rev_reg_def.issuer_id,
            )
            return False

        if not IpfsUri.PATTERN.match(rev_list.rev_reg_def_id or ""):
            self._logger.error(
                "Revocation registry definition id %s is invalid",
                rev_list.rev_reg_def_id,
            )
            return False

        max_cred_num = rev_reg_def.value.max_cred_num
        if len(rev_list.revocation_list) != max_cred_num:
            self._logger.error(
                "Revocation list has %d entries, registry capacity is %d",
                len(rev_list.revocation_list),
                max_cred_num,
            )
            return False

        return True

    def _rev_list_failed(
        self, rev_list: RevList, reason: str, metadata: dict
    ) -> RevListResult:
        return RevListResult(
            revocation_list_state=RevListState(
                state=RevListState.STATE_FAILED,
                revocation_list=rev_list,
                reason=reason,
            ),
            registration_metadata=metadata,
            revocation_list_metadata={},
        )

    async def register_revocation_list(
        self,
        profile: Any,
        rev_reg_def: RevRegDef,
        rev_list: RevList,
        options: Optional[dict] = None,
    ) -> RevListResult:
        """Register a revocation list on the registry."""
        if not self._check_rev_list(rev_reg_def, rev_list):
            return self._rev_list_failed(rev_list, ERROR_INVALID, {})

        try:
            rev_list_id = await self._upload(rev_list, "revocation list")
        except IpfsError as err:
            return self._rev_list_failed(
                rev_list,
                ERROR_UNKNOWN,
                self._upload_failed("revocation list", rev_list, err),
            )

        return RevListResult(
            revocation_list_state=RevListState(
                state=RevListState.STATE_FINISHED,
                revocation_list=rev_list,
                revocation_list_id=rev_list_id,
            ),
            registration_metadata={},
            revocation_list_metadata={},
        )

    async def update_revocation_list(
        self,
        profile: Any,
        rev_reg_def: RevRegDef,
        prev_list: RevList,
        curr_list: RevList,
        revoked: Sequence[int],
        options: Optional[dict] = None,
    ) -> RevListResult:
        """Register the current state of a revocation list as a new object."""
        if prev_list.rev_reg_def_id != curr_list.rev_reg_def_id:
            self._logger.error(
                "Revocation lists reference different registries: %s, %s",
                prev_list.rev_reg_def_id,
                curr_list.rev_reg_def_id,
            )
            return self._rev_list_failed(curr_list, ERROR_INVALID, {})

        size = len(curr_list.revocation_list)
        unmarked = [
            index
            for index in revoked
            if not 0 <= index < size or curr_list.revocation_list[index] != 1
        ]
        if unmarked:
            self._logger.error(
                "Revoked indexes %s are not marked in the revocation list", unmarked
            )
            return self._rev_list_failed(curr_list, ERROR_INVALID, {})

        return await self.register_revocation_list(
            profile, rev_reg_def, curr_list, options
        )
