"""AnonCreds credential definition models."""

from typing import Any, Dict, Optional

from marshmallow import EXCLUDE, fields
from marshmallow.validate import OneOf

from ...messaging.models.base import BaseModel, BaseModelSchema
from ...messaging.valid import (
    IPFS_URI_EXAMPLE,
    ISSUER_ID_EXAMPLE,
    IpfsUri,
    IssuerId,
)


class CredDef(BaseModel):
    """AnonCredsCredDef.

    `value` holds the public key material and is stored as given.
    """

    class Meta:
        """AnonCredsCredDef metadata."""

        schema_class = "CredDefSchema"

    def __init__(
        self,
        issuer_id: str,
        schema_id: str,
        type: str,
        tag: str,
        value: Dict[str, Any],
        **kwargs,
    ):
        """Initialize an instance.

        Args:
            issuer_id: Issuer ID
            schema_id: Identifier of the schema this definition is based on
            type: Signature type
            tag: Tag
            value: Public key material

        """
        super().__init__(**kwargs)
        self.issuer_id = issuer_id
        self.schema_id = schema_id
        self.type = type
        self.tag = tag
        self.value = value


class CredDefSchema(BaseModelSchema):
    """CredDefSchema."""

    class Meta:
        """CredDefSchema metadata."""

        model_class = CredDef
        unknown = EXCLUDE

    issuer_id = fields.Str(
        validate=IssuerId(),
        required=True,
        metadata={
            "description": "Issuer Identifier of the credential definition or schema",
            "example": ISSUER_ID_EXAMPLE,
        },
        data_key="issuerId",
    )
    schema_id = fields.Str(
        validate=IpfsUri(),
        required=True,
        data_key="schemaId",
        metadata={"description": "Schema identifier", "example": IPFS_URI_EXAMPLE},
    )
    type = fields.Str(required=True, validate=OneOf(["CL"]))
    tag = fields.Str(
        required=True,
        metadata={
            "description": (
                "The tag value passed in by the Issuer to "
                "an AnonCred's Credential Definition create and store implementation."
            ),
            "example": "default",
        },
    )
    value = fields.Dict(required=True)


class CredDefState(BaseModel):
    """CredDefState."""

    STATE_FINISHED = "finished"
    STATE_FAILED = "failed"

    class Meta:
        """CredDefState metadata."""

        schema_class = "CredDefStateSchema"

    def __init__(
        self,
        state: str,
        credential_definition_id: Optional[str],
        credential_definition: CredDef,
        reason: Optional[str] = None,
    ):
        """Initialize an instance."""
        self.state = state
        self.credential_definition_id = credential_definition_id
        self.credential_definition = credential_definition
        self.reason = reason


class CredDefStateSchema(BaseModelSchema):
    """CredDefStateSchema."""

    class Meta:
        """CredDefStateSchema metadata."""

        model_class = CredDefState

    state = fields.Str(
        validate=OneOf([CredDefState.STATE_FINISHED, CredDefState.STATE_FAILED])
    )
    credential_definition_id = fields.Str(
        metadata={
            "description": "credential definition id",
            "example": IPFS_URI_EXAMPLE,
        },
        allow_none=True,
    )
    credential_definition = fields.Nested(
        CredDefSchema(), metadata={"description": "credential definition"}
    )
    reason = fields.Str()


class CredDefResult(BaseModel):
    """Cred def result."""

    class Meta:
        """CredDefResult metadata."""

        schema_class = "CredDefResultSchema"

    def __init__(
        self,
        credential_definition_state: CredDefState,
        registration_metadata: dict,
        credential_definition_metadata: dict,
        **kwargs,
    ):
        """Initialize an instance."""
        super().__init__(**kwargs)
        self.credential_definition_state = credential_definition_state
        self.registration_metadata = registration_metadata
        self.credential_definition_metadata = credential_definition_metadata


class CredDefResultSchema(BaseModelSchema):
    """Cred def result schema."""

    class Meta:
        """CredDefResultSchema metadata."""

        model_class = CredDefResult

    credential_definition_state = fields.Nested(CredDefStateSchema())
    registration_metadata = fields.Dict()
    credential_definition_metadata = fields.Dict()


class GetCredDefResult(BaseModel):
    """Result of resolving a credential definition."""

    class Meta:
        """GetCredDefResult metadata."""

        schema_class = "GetCredDefResultSchema"

    def __init__(
        self,
        credential_definition_id: str,
        credential_definition: Optional[CredDef],
        resolution_metadata: dict,
        credential_definition_metadata: dict,
        **kwargs,
    ):
        """Initialize an instance.

        Args:
            credential_definition_id: Credential definition ID
            credential_definition: Credential definition, None on failure
            resolution_metadata: Resolution metadata
            credential_definition_metadata: Credential definition metadata

        """
        super().__init__(**kwargs)
        self.credential_definition_id = credential_definition_id
        self.credential_definition = credential_definition
        self.resolution_metadata = resolution_metadata
        self.credential_definition_metadata = credential_definition_metadata

    @property
    def error(self) -> Optional[str]:
        """Resolution error code, if resolution failed."""
        return self.resolution_metadata.get("error")


class GetCredDefResultSchema(BaseModelSchema):
    """GetCredDefResultSchema."""

    class Meta:
        """GetCredDefResultSchema metadata."""

        model_class = GetCredDefResult
        unknown = EXCLUDE

    credential_definition_id = fields.Str(
        metadata={
            "description": "credential definition id",
            "example": IPFS_URI_EXAMPLE,
        },
    )
    credential_definition = fields.Nested(
        CredDefSchema(),
        allow_none=True,
        metadata={"description": "credential definition"},
    )
    resolution_metadata = fields.Dict()
    credential_definition_metadata = fields.Dict()
