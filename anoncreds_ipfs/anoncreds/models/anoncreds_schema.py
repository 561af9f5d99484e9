"""AnonCreds schema models."""

from typing import Any, Dict, List, Optional

from marshmallow import EXCLUDE, fields
from marshmallow.validate import OneOf

from ...messaging.models.base import BaseModel, BaseModelSchema
from ...messaging.valid import (
    IPFS_URI_EXAMPLE,
    ISSUER_ID_EXAMPLE,
    IssuerId,
)


class AnonCredsSchema(BaseModel):
    """An AnonCreds Schema object."""

    class Meta:
        """AnonCredsSchema metadata."""

        schema_class = "AnonCredsSchemaSchema"

    def __init__(
        self, issuer_id: str, attr_names: List[str], name: str, version: str, **kwargs
    ):
        """Initialize an instance.

        Args:
            issuer_id: Issuer ID
            attr_names: Schema Attribute Name list
            name: Schema name
            version: Schema version

        """
        super().__init__(**kwargs)
        self.issuer_id = issuer_id
        self.attr_names = attr_names
        self.name = name
        self.version = version


class AnonCredsSchemaSchema(BaseModelSchema):
    """Marshmallow schema for anoncreds schema."""

    class Meta:
        """AnonCredsSchemaSchema metadata."""

        model_class = AnonCredsSchema
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
    attr_names = fields.List(
        fields.Str(metadata={"description": "Attribute name", "example": "score"}),
        required=True,
        metadata={"description": "Schema attribute names"},
        data_key="attrNames",
    )
    name = fields.Str(
        required=True,
        metadata={"description": "Schema name", "example": "Example schema"},
    )
    version = fields.Str(
        required=True, metadata={"description": "Schema version", "example": "1.0"}
    )


class GetSchemaResult(BaseModel):
    """Result of resolving a schema.

    On failure `schema` is None and `resolution_metadata` holds `error` and
    `message`.
    """

    class Meta:
        """GetSchemaResult metadata."""

        schema_class = "GetSchemaResultSchema"

    def __init__(
        self,
        schema: Optional[AnonCredsSchema],
        schema_id: str,
        resolution_metadata: Dict[str, Any],
        schema_metadata: Dict[str, Any],
        **kwargs,
    ):
        """Initialize an instance."""
        super().__init__(**kwargs)
        self.schema_value = schema
        self.schema_id = schema_id
        self.resolution_metadata = resolution_metadata
        self.schema_metadata = schema_metadata

    @property
    def schema(self) -> Optional[AnonCredsSchema]:
        """Alias for schema_value.

        `schema` can't be used directly due to a limitation of marshmallow.
        """
        return self.schema_value

    @property
    def error(self) -> Optional[str]:
        """Resolution error code, if resolution failed."""
        return self.resolution_metadata.get("error")


class GetSchemaResultSchema(BaseModelSchema):
    """Parameters and validators for a schema resolution result."""

    class Meta:
        """GetSchemaResultSchema metadata."""

        model_class = GetSchemaResult
        unknown = EXCLUDE

    schema_value = fields.Nested(
        AnonCredsSchemaSchema(), data_key="schema", allow_none=True
    )
    schema_id = fields.Str(
        metadata={"description": "Schema identifier", "example": IPFS_URI_EXAMPLE}
    )
    resolution_metadata = fields.Dict()
    schema_metadata = fields.Dict()


class SchemaState(BaseModel):
    """Model representing the state of a schema after beginning registration."""

    STATE_FINISHED = "finished"
    STATE_FAILED = "failed"

    class Meta:
        """SchemaState metadata."""

        schema_class = "SchemaStateSchema"

    def __init__(
        self,
        state: str,
        schema_id: Optional[str],
        schema: AnonCredsSchema,
        reason: Optional[str] = None,
        **kwargs,
    ):
        """Initialize a new SchemaState."""
        super().__init__(**kwargs)
        self.state = state
        self.schema_id = schema_id
        self.schema_value = schema
        self.reason = reason

    @property
    def schema(self) -> AnonCredsSchema:
        """Alias to schema_value.

        `schema` can't be used directly due to limitations of marshmallow.
        """
        return self.schema_value


class SchemaStateSchema(BaseModelSchema):
    """Parameters and validators for schema state."""

    class Meta:
        """SchemaStateSchema metadata."""

        model_class = SchemaState

    state = fields.Str(
        validate=OneOf([SchemaState.STATE_FINISHED, SchemaState.STATE_FAILED])
    )
    schema_id = fields.Str(
        metadata={"description": "Schema identifier", "example": IPFS_URI_EXAMPLE}
    )
    schema_value = fields.Nested(AnonCredsSchemaSchema(), data_key="schema")
    reason = fields.Str(metadata={"description": "Reason for a failed registration"})


class SchemaResult(BaseModel):
    """Result of registering a schema."""

    class Meta:
        """SchemaResult metadata."""

        schema_class = "SchemaResultSchema"

    def __init__(
        self,
        schema_state: SchemaState,
        registration_metadata: Optional[dict] = None,
        schema_metadata: Optional[dict] = None,
        **kwargs,
    ):
        """Initialize an instance.

        Args:
            schema_state: Schema state
            registration_metadata: Registration Metadata
            schema_metadata: Schema Metadata

        """
        super().__init__(**kwargs)
        self.schema_state = schema_state
        self.registration_metadata = registration_metadata or {}
        self.schema_metadata = schema_metadata or {}


class SchemaResultSchema(BaseModelSchema):
    """Parameters and validators for schema registration result."""

    class Meta:
        """SchemaResultSchema metadata."""

        model_class = SchemaResult

    schema_state = fields.Nested(SchemaStateSchema())
    registration_metadata = fields.Dict()
    schema_metadata = fields.Dict()
