"""AnonCreds revocation registry and status list models."""

from typing import Any, Dict, List, Optional

from marshmallow import EXCLUDE, fields
from marshmallow.validate import OneOf, Range
from typing_extensions import Literal

from ...messaging.models.base import BaseModel, BaseModelSchema
from ...messaging.valid import (
    IPFS_URI_EXAMPLE,
    ISSUER_ID_EXAMPLE,
    IpfsUri,
    IssuerId,
)


class RevRegDefValue(BaseModel):
    """RevRegDefValue model."""

    class Meta:
        """RevRegDefValue metadata."""

        schema_class = "RevRegDefValueSchema"

    def __init__(
        self,
        public_keys: dict,
        max_cred_num: int,
        tails_location: str,
        tails_hash: str,
        **kwargs,
    ):
        """Initialize an instance.

        Args:
            public_keys: Public Keys
            max_cred_num: Max. number of Creds
            tails_location: Tails file location
            tails_hash: Tails file hash

        """
        super().__init__(**kwargs)
        self.public_keys = public_keys
        self.max_cred_num = max_cred_num
        self.tails_location = tails_location
        self.tails_hash = tails_hash


class RevRegDefValueSchema(BaseModelSchema):
    """RevRegDefValue schema."""

    class Meta:
        """RevRegDefValueSchema metadata."""

        model_class = RevRegDefValue
        unknown = EXCLUDE

    public_keys = fields.Dict(
        required=True,
        data_key="publicKeys",
        metadata={"example": {"accumKey": {"z": "1 0BB...386"}}},
    )
    max_cred_num = fields.Int(
        required=True,
        data_key="maxCredNum",
        validate=Range(min=1),
        metadata={"example": 777},
    )
    tails_location = fields.Str(
        required=True,
        data_key="tailsLocation",
        metadata={
            "example": "https://tails.example.com/hash/7Qen9RDyemMuV7xGQvp7NjwMSpyHie"
        },
    )
    tails_hash = fields.Str(
        required=True,
        data_key="tailsHash",
        metadata={"example": "7Qen9RDyemMuV7xGQvp7NjwMSpyHieJyBakycxN7dX7P"},
    )


class RevRegDef(BaseModel):
    """RevRegDef."""

    class Meta:
        """RevRegDef metadata."""

        schema_class = "RevRegDefSchema"

    def __init__(
        self,
        issuer_id: str,
        type: Literal["CL_ACCUM"],
        cred_def_id: str,
        tag: str,
        value: RevRegDefValue,
        **kwargs,
    ):
        """Initialize an instance.

        Args:
            issuer_id: Issuer ID
            type: type
            cred_def_id: Cred Def ID
            tag: Tag
            value: Rev Reg Def Value

        """
        super().__init__(**kwargs)
        self.issuer_id = issuer_id
        self.type = type
        self.cred_def_id = cred_def_id
        self.tag = tag
        self.value = value


class RevRegDefSchema(BaseModelSchema):
    """RevRegDefSchema."""

    class Meta:
        """RevRegDefSchema metadata."""

        model_class = RevRegDef
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
    type = fields.Str(required=True, data_key="revocDefType")
    cred_def_id = fields.Str(
        validate=IpfsUri(),
        required=True,
        metadata={
            "description": "Credential definition identifier",
            "example": IPFS_URI_EXAMPLE,
        },
        data_key="credDefId",
    )
    tag = fields.Str(
        required=True,
        metadata={
            "description": "tag for the revocation registry definition",
            "example": "default",
        },
    )
    value = fields.Nested(RevRegDefValueSchema(), required=True)


class RevRegDefState(BaseModel):
    """RevRegDefState."""

    STATE_FINISHED = "finished"
    STATE_FAILED = "failed"

    class Meta:
        """RevRegDefState metadata."""

        schema_class = "RevRegDefStateSchema"

    def __init__(
        self,
        state: str,
        revocation_registry_definition_id: Optional[str],
        revocation_registry_definition: RevRegDef,
        reason: Optional[str] = None,
    ):
        """Initialize an instance.

        Args:
            state: State
            revocation_registry_definition_id: Rev Reg Definition ID
            revocation_registry_definition: Rev Reg Definition
            reason: Failure reason

        """
        self.state = state
        self.revocation_registry_definition_id = revocation_registry_definition_id
        self.revocation_registry_definition = revocation_registry_definition
        self.reason = reason


class RevRegDefStateSchema(BaseModelSchema):
    """RevRegDefStateSchema."""

    class Meta:
        """RevRegDefStateSchema metadata."""

        model_class = RevRegDefState
        unknown = EXCLUDE

    state = fields.Str(
        validate=OneOf([RevRegDefState.STATE_FINISHED, RevRegDefState.STATE_FAILED])
    )
    revocation_registry_definition_id = fields.Str(
        allow_none=True,
        metadata={
            "description": "revocation registry definition id",
            "example": IPFS_URI_EXAMPLE,
        },
    )
    revocation_registry_definition = fields.Nested(
        RevRegDefSchema(), metadata={"description": "revocation registry definition"}
    )
    reason = fields.Str()


class RevRegDefResult(BaseModel):
    """Result of registering a revocation registry definition."""

    class Meta:
        """RevRegDefResult metadata."""

        schema_class = "RevRegDefResultSchema"

    def __init__(
        self,
        revocation_registry_definition_state: RevRegDefState,
        registration_metadata: dict,
        revocation_registry_definition_metadata: dict,
        **kwargs,
    ):
        """Initialize an instance."""
        super().__init__(**kwargs)
        self.revocation_registry_definition_state = revocation_registry_definition_state
        self.registration_metadata = registration_metadata
        self.revocation_registry_definition_metadata = (
            revocation_registry_definition_metadata
        )

    @property
    def rev_reg_def_id(self):
        """Revocation Registry Definition ID."""
        return (
            self.revocation_registry_definition_state.revocation_registry_definition_id
        )

    @property
    def rev_reg_def(self):
        """Revocation Registry Definition."""
        return self.revocation_registry_definition_state.revocation_registry_definition


class RevRegDefResultSchema(BaseModelSchema):
    """RevRegDefResultSchema."""

    class Meta:
        """RevRegDefResultSchema metadata."""

        model_class = RevRegDefResult
        unknown = EXCLUDE

    revocation_registry_definition_state = fields.Nested(RevRegDefStateSchema())
    registration_metadata = fields.Dict()
    revocation_registry_definition_metadata = fields.Dict()


class GetRevRegDefResult(BaseModel):
    """GetRevRegDefResult."""

    class Meta:
        """GetRevRegDefResult metadata."""

        schema_class = "GetRevRegDefResultSchema"

    def __init__(
        self,
        revocation_registry: Optional[RevRegDef],
        revocation_registry_id: str,
        resolution_metadata: Dict[str, Any],
        revocation_registry_metadata: Dict[str, Any],
        **kwargs,
    ):
        """Initialize an instance.

        Args:
            revocation_registry: Revocation registry, None on failure
            revocation_registry_id: Revocation Registry ID
            resolution_metadata: Resolution metadata
            revocation_registry_metadata: Revocation Registry metadata

        """
        super().__init__(**kwargs)
        self.revocation_registry = revocation_registry
        self.revocation_registry_id = revocation_registry_id
        self.resolution_metadata = resolution_metadata
        self.revocation_registry_metadata = revocation_registry_metadata

    @property
    def error(self) -> Optional[str]:
        """Resolution error code, if resolution failed."""
        return self.resolution_metadata.get("error")


class GetRevRegDefResultSchema(BaseModelSchema):
    """GetRevRegDefResultSchema."""

    class Meta:
        """GetRevRegDefResultSchema metadata."""

        model_class = GetRevRegDefResult
        unknown = EXCLUDE

    revocation_registry = fields.Nested(RevRegDefSchema(), allow_none=True)
    revocation_registry_id = fields.Str()
    resolution_metadata = fields.Dict()
    revocation_registry_metadata = fields.Dict()


class RevList(BaseModel):
    """RevList."""

    class Meta:
        """RevList metadata."""

        schema_class = "RevListSchema"

    def __init__(
        self,
        issuer_id: str,
        rev_reg_def_id: str,
        revocation_list: List[int],
        current_accumulator: str,
        timestamp: Optional[int] = None,
        **kwargs,
    ):
        """Initialize an instance.

        Args:
            issuer_id: Issuer ID
            rev_reg_def_id: Revocation Registry Def. ID
            revocation_list: Revocation list
            current_accumulator: Current accumulator
            timestamp: Timestamp

        """
        super().__init__(**kwargs)
        self.issuer_id = issuer_id
        self.rev_reg_def_id = rev_reg_def_id
        self.revocation_list = revocation_list
        self.current_accumulator = current_accumulator
        self.timestamp = timestamp


class RevListSchema(BaseModelSchema):
    """RevListSchema."""

    class Meta:
        """RevListSchema metadata."""

        model_class = RevList
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
    rev_reg_def_id = fields.Str(
        validate=IpfsUri(),
        required=True,
        metadata={
            "description": "The ID of the revocation registry definition",
            "example": IPFS_URI_EXAMPLE,
        },
        data_key="revRegDefId",
    )
    revocation_list = fields.List(
        fields.Int(validate=OneOf([0, 1])),
        required=True,
        metadata={
            "description": "Bit list representing revoked credentials",
            "example": [0, 1, 1, 0],
        },
        data_key="revocationList",
    )
    current_accumulator = fields.Str(
        required=True,
        metadata={
            "description": "The current accumulator value",
            "example": "21 118...1FB",
        },
        data_key="currentAccumulator",
    )
    timestamp = fields.Int(
        metadata={
            "description": "Timestamp at which revocation list is applicable",
            "example": 1640995199,
        },
        required=False,
    )


class RevListState(BaseModel):
    """RevListState."""

    STATE_FINISHED = "finished"
    STATE_FAILED = "failed"

    class Meta:
        """RevListState metadata."""

        schema_class = "RevListStateSchema"

    def __init__(
        self,
        state: str,
        revocation_list: RevList,
        revocation_list_id: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        """Initialize an instance.

        Args:
            state: State
            revocation_list: Revocation list
            revocation_list_id: Identifier minted for the list on success
            reason: Failure reason

        """
        self.state = state
        self.revocation_list = revocation_list
        self.revocation_list_id = revocation_list_id
        self.reason = reason


class RevListStateSchema(BaseModelSchema):
    """RevListStateSchema."""

    class Meta:
        """RevListStateSchema metadata."""

        model_class = RevListState
        unknown = EXCLUDE

    state = fields.Str(
        validate=OneOf([RevListState.STATE_FINISHED, RevListState.STATE_FAILED])
    )
    revocation_list = fields.Nested(
        RevListSchema(), metadata={"description": "revocation list"}
    )
    revocation_list_id = fields.Str(
        allow_none=True,
        metadata={"description": "revocation list id", "example": IPFS_URI_EXAMPLE},
    )
    reason = fields.Str()


class RevListResult(BaseModel):
    """Result of registering a revocation list."""

    class Meta:
        """RevListResult metadata."""

        schema_class = "RevListResultSchema"

    def __init__(
        self,
        revocation_list_state: RevListState,
        registration_metadata: dict,
        revocation_list_metadata: dict,
        **kwargs,
    ):
        """Initialize an instance."""
        super().__init__(**kwargs)
        self.revocation_list_state = revocation_list_state
        self.registration_metadata = registration_metadata
        self.revocation_list_metadata = revocation_list_metadata

    @property
    def rev_reg_def_id(self):
        """Rev reg def id."""
        return self.revocation_list_state.revocation_list.rev_reg_def_id


class RevListResultSchema(BaseModelSchema):
    """RevListResultSchema."""

    class Meta:
        """RevListResultSchema metadata."""

        model_class = RevListResult
        unknown = EXCLUDE

    revocation_list_state = fields.Nested(RevListStateSchema())
    registration_metadata = fields.Dict()
    revocation_list_metadata = fields.Dict()


class GetRevListResult(BaseModel):
    """GetRevListResult."""

    class Meta:
        """GetRevListResult metadata."""

        schema_class = "GetRevListResultSchema"

    def __init__(
        self,
        revocation_list: Optional[RevList],
        resolution_metadata: Dict[str, Any],
        revocation_registry_metadata: Dict[str, Any],
        revocation_list_id: Optional[str] = None,
        **kwargs,
    ):
        """Initialize an instance.

        Args:
            revocation_list: Revocation list, None on failure
            resolution_metadata: Resolution metadata
            revocation_registry_metadata: Rev Reg metadata
            revocation_list_id: Identifier the list was resolved from

        """
        super().__init__(**kwargs)
        self.revocation_list = revocation_list
        self.resolution_metadata = resolution_metadata
        self.revocation_registry_metadata = revocation_registry_metadata
        self.revocation_list_id = revocation_list_id

    @property
    def error(self) -> Optional[str]:
        """Resolution error code, if resolution failed."""
        return self.resolution_metadata.get("error")


class GetRevListResultSchema(BaseModelSchema):
    """GetRevListResultSchema."""

    class Meta:
        """GetRevListResultSchema metadata."""

        model_class = GetRevListResult
        unknown = EXCLUDE

    revocation_list = fields.Nested(RevListSchema(), allow_none=True)
    resolution_metadata = fields.Dict()
    revocation_registry_metadata = fields.Dict()
    revocation_list_id = fields.Str()


class RevRegDelta(BaseModel):
    """Accumulator delta of a revocation registry.

    Sourced from outside the registry and only consumed to rebuild a
    revocation status list.
    """

    class Meta:
        """RevRegDelta metadata."""

        schema_class = "RevRegDeltaSchema"

    def __init__(
        self,
        accum: str,
        issued: Optional[List[int]] = None,
        revoked: Optional[List[int]] = None,
        txn_time: Optional[int] = None,
        **kwargs,
    ):
        """Initialize an instance."""
        super().__init__(**kwargs)
        self.accum = accum
        self.issued = issued or []
        self.revoked = revoked or []
        self.txn_time = txn_time


class RevRegDeltaSchema(BaseModelSchema):
    """RevRegDeltaSchema."""

    class Meta:
        """RevRegDeltaSchema metadata."""

        model_class = RevRegDelta
        unknown = EXCLUDE

    accum = fields.Str(required=True)
    issued = fields.List(fields.Int())
    revoked = fields.List(fields.Int())
    txn_time = fields.Int(data_key="txnTime")
