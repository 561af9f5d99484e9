"""Base classes for Models and Schemas."""

import json
import logging
import sys
from abc import ABC
from typing import Mapping, Optional, Type, TypeVar, Union, cast

from marshmallow import EXCLUDE, Schema, ValidationError, post_dump, post_load

from ...core.error import BaseError

LOGGER = logging.getLogger(__name__)


def resolve_class(the_cls, relative_cls: Optional[type] = None) -> type:
    """
    Resolve a class.

    Args:
        the_cls: The class, or the name of a class defined in the module
            of `relative_cls`
        relative_cls: Relative class to resolve from

    Returns:
        The resolved class

    """
    if isinstance(the_cls, type):
        return the_cls
    if isinstance(the_cls, str) and relative_cls is not None:
        module = sys.modules.get(relative_cls.__module__)
        resolved = getattr(module, the_cls, None)
        if isinstance(resolved, type):
            return resolved
    raise TypeError(
        f"Could not resolve class from {the_cls}; incorrect type {type(the_cls)}"
    )


def resolve_meta_property(obj, prop_name: str, defval=None):
    """
    Resolve a meta property.

    Args:
        obj: The class or instance to inspect
        prop_name: The property to resolve
        defval: The default value

    Returns:
        The meta property

    """
    cls = obj if isinstance(obj, type) else obj.__class__
    found = defval
    while cls:
        Meta = getattr(cls, "Meta", None)
        if Meta and hasattr(Meta, prop_name):
            found = getattr(Meta, prop_name)
            break
        cls = cls.__bases__[0]
        if cls is object:
            break
    return found


class BaseModelError(BaseError):
    """Base exception class for base model errors."""


ModelType = TypeVar("ModelType", bound="BaseModel")


class BaseModel(ABC):
    """Base model that provides convenience methods."""

    class Meta:
        """BaseModel meta data."""

        schema_class = None

    def __init__(self):
        """
        Initialize BaseModel.

        Raises:
            TypeError: If schema_class is not set on Meta

        """
        if not self.Meta.schema_class:
            raise TypeError(
                "Can't instantiate abstract class {} with no schema_class".format(
                    self.__class__.__name__
                )
            )

    @classmethod
    def _get_schema_class(cls) -> Type["BaseModelSchema"]:
        resolved = resolve_class(cls.Meta.schema_class, cls)
        if issubclass(resolved, BaseModelSchema):
            return resolved

        raise TypeError(
            f"Resolved class is not a subclass of BaseModelSchema: {resolved}"
        )

    @property
    def Schema(self) -> Type["BaseModelSchema"]:
        """Accessor for the model's schema class."""
        return self._get_schema_class()

    @classmethod
    def deserialize(
        cls: Type[ModelType],
        obj,
        *,
        unknown: Optional[str] = None,
    ) -> ModelType:
        """
        Convert from JSON representation to a model instance.

        Args:
            obj: The dict to load into a model instance
            unknown: Behaviour for unknown attributes

        Returns:
            A model instance for this data

        """
        schema_cls = cls._get_schema_class()
        schema = schema_cls(
            unknown=unknown or resolve_meta_property(schema_cls, "unknown", EXCLUDE)
        )

        try:
            return cast(
                ModelType,
                schema.loads(obj) if isinstance(obj, str) else schema.load(obj),
            )
        except (AttributeError, TypeError, ValidationError) as err:
            LOGGER.debug("%s validation error: %s", cls.__name__, err)
            raise BaseModelError(f"{cls.__name__} schema validation failed") from err

    def serialize(
        self,
        *,
        as_string: bool = False,
        unknown: Optional[str] = None,
    ) -> Union[str, dict]:
        """
        Create a JSON-compatible dict representation of the model instance.

        Args:
            as_string: Return a string of JSON instead of a dict
            unknown: Behaviour for unknown attributes

        Returns:
            A dict representation of this model, or a JSON string if as_string is True

        """
        schema_cls = self._get_schema_class()
        schema = schema_cls(
            unknown=unknown or resolve_meta_property(schema_cls, "unknown", EXCLUDE)
        )
        try:
            return (
                schema.dumps(self, separators=(",", ":"))
                if as_string
                else schema.dump(self)
            )
        except (AttributeError, ValidationError) as err:
            LOGGER.exception(f"{self.__class__.__name__} serialization error:")
            raise BaseModelError(
                f"{self.__class__.__name__} schema validation failed"
            ) from err

    @classmethod
    def serde(cls, obj: Union["BaseModel", Mapping]) -> Optional["BaseModel"]:
        """Return a model instance for either a model or its serialized form."""
        if obj is None or isinstance(obj, BaseModel):
            return obj
        return cls.deserialize(obj)

    def validate(self, unknown: Optional[str] = None):
        """Validate a constructed model."""
        schema = self.Schema(unknown=unknown)
        errors = schema.validate(self.serialize())
        if errors:
            raise ValidationError(errors)
        return self

    @classmethod
    def from_json(
        cls: Type[ModelType],
        json_repr: Union[str, bytes],
        unknown: Optional[str] = None,
    ) -> ModelType:
        """
        Parse a JSON string into a model instance.

        Args:
            json_repr: JSON string
            unknown: Behaviour for unknown attributes

        Returns:
            A model instance representation of this JSON

        """
        try:
            parsed = json.loads(json_repr)
        except ValueError as e:
            raise BaseModelError(f"{cls.__name__} JSON parsing failed") from e
        return cls.deserialize(parsed, unknown=unknown)

    def to_json(self) -> str:
        """Create a JSON representation of the model instance."""
        return json.dumps(self.serialize())

    def __eq__(self, other) -> bool:
        """Compare models by their serialized form."""
        if type(other) is not type(self):
            return NotImplemented
        return self.serialize() == other.serialize()

    def __repr__(self) -> str:
        """
        Return a human readable representation of this class.

        Returns:
            A human readable string for this class

        """
        exclude = resolve_meta_property(self, "repr_exclude", [])
        items = (
            "{}={}".format(k, repr(v))
            for k, v in self.__dict__.items()
            if k not in exclude
        )
        return "<{}({})>".format(self.__class__.__name__, ", ".join(items))


class BaseModelSchema(Schema):
    """BaseModel schema."""

    class Meta:
        """BaseModelSchema metadata."""

        model_class = None
        skip_values = [None]
        ordered = True

    def __init__(self, *args, **kwargs):
        """
        Initialize BaseModelSchema.

        Raises:
            TypeError: If model_class is not set on Meta

        """
        super().__init__(*args, **kwargs)
        if not self.Meta.model_class:
            raise TypeError(
                "Can't instantiate abstract class {} with no model_class".format(
                    self.__class__.__name__
                )
            )

    @classmethod
    def _get_model_class(cls):
        return resolve_class(cls.Meta.model_class, cls)

    @property
    def Model(self) -> type:
        """Accessor for the schema's model class."""
        return self._get_model_class()

    @post_load
    def make_model(self, data: dict, **kwargs):
        """Return model instance after loading."""
        return self.Model(**data)

    @post_dump
    def remove_skipped_values(self, data, **kwargs):
        """Remove values that are are marked to skip."""
        skip_vals = resolve_meta_property(self, "skip_values", [])
        return {key: value for key, value in data.items() if value not in skip_vals}
