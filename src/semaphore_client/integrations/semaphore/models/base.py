"""Base models for Semaphore resources.

Every resource kind shares the same envelope (``apiVersion``, ``kind``,
``metadata``) and the same serialization rules:

- JSON parsing is permissive: unknown fields are ignored and ``null`` means
  the field default.
- YAML parsing is strict and rejects unknown fields at any depth. Plain
  scalars in text fields keep their text, so ``value: 5432`` reads as ``"5432"``.
- Empty ``apiVersion``/``kind`` are back-filled with the kind's defaults.
- Timestamps are integers, written to JSON as strings.
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import date
from typing import Annotated, Any, ClassVar, Self

import yaml
from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    ValidationError,
    ValidationInfo,
    model_validator,
)

from semaphore_client.integrations.semaphore.exceptions import (
    SemaphoreSerializationError,
    SemaphoreValidationError,
)

# Validation context key that switches on unknown-field rejection
STRICT_FIELDS = "strict_fields"

Timestamp = Annotated[int, PlainSerializer(str, return_type=str, when_used="json")]


def _scalar_text(value: Any, info: ValidationInfo) -> Any:
    """Turn a YAML plain scalar back into its text in strict mode."""
    if not (info.context and info.context.get(STRICT_FIELDS)):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, int | float):
        return str(value)
    return value


WireStr = Annotated[str, BeforeValidator(_scalar_text)]


class SemaphoreModel(BaseModel):
    """Base class for all Semaphore payload models."""

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )

    # Subclasses should define this for better error messages
    _entity_name: ClassVar[str] = "object"

    @model_validator(mode="before")
    @classmethod
    def reject_unknown_fields(cls, data: Any, info: ValidationInfo) -> Any:
        if not (info.context and info.context.get(STRICT_FIELDS)) or not isinstance(data, dict):
            return data
        known = {field.alias or name for name, field in cls.model_fields.items()}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ValueError(f"unknown field(s) {', '.join(unknown)} in {cls.__name__}")
        return data

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        # null on a non-optional field falls back to the field default
        non_optional = {
            key
            for name, field in cls.model_fields.items()
            if field.default is not None
            for key in (name, field.alias or name)
        }
        return {
            key: value
            for key, value in data.items()
            if value is not None or key not in non_optional
        }

    @classmethod
    def from_json(cls, data: bytes | str) -> Self:
        """Parse a JSON document. Unknown fields are ignored.

        Args:
            data: JSON document.

        Returns:
            Parsed model.

        Raises:
            SemaphoreSerializationError: If the document is malformed or
                does not match the model.
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise SemaphoreSerializationError(
                f"failed to deserialize {cls._entity_name} object '{e}'",
            ) from e

    @classmethod
    def from_yaml(cls, data: bytes | str) -> Self:
        """Parse a YAML document. Unknown fields are rejected.

        Args:
            data: YAML document.

        Returns:
            Parsed model.

        Raises:
            SemaphoreSerializationError: If the document is malformed, is not
                a mapping, contains unknown fields or does not match the model.
        """
        try:
            document = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise SemaphoreSerializationError(
                f"failed to deserialize {cls._entity_name} object '{e}'",
            ) from e

        if not isinstance(document, dict):
            raise SemaphoreSerializationError(
                f"failed to deserialize {cls._entity_name} object: expected a mapping",
            )

        try:
            return cls.model_validate(document, context={STRICT_FIELDS: True})
        except ValidationError as e:
            raise SemaphoreSerializationError(
                f"failed to deserialize {cls._entity_name} object '{e}'",
            ) from e

    def to_dict(self) -> dict[str, Any]:
        """Dump with wire field names, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> bytes:
        """Serialize to a JSON document.

        Returns:
            UTF-8 encoded JSON.
        """
        return self.model_dump_json(by_alias=True, exclude_none=True).encode()

    def to_yaml(self) -> str:
        """Serialize to a YAML document.

        Returns:
            YAML text, keys in declaration order.
        """
        return yaml.safe_dump(self.to_dict(), sort_keys=False, default_flow_style=False)


class EnvVar(SemaphoreModel):
    """Environment variable entry."""

    name: WireStr = ""
    value: WireStr = ""


class File(SemaphoreModel):
    """File entry, placed at ``path`` with ``content``."""

    path: WireStr = ""
    content: WireStr = ""


class ResourceMetadata(SemaphoreModel):
    """Metadata shared by every resource kind.

    Attributes:
        name: Human identifier, required before create/update.
        id: Server-assigned identifier.
        create_time: Unix timestamp of creation.
        update_time: Unix timestamp of last update.
    """

    name: WireStr = ""
    id: WireStr | None = None
    create_time: Timestamp | None = None
    update_time: Timestamp | None = None


class ResourceBase(SemaphoreModel):
    """Base class for Semaphore resource entities.

    Subclasses set ``_default_api_version`` and ``_default_kind``; these are
    applied whenever the parsed or constructed value is empty.
    """

    api_version: WireStr = Field(default="", alias="apiVersion")
    kind: WireStr = ""
    metadata: ResourceMetadata = Field(default_factory=ResourceMetadata)

    _default_api_version: ClassVar[str] = ""
    _default_kind: ClassVar[str] = ""

    @model_validator(mode="after")
    def backfill_defaults(self) -> Self:
        if not self.api_version:
            self.api_version = self._default_api_version
        if not self.kind:
            self.kind = self._default_kind
        return self

    @classmethod
    def from_name(cls, name: str) -> Self:
        """Build a minimal entity with default version/kind and the given name.

        Args:
            name: Resource name.

        Returns:
            New entity with an empty payload.
        """
        return cls.model_validate({"metadata": {"name": name}})

    @property
    def identifier(self) -> str:
        """Id when the server has assigned one, otherwise the name."""
        return self.metadata.id or self.metadata.name

    @property
    def object_name(self) -> str:
        """Display name, e.g. ``Secrets/db-password``."""
        return f"{self.kind}s/{self.metadata.name}"

    def validate_resource(self) -> None:
        """Check the entity is ready to be written.

        Raises:
            SemaphoreValidationError: If ``metadata.name`` is blank.
        """
        if not self.metadata.name:
            raise SemaphoreValidationError(f"{self._default_kind} name can't be blank")


class ResourceListBase(SemaphoreModel):
    """Collection wrapper returned by list endpoints.

    Subclasses declare the wrapper field and expose it through ``items``;
    a subclass without ``items`` cannot be instantiated.
    """

    @property
    @abstractmethod
    def items(self) -> list[Any]:
        """Entities in the collection, in server order."""
