"""Base Pydantic models for support code, documents and messages.

This module defines the foundational model classes used across the library.
It enforces immutability so that a sealed support code library and an
assembled test plan cannot drift after construction.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaModel(BaseModel):
    """Base immutable model for registrations and assembled elements.

    Design principles enforced by this model:
        - Immutability: elements cannot be modified after creation.
          This keeps matching and plan assembly deterministic.
        - Strict schema validation: unknown or extra fields are rejected
          to avoid silent errors caused by typos in registrations.

    Callables, compiled expressions and other runtime objects are allowed
    as field values.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
    )


class MessageModel(BaseModel):
    """Base immutable model for wire messages.

    Messages are exchanged with external tooling (Gherkin parsers, report
    formatters) using camel-cased field names. Python code uses snake-cased
    attribute names; both are accepted on input.

    Unknown fields are ignored so that newer producers of the message
    protocol do not break validation.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra='ignore',
    )

    def to_dict(self) -> dict:
        """Serialize the message using wire field names.

        Absent optional fields are omitted from the output.

        Returns:
            A JSON-compatible dictionary.
        """
        return self.model_dump(by_alias=True, exclude_none=True, mode='json')


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Design principles enforced by this model:
        - Immutability: resolved settings cannot be modified after creation.
        - Tolerant schema handling: unknown or extra fields are ignored.
          This allows the surrounding environment to contain unrelated
          variables without breaking configuration resolution.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )
