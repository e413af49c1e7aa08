"""
Models for documents stored in the benchmarked container.
"""
import base64
import binascii
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cosmosbench.errors import DeserializationError


class Document(BaseModel):
    """A stored key/value document plus the metadata the service manages."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., description="Unique key of the document")
    value: bytes = Field(b"", description="Opaque byte payload")
    store_id: Optional[str] = Field(None, description="Partition/grouping key")

    # Service-managed metadata, never written back
    rid: Optional[str] = Field(None, alias="_rid")
    self_link: Optional[str] = Field(None, alias="_self")
    etag: Optional[str] = Field(None, alias="_etag")
    attachments: Optional[str] = Field(None, alias="_attachments")
    timestamp: Optional[int] = Field(None, alias="_ts")

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> bytes:
        """Accept a byte-integer array or a base64 string."""
        if value is None:
            return b""
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        if isinstance(value, list):
            if not all(isinstance(b, int) and not isinstance(b, bool) and 0 <= b <= 255 for b in value):
                raise ValueError("value must be an array of integers in range 0..255")
            return bytes(value)
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except binascii.Error as e:
                raise ValueError(f"value is not valid base64: {e}") from e
        raise ValueError(f"unsupported value type: {type(value).__name__}")

    @property
    def partition_key(self) -> str:
        return self.store_id if self.store_id is not None else self.id

    @classmethod
    def from_item(cls, item: Any) -> "Document":
        """
        Deserialize an item returned by the store.

        Raises:
            DeserializationError: if the item does not have the Document shape
        """
        if not isinstance(item, dict):
            raise DeserializationError(f"Expected a JSON object, got {type(item).__name__}")
        try:
            return cls.model_validate(item)
        except ValidationError as e:
            raise DeserializationError(f"Item does not match the Document shape: {e}") from e

    def to_item(self) -> Dict[str, Any]:
        """Body to upsert: id, value as byte integers, and store_id when set."""
        item = {"id": self.id, "value": list(self.value)}
        if self.store_id is not None:
            item["store_id"] = self.store_id
        return item
