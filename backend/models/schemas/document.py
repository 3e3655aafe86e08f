"""Raw candidate document as read from an object store."""

from pydantic import BaseModel, ConfigDict


class Document(BaseModel):
    """A résumé file, opaque bytes until extracted.

    `name` is the unique key of the document within a batch.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    raw_bytes: bytes = b""

    @property
    def size(self) -> int:
        return len(self.raw_bytes)
