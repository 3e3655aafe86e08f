"""Extraction output: plain text handed to the scorer."""

from pydantic import BaseModel, ConfigDict, computed_field


class ExtractedText(BaseModel):
    """Best-effort plain text for one document.

    `text` is never empty: when nothing real can be recovered a synthetic
    placeholder résumé is substituted and `synthetic` is set.
    """
    model_config = ConfigDict(frozen=True)

    source_document: str
    text: str
    method: str = ""  # strategy name that produced the text
    synthetic: bool = False

    @computed_field
    @property
    def length(self) -> int:
        return len(self.text)
