"""Base model and shared field types for persisted feedlot documents.

Every persisted model inherits from :class:`FeedlotBaseModel` which
provides:

* ``alias_generator=to_camel`` so the camelCase keys of the stored JSON
  documents (``tagNumber``, ``lotId``) map to snake_case fields.
* ``populate_by_name=True`` so code can construct models with field
  names while storage round-trips through aliases.
* :meth:`FeedlotBaseModel.to_document` for the canonical JSON shape.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from pyfeedlot._normalize import ensure_utc

UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
"""Datetime normalised to UTC; naive values are assumed to already be UTC."""


class FeedlotBaseModel(BaseModel):
    """Base for persisted feedlot records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready dict written to storage."""
        return self.model_dump(mode="json", by_alias=True)
