"""
Freshrack Backend — Open Document Mapping
===========================================

What:  Shared column set and (de)serialization for records with an open schema.
How:   Each model declares FIELD_MAP, the wire keys it stores in typed columns.
       Every other caller-supplied key lives in the `extra` JSON column.
       Reads merge the typed columns and `extra` back into one flat document.
Who:   Mixed into Food and Note; used by the services for create/patch/read.

Document shape on the wire:
    {"_id": "<uuid>", <typed fields that are not NULL>, <extra fields>}

Typed columns only ever hold strings. Any other value sent under a typed key
(a number, a list, an object, an explicit null) is kept verbatim in `extra`
and the column is NULL, so it reads back exactly as sent and never matches
a text filter. A key lives in the column or in `extra`, never both.

The `_id` key is owned by the store: a caller-supplied `_id` is dropped on
create and on patch.
"""

import uuid
from typing import Any, ClassVar, Dict, Mapping, Optional

from sqlalchemy import JSON, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

ID_KEY = "_id"

# JSONB on PostgreSQL, generic JSON elsewhere (SQLite in tests)
DocumentJSON = JSON().with_variant(JSONB(), "postgresql")

# Byte-order collation so SQL comparison follows ISO-8601 lexicographic order
IsoText = Text().with_variant(Text(collation="C"), "postgresql")


def _same(stored: Any, incoming: Any) -> bool:
    """Equality that does not treat 1 and True (or 1 and 1.0) as the same value."""
    return type(stored) is type(incoming) and stored == incoming


class OpenDocumentMixin:
    """Typed core columns plus an `extra` map of every other field."""

    # wire key → mapped attribute name
    FIELD_MAP: ClassVar[Dict[str, str]] = {}

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    extra: Mapped[Dict[str, Any]] = mapped_column(
        DocumentJSON,
        nullable=False,
        default=dict,
    )

    @classmethod
    def from_payload(
        cls,
        payload: Mapping[str, Any],
        overrides: Optional[Mapping[str, Any]] = None,
    ):
        """
        Build a new record from a request body.

        `overrides` holds server-assigned wire fields (addedDate, foodId) and
        wins over anything the caller sent under the same key.
        """
        values = {key: value for key, value in payload.items() if key != ID_KEY}
        values.update(overrides or {})

        typed: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}
        for key, value in values.items():
            attr = cls.FIELD_MAP.get(key)
            if attr is not None and isinstance(value, str):
                typed[attr] = value
            else:
                extra[key] = value
        return cls(id=uuid.uuid4(), extra=extra, **typed)

    def apply_patch(self, payload: Mapping[str, Any]) -> bool:
        """
        Merge-patch `payload` onto this record.

        Only keys present in the payload are written; nothing is removed.
        Returns True when at least one stored value actually changed.
        """
        changed = False
        extra = dict(self.extra or {})
        for key, value in payload.items():
            if key == ID_KEY:
                continue
            attr = self.FIELD_MAP.get(key)
            if attr is not None and isinstance(value, str):
                if key in extra:
                    del extra[key]
                    changed = True
                if getattr(self, attr) != value:
                    setattr(self, attr, value)
                    changed = True
                continue
            if attr is not None and getattr(self, attr) is not None:
                # non-string value under a typed key moves to `extra`
                setattr(self, attr, None)
                extra[key] = value
                changed = True
            elif key not in extra or not _same(extra[key], value):
                extra[key] = value
                changed = True
        if changed:
            # New dict so the JSON column is flagged dirty
            self.extra = extra
        return changed

    def to_document(self) -> Dict[str, Any]:
        """Flatten the record back into its wire representation."""
        document: Dict[str, Any] = {ID_KEY: str(self.id)}
        for key, attr in self.FIELD_MAP.items():
            value = getattr(self, attr)
            if value is not None:
                document[key] = value
        for key, value in (self.extra or {}).items():
            document.setdefault(key, value)
        return document
