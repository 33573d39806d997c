#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""A tax-form PDF loaded in memory, ready to be filled and saved.

Wraps a :class:`pypdf.PdfWriter` cloned from the blank template. The form is
exposed through :class:`~paperwork.pdf_fillers.pdf_form.PdfForm`.
"""
from __future__ import annotations

from datetime import datetime, timezone
from io import BytesIO
from typing import Iterable, Optional

from pypdf import PdfWriter
from pypdf.generic import NameObject, TextStringObject

from paperwork.pdf_fillers.pdf_form import PdfForm


def _pdf_date(value: datetime) -> str:
    """``D:YYYYMMDDHHmmSSZ`` as expected in the document information dictionary."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("D:%Y%m%d%H%M%SZ")


class TaxFormDocument:

    def __init__(self, writer: PdfWriter):
        self._writer = writer
        self.form = PdfForm(writer)

    @classmethod
    def load(cls, template: bytes) -> "TaxFormDocument":
        return cls(PdfWriter(clone_from=BytesIO(template)))

    @property
    def writer(self) -> PdfWriter:
        return self._writer

    @property
    def page_count(self) -> int:
        return len(self._writer.pages)

    def get_page(self, index: int = 0):
        return self._writer.pages[index]

    def set_metadata(self, *, title: str, subject: str, author: str, creator: str,
                     keywords: Iterable[str] = (), created: Optional[datetime] = None,
                     modified: Optional[datetime] = None) -> None:
        now = datetime.now(timezone.utc)
        self._writer.add_metadata({
            "/Title": title,
            "/Subject": subject,
            "/Author": author,
            "/Creator": creator,
            "/Keywords": " ".join(keywords),
            "/CreationDate": _pdf_date(created or now),
            "/ModDate": _pdf_date(modified or now),
        })

    def attach(self, data: bytes, name: str, *, mime_type: str = None, description: str = None) -> None:
        embedded = self._writer.add_attachment(name, data)
        if mime_type:
            embedded.subtype = NameObject(f"/{mime_type}")
        if description:
            embedded.description = TextStringObject(description)

    def flatten_form(self) -> None:
        """Final documents: field values become page content and the form is removed."""
        self.form.flatten()

    def save(self) -> bytes:
        buffer = BytesIO()
        self._writer.write(buffer)
        return buffer.getvalue()
