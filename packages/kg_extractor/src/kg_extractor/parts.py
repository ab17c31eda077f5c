"""Части документа, передаваемые на извлечение."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path

from pydantic import BaseModel, ConfigDict, model_validator

TEXT_HEADER = "\n\n--- DOCUMENT CONTENT ---\n"


class DocumentPart(BaseModel):
    """Одна страница документа: бинарное изображение либо текст."""

    model_config = ConfigDict(frozen=True)

    mime_type: str
    data: bytes | None = None
    text: str | None = None

    @model_validator(mode="after")
    def validate_content(self) -> "DocumentPart":
        if (self.data is None) == (self.text is None):
            raise ValueError("exactly one of data or text must be provided")
        return self

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/") and self.data is not None

    @property
    def is_text(self) -> bool:
        return self.mime_type.startswith("text/") and self.text is not None

    def data_url(self) -> str:
        if self.data is None:
            raise ValueError("text part has no binary payload")
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    @classmethod
    def image(cls, data: bytes, mime_type: str) -> "DocumentPart":
        return cls(mime_type=mime_type, data=data)

    @classmethod
    def plain_text(cls, text: str, mime_type: str = "text/plain") -> "DocumentPart":
        return cls(mime_type=mime_type, text=text)

    @classmethod
    def from_path(cls, path: str | Path) -> "DocumentPart":
        """Читает файл и определяет MIME-тип по расширению.

        Текстовые файлы читаются как UTF-8, всё остальное как байты.
        Файлы, не являющиеся ни изображением, ни текстом, отсеиваются
        позже при извлечении.
        """

        file_path = Path(path)
        mime_type, _ = mimetypes.guess_type(file_path.name)
        mime_type = mime_type or "application/octet-stream"
        if mime_type.startswith("text/"):
            return cls(mime_type=mime_type, text=file_path.read_text(encoding="utf-8"))
        return cls(mime_type=mime_type, data=file_path.read_bytes())
