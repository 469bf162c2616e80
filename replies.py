from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from config import DELETED_REPLY_TEXT
from utils import new_id, utcnow, parse_datetime


@dataclass(slots=True)
class Reply:
    text: str
    delete_password: str
    id: str = field(default_factory=new_id)
    created_on: datetime = field(default_factory=utcnow)
    reported: bool = False

    def __str__(self) -> str:
        reported_marker = " [REPORTED]" if self.reported else ""
        return f"Reply {self.id}: {self.text[:50]}{reported_marker}"

    @property
    def deleted(self) -> bool:
        return self.text == DELETED_REPLY_TEXT

    def report(self) -> None:
        self.reported = True

    def tombstone(self) -> None:
        """Blank out the text; the reply itself stays in its thread."""
        self.text = DELETED_REPLY_TEXT

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "created_on": self.created_on.isoformat(),
            "reported": self.reported,
            "delete_password": self.delete_password,
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Reply":
        return cls(
            text=doc["text"],
            delete_password=doc["delete_password"],
            id=doc["id"],
            created_on=parse_datetime(doc["created_on"]),
            reported=doc.get("reported", False),
        )
