from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from replies import Reply
from utils import new_id, utcnow, parse_datetime


@dataclass(slots=True)
class Thread:
    text: str
    delete_password: str
    id: str = field(default_factory=new_id)
    created_on: datetime = field(default_factory=utcnow)
    bumped_on: Optional[datetime] = None
    reported: bool = False
    replies: list[Reply] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.bumped_on is None:
            self.bumped_on = self.created_on

    def __str__(self) -> str:
        reported_marker = " [REPORTED]" if self.reported else ""
        return f"Thread {self.id}: {self.text[:50]}{reported_marker}"

    @property
    def reply_count(self) -> int:
        return len(self.replies)

    def report(self) -> None:
        self.reported = True

    def get_reply(self, reply_id: str) -> Optional[Reply]:
        for reply in self.replies:
            if reply.id == reply_id:
                return reply
        return None

    def add_reply(self, reply: Reply) -> Reply:
        """Append a reply and bump the thread to the reply's creation time."""
        self.bumped_on = max(reply.created_on, self.created_on)
        self.replies.append(reply)
        return reply

    def recent_replies(self, limit: int) -> list[Reply]:
        """Return up to ``limit`` replies, newest first."""
        return sorted(self.replies, key=lambda r: r.created_on, reverse=True)[:limit]

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "created_on": self.created_on.isoformat(),
            "bumped_on": self.bumped_on.isoformat(),
            "reported": self.reported,
            "delete_password": self.delete_password,
            "replies": [reply.to_document() for reply in self.replies],
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Thread":
        return cls(
            text=doc["text"],
            delete_password=doc["delete_password"],
            id=doc["id"],
            created_on=parse_datetime(doc["created_on"]),
            bumped_on=parse_datetime(doc["bumped_on"]),
            reported=doc.get("reported", False),
            replies=[Reply.from_document(r) for r in doc.get("replies", [])],
        )
