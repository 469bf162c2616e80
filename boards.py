from dataclasses import dataclass, field
from typing import Any, Optional
from threads import Thread


@dataclass(slots=True)
class Board:
    name: str
    threads: list[Thread] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Board '{self.name}' ({len(self.threads)} threads)"

    def add_thread(self, thread: Thread) -> Thread:
        self.threads.append(thread)
        return thread

    def get_thread(self, thread_id: str) -> Optional[Thread]:
        for thread in self.threads:
            if thread.id == thread_id:
                return thread
        return None

    def remove_thread(self, thread_id: str) -> bool:
        remaining = [t for t in self.threads if t.id != thread_id]
        removed = len(remaining) != len(self.threads)
        self.threads = remaining
        return removed

    def latest_threads(self, limit: int) -> list[Thread]:
        """Return up to ``limit`` threads, most recently bumped first."""
        return sorted(self.threads, key=lambda t: t.bumped_on, reverse=True)[:limit]

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "threads": [thread.to_document() for thread in self.threads],
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "Board":
        return cls(
            name=doc["name"],
            threads=[Thread.from_document(t) for t in doc.get("threads", [])],
        )
