import asyncio
import json
import logging
from typing import List, Optional, Tuple
import aiosqlite
from boards import Board
from threads import Thread
from replies import Reply
from exceptions import BoardNotFound, ThreadNotFound, ReplyNotFound

logger = logging.getLogger("messageboard.database")

SCHEMA = """
    CREATE TABLE IF NOT EXISTS boards (
        name TEXT PRIMARY KEY,
        document TEXT NOT NULL
    )
"""

# Paths into the board document, resolved by identifier with json_each
THREAD_REPORTED_PATH = """
    SELECT '$.threads[' || t.key || '].reported'
    FROM json_each(boards.document, '$.threads') AS t
    WHERE json_extract(t.value, '$.id') = :thread_id
"""

REPLY_REPORTED_PATH = """
    SELECT '$.threads[' || t.key || '].replies[' || r.key || '].reported'
    FROM json_each(boards.document, '$.threads') AS t,
         json_each(t.value, '$.replies') AS r
    WHERE json_extract(t.value, '$.id') = :thread_id
      AND json_extract(r.value, '$.id') = :reply_id
"""


class DatabaseManager:
    """Stores each board, with its threads and replies, as one JSON document."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._conn: Optional[aiosqlite.Connection] = None
        self._write_lock = asyncio.Lock()

    async def connect(self):
        if self._conn is not None:
            return
        try:
            self._conn = await aiosqlite.connect(self.db_path)
            self._conn.row_factory = aiosqlite.Row
            await self._conn.execute(SCHEMA)
            await self._conn.commit()
        except Exception:
            logger.exception("Failed to connect to database at %s", self.db_path)
            await self.close()
            raise
        logger.info("Database connected: %s", self.db_path)

    async def close(self):
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()
        logger.info("Database connection closed")

    @property
    def conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError("Database is not connected")
        return self._conn

    async def _load(self, name: str) -> Optional[Board]:
        async with self.conn.execute("SELECT document FROM boards WHERE name = ?", (name,)) as cursor:
            row = await cursor.fetchone()
        return Board.from_document(json.loads(row["document"])) if row else None

    async def _write(self, board: Board):
        await self.conn.execute("""
            INSERT INTO boards (name, document) VALUES (?, ?)
            ON CONFLICT(name) DO UPDATE SET document = excluded.document
        """, (board.name, json.dumps(board.to_document())))

    async def _update(self, query: str, params: dict) -> bool:
        async with self._write_lock:
            async with self.conn.execute(query, params) as cursor:
                updated = cursor.rowcount > 0
            await self.conn.commit()
        return updated

    # Lookups

    async def get_board(self, name: str) -> Optional[Board]:
        """Get a board by name"""
        return await self._load(name)

    async def list_boards(self) -> List[str]:
        async with self.conn.execute("SELECT name FROM boards ORDER BY name") as cursor:
            rows = await cursor.fetchall()
        return [row["name"] for row in rows]

    @staticmethod
    def get_thread(board: Board, thread_id: str) -> Optional[Thread]:
        return board.get_thread(thread_id)

    @staticmethod
    def get_reply(thread: Thread, reply_id: str) -> Optional[Reply]:
        return thread.get_reply(reply_id)

    async def require_board(self, name: str) -> Board:
        board = await self.get_board(name)
        if board is None:
            raise BoardNotFound()
        return board

    async def require_thread(self, name: str, thread_id: str) -> Tuple[Board, Thread]:
        """Get a board and one of its threads, or raise ThreadNotFound if either is missing"""
        board = await self.get_board(name)
        thread = self.get_thread(board, thread_id) if board else None
        if thread is None:
            raise ThreadNotFound()
        return board, thread

    async def require_reply(self, name: str, thread_id: str, reply_id: str) -> Tuple[Board, Thread, Reply]:
        board, thread = await self.require_thread(name, thread_id)
        reply = self.get_reply(thread, reply_id)
        if reply is None:
            raise ReplyNotFound()
        return board, thread, reply

    # Writes

    async def upsert_thread(self, name: str, thread: Thread) -> Board:
        """Append a thread to a board, creating the board if it doesn't exist"""
        async with self._write_lock:
            board = await self._load(name)
            if board is None:
                board = Board(name)
                logger.info("Creating board '%s'", name)
            board.add_thread(thread)
            await self._write(board)
            await self.conn.commit()
        return board

    async def save_board(self, board: Board):
        """Replace the stored board document with the in-memory one"""
        async with self._write_lock:
            await self._write(board)
            await self.conn.commit()

    async def delete_thread(self, name: str, thread_id: str) -> bool:
        async with self._write_lock:
            board = await self._load(name)
            if board is None or not board.remove_thread(thread_id):
                return False
            await self._write(board)
            await self.conn.commit()
        return True

    async def set_thread_reported(self, name: str, thread_id: str) -> bool:
        """Flag a thread as reported in place; False if nothing matched"""
        return await self._update(f"""
            UPDATE boards
            SET document = json_set(document, ({THREAD_REPORTED_PATH}), json('true'))
            WHERE name = :name AND EXISTS ({THREAD_REPORTED_PATH})
        """, {"name": name, "thread_id": thread_id})

    async def set_reply_reported(self, name: str, thread_id: str, reply_id: str) -> bool:
        """Flag a reply as reported in place; False if nothing matched"""
        return await self._update(f"""
            UPDATE boards
            SET document = json_set(document, ({REPLY_REPORTED_PATH}), json('true'))
            WHERE name = :name AND EXISTS ({REPLY_REPORTED_PATH})
        """, {"name": name, "thread_id": thread_id, "reply_id": reply_id})
