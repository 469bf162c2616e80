import logging
from functools import wraps
from typing import Any, Dict, List
from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError
from config import (THREAD_LIST_LIMIT, REPLY_PREVIEW_LIMIT, REPORTED, SUCCESS,
                    INCORRECT_PASSWORD)
from database import DatabaseManager
from exceptions import MessageBoardError, ThreadNotFound, ReplyNotFound
from models import (ThreadCreate, ThreadReport, ThreadDelete, ThreadLookup, ReplyCreate,
                    ReplyReport, ReplyDelete, ReplySummary, ThreadSummary, ThreadDetail,
                    ThreadResponse)
from replies import Reply
from security import PasswordHasher
from threads import Thread

logger = logging.getLogger("messageboard.endpoints")


def plain_text_errors(func):
    """Answer any failure inside a handler with its message as a 200 text body."""
    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except MessageBoardError as e:
            logger.info("%s: %s", func.__name__, e)
            return PlainTextResponse(str(e))
        except ValidationError as e:
            logger.info("%s: invalid request: %s", func.__name__, e)
            return PlainTextResponse(str(e))
        except Exception as e:
            logger.exception("Unexpected error in %s", func.__name__)
            return PlainTextResponse(str(e))
    return wrapper


async def request_params(request: Request) -> Dict[str, Any]:
    """Merge path, query and JSON body parameters; later sources win."""
    params: Dict[str, Any] = dict(request.path_params)
    params.update(request.query_params)
    if await request.body():
        body = await request.json()
        if isinstance(body, dict):
            params.update(body)
    return params


def thread_summary(thread: Thread) -> ThreadSummary:
    return ThreadSummary(
        id=thread.id,
        text=thread.text,
        created_on=thread.created_on,
        bumped_on=thread.bumped_on,
        replies=[ReplySummary.model_validate(r) for r in thread.recent_replies(REPLY_PREVIEW_LIMIT)],
        reply_count=thread.reply_count,
    )


# =============================================================================
# THREAD ENDPOINTS
# =============================================================================

def create_thread_router(db: DatabaseManager, hasher: PasswordHasher) -> APIRouter:
    router = APIRouter(tags=["threads"])

    @router.get("/threads/{board}", response_model=List[ThreadSummary])
    @plain_text_errors
    async def list_threads(board: str):
        """Most recently bumped threads with their newest replies"""
        found = await db.require_board(board)
        return [thread_summary(t) for t in found.latest_threads(THREAD_LIST_LIMIT)]

    @router.post("/threads/{board}", response_model=ThreadResponse)
    @plain_text_errors
    async def create_thread(board: str, request: Request):
        data = ThreadCreate.model_validate(await request_params(request))
        thread = Thread(text=data.text, delete_password=hasher.hash_password(data.delete_password))
        await db.upsert_thread(board, thread)
        logger.info("Thread %s created on board '%s'", thread.id, board)
        return ThreadResponse.model_validate(thread)

    @router.put("/threads/{board}")
    @plain_text_errors
    async def report_thread(board: str, request: Request):
        data = ThreadReport.model_validate(await request_params(request))
        if not await db.set_thread_reported(board, data.thread_id):
            raise ThreadNotFound()
        return PlainTextResponse(REPORTED)

    @router.delete("/threads/{board}")
    @plain_text_errors
    async def delete_thread(board: str, request: Request):
        data = ThreadDelete.model_validate(await request_params(request))
        _, thread = await db.require_thread(board, data.thread_id)

        if not hasher.verify_password(data.delete_password, thread.delete_password):
            return PlainTextResponse(INCORRECT_PASSWORD)

        if not await db.delete_thread(board, thread.id):
            raise ThreadNotFound()
        logger.info("Thread %s deleted from board '%s'", thread.id, board)
        return PlainTextResponse(SUCCESS)

    return router


# =============================================================================
# REPLY ENDPOINTS
# =============================================================================

def create_reply_router(db: DatabaseManager, hasher: PasswordHasher) -> APIRouter:
    router = APIRouter(tags=["replies"])

    @router.get("/replies/{board}", response_model=ThreadDetail)
    @plain_text_errors
    async def get_thread(board: str, request: Request):
        """Single thread with every reply in full"""
        data = ThreadLookup.model_validate(await request_params(request))
        _, thread = await db.require_thread(board, data.thread_id)
        return ThreadDetail.model_validate(thread)

    @router.post("/replies/{board}", response_model=ThreadResponse)
    @plain_text_errors
    async def create_reply(board: str, request: Request):
        data = ReplyCreate.model_validate(await request_params(request))
        found, thread = await db.require_thread(board, data.thread_id)

        reply = thread.add_reply(Reply(text=data.text, delete_password=hasher.hash_password(data.delete_password)))
        await db.save_board(found)
        logger.info("Reply %s added to thread %s", reply.id, thread.id)
        return ThreadResponse.model_validate(thread)

    @router.put("/replies/{board}")
    @plain_text_errors
    async def report_reply(board: str, request: Request):
        data = ReplyReport.model_validate(await request_params(request))
        await db.require_reply(board, data.thread_id, data.reply_id)
        if not await db.set_reply_reported(board, data.thread_id, data.reply_id):
            raise ReplyNotFound()
        return PlainTextResponse(REPORTED)

    @router.delete("/replies/{board}")
    @plain_text_errors
    async def delete_reply(board: str, request: Request):
        data = ReplyDelete.model_validate(await request_params(request))
        found, thread, reply = await db.require_reply(board, data.thread_id, data.reply_id)

        if not hasher.verify_password(data.delete_password, reply.delete_password):
            return PlainTextResponse(INCORRECT_PASSWORD)

        reply.tombstone()
        await db.save_board(found)
        logger.info("Reply %s in thread %s deleted", reply.id, thread.id)
        return PlainTextResponse(SUCCESS)

    return router


def get_all_routers(db: DatabaseManager, hasher: PasswordHasher) -> List[APIRouter]:
    return [
        create_thread_router(db, hasher),
        create_reply_router(db, hasher),
    ]
