from config import BOARD_NOT_FOUND, THREAD_NOT_FOUND, REPLY_NOT_FOUND


class MessageBoardError(Exception):
    """Base error whose message is sent back to the client as-is."""
    message = "message board error"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class BoardNotFound(MessageBoardError):
    message = BOARD_NOT_FOUND


class ThreadNotFound(MessageBoardError):
    message = THREAD_NOT_FOUND


class ReplyNotFound(MessageBoardError):
    message = REPLY_NOT_FOUND
