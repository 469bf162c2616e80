from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_validator


class ThreadCreate(BaseModel):
    text: str
    delete_password: str

    @field_validator('text', 'delete_password')
    @classmethod
    def validate_not_empty(cls, v):
        if not v:
            raise ValueError('must not be empty')
        return v

class ThreadReport(BaseModel):
    thread_id: str

class ThreadDelete(BaseModel):
    thread_id: str
    delete_password: str

class ThreadLookup(BaseModel):
    thread_id: str

class ReplyCreate(ThreadCreate):
    thread_id: str

class ReplyReport(BaseModel):
    thread_id: str
    reply_id: str

class ReplyDelete(BaseModel):
    thread_id: str
    reply_id: str
    delete_password: str

class ReplySummary(BaseModel):
    """Reply as shown on the board listing"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str
    created_on: datetime

class ReplyResponse(ReplySummary):
    reported: bool
    delete_password: str

class ThreadSummary(BaseModel):
    """Thread as shown on the board listing, without password or reported flag"""
    id: str
    text: str
    created_on: datetime
    bumped_on: datetime
    replies: List[ReplySummary]
    reply_count: int

class ThreadDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    text: str
    created_on: datetime
    bumped_on: datetime
    replies: List[ReplyResponse]

class ThreadResponse(ThreadDetail):
    reported: bool
    delete_password: str

class HealthResponse(BaseModel):
    status: str
    timestamp: float
    database: Optional[str] = None
