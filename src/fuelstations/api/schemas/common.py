from __future__ import annotations

from pydantic import BaseModel


class Message(BaseModel):
    message: str


class Created(BaseModel):
    message: str
    id: int


class ErrorBody(BaseModel):
    error: str
    message: str


class TokenGrant(BaseModel):
    name: str
    jwt: str
