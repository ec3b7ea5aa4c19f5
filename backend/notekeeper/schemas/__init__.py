"""Pydantic Schemas"""
from .user import (
    SignupRequest, LoginRequest, VerifyPasswordRequest, ProfileUpdate,
    UserResponse, MessageResponse,
)
from .note import NoteCreate, NoteUpdate, NoteResponse

__all__ = [
    "SignupRequest", "LoginRequest", "VerifyPasswordRequest", "ProfileUpdate",
    "UserResponse", "MessageResponse",
    "NoteCreate", "NoteUpdate", "NoteResponse",
]
