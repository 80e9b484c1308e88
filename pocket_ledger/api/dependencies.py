"""Dependency injection for FastAPI endpoints"""

import uuid
from datetime import date
from typing import Optional
from fastapi import Header, HTTPException, Request


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_current_user_id(x_user_id: Optional[str] = Header(None, alias="X-User-ID")) -> str:
    """Signed-in user id forwarded by the authentication layer"""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-ID header")
    return x_user_id.strip()


def get_today() -> date:
    """Reference date for windows and reports"""
    return date.today()


def parse_record_id(value: str, label: str) -> uuid.UUID:
    """Path id as UUID, 400 on malformed input"""
    try:
        return uuid.UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label} ID format")
