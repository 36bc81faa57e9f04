"""Translate service errors into HTTP errors."""

from contextlib import contextmanager

from fastapi import HTTPException

from ..services import CandidatePoolUnavailable, SessionNotFound


@contextmanager
def service_errors():
    try:
        yield
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=f"Feed session not found: {e.args[0]}") from e
    except CandidatePoolUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
