"""
responses.py - Unified error responses
"""

from datetime import datetime, timezone

from fastapi.responses import JSONResponse


def error_response(code: int, error: str, msg: str, hint: str = "") -> JSONResponse:
    """Unified error response format"""
    return JSONResponse(
        status_code=code,
        content={
            "ok": False,
            "code": code,
            "error": error,
            "msg": msg,
            "hint": hint,
            "ts": datetime.now(timezone.utc).isoformat()
        }
    )
