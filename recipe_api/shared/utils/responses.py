# recipe_api/shared/utils/responses.py

"""
Standardized JSON envelope.

success: {"success": true, "data": ..., "message": "..."}
error:   {"success": false, "error": {"code": "...", "message": "...", "details": ...}}
"""

from typing import Any, Dict, Mapping, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_body(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True, "data": jsonable_encoder(data)}
    if message:
        body["message"] = message
    return body


def error_body(code: str, message: str, details: Any = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = jsonable_encoder(details)
    return {"success": False, "error": error}


def success_response(
        data: Any = None,
        message: Optional[str] = None,
        status_code: int = 200,
        headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(success_body(data, message), status_code=status_code, headers=headers)


def error_response(
        code: str,
        message: str,
        status_code: int = 400,
        details: Any = None,
        headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(error_body(code, message, details), status_code=status_code, headers=headers)
