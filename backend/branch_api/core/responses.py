from typing import Any

from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder


def success(data: Any = None, message: str | None = None, meta: dict | None = None) -> dict:
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if meta is not None:
        body["meta"] = meta
    return body


def error(message: str, status_code: int = 400, errors: dict | None = None, headers: dict | None = None) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body), headers=headers)
