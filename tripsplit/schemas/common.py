from typing import Any


def ok(data: Any = None, message: str | None = None) -> dict:
    return {"success": True, "message": message, "data": data}


def fail(message: str) -> dict:
    return {"success": False, "message": message}
