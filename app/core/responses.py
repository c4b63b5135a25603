from typing import Any, Dict

from fastapi.responses import JSONResponse

STATUS_ERROR = "error"


class JSONLineResponse(JSONResponse):
    """Compact JSON body terminated by a newline."""

    def render(self, content: Any) -> bytes:
        return super().render(content) + b"\n"


def error_body(message: str) -> Dict[str, str]:
    """Envelope used for every failed request."""
    return {"status": STATUS_ERROR, "error": message}


def error_response(status_code: int, message: str) -> JSONLineResponse:
    return JSONLineResponse(status_code=status_code, content=error_body(message))
