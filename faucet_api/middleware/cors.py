from fastapi import Request
from fastapi.responses import Response
from faucet_api.config.settings import get_allowed_origin
from faucet_api.utils.errors import error_response

ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def set_cors_headers(response: Response) -> Response:
    """Allow the configured frontend (or any origin) to call the faucet."""
    response.headers["Access-Control-Allow-Origin"] = get_allowed_origin()
    response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
    response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
    return response


def setup_cors(app):
    @app.middleware("http")
    async def apply_cors_headers(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception as e:
            # Anything that escaped the typed handlers still gets a JSON 500
            response = error_response(e)
        return set_cors_headers(response)
