import logging
from typing import Dict, List, Tuple, Type
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred on the server."


class FaucetError(Exception):
    """Base class for every failure the faucet endpoint knows how to answer."""


class ConfigurationError(FaucetError):
    """Required environment values are missing or malformed."""


class ValidationError(FaucetError):
    """The request body does not carry a usable userAddress."""


class IneligibilityError(FaucetError):
    """The recipient already holds a native balance."""


class DuplicateClaimError(FaucetError):
    """The faucet contract refused a repeat claim for the recipient."""


class ExternalCallError(FaucetError):
    """The node, the network or the contract failed for any other reason."""


# Checked in order, first match wins
ERROR_RESPONSES: List[Tuple[Type[FaucetError], int, Dict[str, str]]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST, {"error": "address not valid."}),
    (IneligibilityError, status.HTTP_403_FORBIDDEN, {"message": "your not eligible (balance > 0)."}),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": "Server configuration error."}),
    (DuplicateClaimError, status.HTTP_409_CONFLICT, {"error": "address has already been claimed by faucet."}),
]


def classify_error(exc: Exception) -> Tuple[int, Dict[str, str]]:
    """Map an exception to the status code and sanitized body sent to the client."""
    for error_class, status_code, body in ERROR_RESPONSES:
        if isinstance(exc, error_class):
            return status_code, dict(body)
    return status.HTTP_500_INTERNAL_SERVER_ERROR, {"error": INTERNAL_ERROR_MESSAGE}


def error_response(exc: Exception) -> JSONResponse:
    status_code, body = classify_error(exc)
    if status_code >= 500:
        logger.error("Faucet Error: %s", exc, exc_info=exc)
    else:
        logger.warning("Faucet request rejected (%s): %s", status_code, exc)
    return JSONResponse(status_code=status_code, content=body)


async def faucet_error_handler(request: Request, exc: FaucetError) -> JSONResponse:
    return error_response(exc)


def setup_error_handlers(app):
    app.add_exception_handler(FaucetError, faucet_error_handler)
