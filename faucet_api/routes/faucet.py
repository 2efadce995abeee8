import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from web3 import Web3
from faucet_api.config.settings import load_faucet_settings
from faucet_api.models.schemas import ErrorResponse, FaucetRequest, FaucetResponse
from faucet_api.utils.errors import ValidationError
from faucet_api.utils.faucet import (
    Web3Factory,
    check_eligibility,
    get_web3_factory,
    load_signer,
    submit_faucet_request,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ALLOW_HEADER = "POST, OPTIONS"


async def read_faucet_request(request: Request) -> FaucetRequest:
    """Parse the JSON body, anything without a valid userAddress is a ValidationError."""
    try:
        payload = await request.json()
        return FaucetRequest.model_validate(payload)
    except (ValueError, PydanticValidationError) as e:
        raise ValidationError(f"address not valid: {str(e)}") from e


@router.options("/faucet", status_code=status.HTTP_204_NO_CONTENT)
async def faucet_preflight():
    # Browsers send this before the POST, nothing else is checked
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/faucet",
    response_model=FaucetResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"description": "Recipient balance is not zero"},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def request_faucet(request: Request, web3_factory: Web3Factory = Depends(get_web3_factory)):
    """Send the faucet payout to a recipient whose native balance is zero."""
    # Configuration comes first so a misconfigured server answers 500 to every POST
    settings = load_faucet_settings()

    faucet_request = await read_faucet_request(request)
    user_address = Web3.to_checksum_address(faucet_request.userAddress)

    w3 = web3_factory(settings.rpc_url)
    signer = load_signer(settings.private_key)

    await check_eligibility(w3, user_address)

    logger.info("Processing faucet request for: %s", user_address)
    tx_hash = await submit_faucet_request(w3, signer, settings.contract_address, user_address)
    logger.info("Faucet sent successfully! Tx hash: %s", tx_hash)

    return FaucetResponse(
        success=True,
        message=f"Faucet successfully sent to {faucet_request.userAddress}",
        transactionHash=tx_hash,
    )


def method_not_allowed_response(request: Request) -> JSONResponse:
    logger.warning("Rejected %s request to the faucet", request.method)
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={"error": "Method Not Allowed"},
        headers={"Allow": ALLOW_HEADER},
    )


def is_faucet_path(request: Request) -> bool:
    return any(
        getattr(route, "endpoint", None) in (faucet_preflight, request_faucet)
        and route.path == request.url.path
        for route in request.app.routes
    )


async def faucet_http_error_handler(request: Request, exc: StarletteHTTPException):
    # The router answers any method it has no route for with a 405
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED and is_faucet_path(request):
        return method_not_allowed_response(request)
    return await http_exception_handler(request, exc)
