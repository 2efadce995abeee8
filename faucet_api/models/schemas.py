from pydantic import BaseModel, Field, StrictStr, field_validator
from faucet_api.utils.faucet import is_valid_address

class FaucetRequest(BaseModel):
    userAddress: StrictStr = Field(..., description="Address that should receive the faucet payout")

    @field_validator("userAddress")
    @classmethod
    def check_address(cls, value: str) -> str:
        # Any valid format is accepted, the checksum only matters for mixed case
        if not value or not is_valid_address(value):
            raise ValueError("address not valid.")
        return value

class FaucetResponse(BaseModel):
    success: bool
    message: str
    transactionHash: str

class ErrorResponse(BaseModel):
    error: str

class HealthResponse(BaseModel):
    status: str
    timestamp: str
