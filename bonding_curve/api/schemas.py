"""Pydantic request/response models for the HTTP API.

u128 quantities travel as decimal strings, binary payloads as 0x-hex.
"""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from bonding_curve.constants import U32_MAX, U64_MAX, U128_MAX
from bonding_curve.errors import RejectionKind
from bonding_curve.models.pool import CurveParameters, PoolState


def validate_uint128(value: Any) -> str:
    """Validate that a value is a u128 decimal string (or int).

    Raises:
        ValueError: If value is not a non-negative integer within u128 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint128 must be string or int, got bool")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint128 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint128 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint128 cannot be negative: {value}")
    if int_value > U128_MAX:
        raise ValueError(f"Uint128 overflow: {value} > 2^128-1")
    return str(int_value)


# 128-bit unsigned integer as decimal string (validated)
Uint128 = Annotated[
    str,
    BeforeValidator(validate_uint128),
    Field(description="128-bit unsigned integer as decimal string"),
]

# Arbitrary hex bytes
HexBytes = Annotated[str, Field(pattern=r"^0x([a-fA-F0-9]{2})*$")]

Steepness = Annotated[int, Field(ge=0, le=U32_MAX)]
Capacity = Annotated[int, Field(ge=0, le=U64_MAX)]


class PoolRequest(BaseModel):
    """Pool parameters and state shared by quote requests."""

    remaining: Uint128
    total_supply: Uint128 = Field(alias="totalSupply")
    k: Steepness

    model_config = {"populate_by_name": True}

    @property
    def params(self) -> CurveParameters:
        return CurveParameters(k=self.k, total_supply=int(self.total_supply))

    @property
    def state(self) -> PoolState:
        return PoolState(remaining=int(self.remaining))


class QuoteRequest(PoolRequest):
    """Purchase or redemption quote for a token amount."""

    amount: Uint128


class QuoteResponse(BaseModel):
    """Quoted collateral, exact and in rounded base units."""

    collateral: Decimal
    collateral_units: int = Field(alias="collateralUnits")

    model_config = {"populate_by_name": True}


class SolveRequest(PoolRequest):
    """Token amount purchasable with a collateral budget."""

    budget_units: Capacity = Field(alias="budgetUnits")


class SolveResponse(BaseModel):
    """Approximate solved amount and the submittable whole-token amount."""

    amount: Decimal
    max_amount: str = Field(alias="maxAmount")

    model_config = {"populate_by_name": True}


class DecodeRequest(BaseModel):
    """Hex payload to decode."""

    data: HexBytes


class ParametersResponse(BaseModel):
    code_hash: str = Field(alias="codeHash")
    hash_type: str = Field(alias="hashType")
    k: int
    total_supply: str = Field(alias="totalSupply")

    model_config = {"populate_by_name": True}


class StateResponse(BaseModel):
    remaining: str


class TransitionRequest(BaseModel):
    """Before/after pool cell snapshots for validation."""

    args_before: HexBytes = Field(alias="argsBefore")
    args_after: HexBytes = Field(alias="argsAfter")
    state_before: HexBytes = Field(alias="stateBefore")
    state_after: HexBytes = Field(alias="stateAfter")
    collateral_before: Capacity = Field(alias="collateralBefore")
    collateral_after: Capacity = Field(alias="collateralAfter")

    model_config = {"populate_by_name": True}


class ValidationResponse(BaseModel):
    accepted: bool
    rejection: RejectionKind | None = None
    code: int = 0
    detail: str | None = None


class ErrorResponse(BaseModel):
    detail: str
    kind: str
