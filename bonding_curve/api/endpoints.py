"""API endpoints for the bonding-curve estimator and validator."""

import structlog
from fastapi import APIRouter, Depends

from bonding_curve.api.schemas import (
    DecodeRequest,
    ParametersResponse,
    QuoteRequest,
    QuoteResponse,
    SolveRequest,
    SolveResponse,
    StateResponse,
    TransitionRequest,
    ValidationResponse,
)
from bonding_curve.codec.args import PoolArgs
from bonding_curve.codec.script import bytes_from_hex
from bonding_curve.codec.state import decode_state
from bonding_curve.config import DEFAULT_CURVE_CONFIG, CurveConfig
from bonding_curve.math.curve import purchase_cost, redemption_return
from bonding_curve.models.transaction import Transition
from bonding_curve.quote import (
    max_purchase_amount,
    quote_purchase,
    quote_redemption,
    solve_purchase_amount,
)
from bonding_curve.validator import validate_transition

logger = structlog.get_logger()

router = APIRouter()


def get_config() -> CurveConfig:
    """Dependency provider for the curve configuration.

    Override this in tests to inject a different configuration:
        app.dependency_overrides[get_config] = lambda: CurveConfig(...)
    """
    return DEFAULT_CURVE_CONFIG


@router.post("/quote/purchase")
def quote_purchase_endpoint(
    request: QuoteRequest, config: CurveConfig = Depends(get_config)
) -> QuoteResponse:
    """Collateral required to buy `amount` tokens (units rounded up)."""
    params, state, amount = request.params, request.state, int(request.amount)
    cost = purchase_cost(amount, state.remaining, params.total_supply, params.k)
    units = quote_purchase(amount, state, params, config)
    return QuoteResponse(collateral=cost, collateral_units=units)


@router.post("/quote/redemption")
def quote_redemption_endpoint(
    request: QuoteRequest, config: CurveConfig = Depends(get_config)
) -> QuoteResponse:
    """Collateral returned for redeeming `amount` tokens (units rounded down)."""
    params, state, amount = request.params, request.state, int(request.amount)
    ret = redemption_return(amount, state.remaining, params.total_supply, params.k)
    units = quote_redemption(amount, state, params, config)
    return QuoteResponse(collateral=ret, collateral_units=units)


@router.post("/solve/purchase")
def solve_purchase_endpoint(
    request: SolveRequest, config: CurveConfig = Depends(get_config)
) -> SolveResponse:
    """Token amount a collateral budget buys."""
    params, state = request.params, request.state
    amount = solve_purchase_amount(request.budget_units, state, params, config)
    max_amount = max_purchase_amount(request.budget_units, state, params, config)
    return SolveResponse(amount=amount, max_amount=str(max_amount))


@router.post("/decode/args")
def decode_args_endpoint(request: DecodeRequest) -> ParametersResponse:
    """Decode a 55-byte EncodedArgs payload."""
    args = PoolArgs.decode(request.data)
    return ParametersResponse(
        code_hash="0x" + args.code_hash.hex(),
        hash_type=args.hash_type.name.lower(),
        k=args.k,
        total_supply=str(args.total_supply),
    )


@router.post("/decode/state")
def decode_state_endpoint(request: DecodeRequest) -> StateResponse:
    """Decode a 16-byte state payload."""
    return StateResponse(remaining=str(decode_state(request.data)))


@router.post("/validate")
def validate_endpoint(
    request: TransitionRequest, config: CurveConfig = Depends(get_config)
) -> ValidationResponse:
    """Validate a pool transition; rejections are a normal response."""
    transition = Transition(
        args_before=bytes_from_hex(request.args_before),
        args_after=bytes_from_hex(request.args_after),
        state_before=bytes_from_hex(request.state_before),
        state_after=bytes_from_hex(request.state_after),
        collateral_before=request.collateral_before,
        collateral_after=request.collateral_after,
    )
    result = validate_transition(transition, config)
    logger.info(
        "transition_validated",
        accepted=result.accepted,
        rejection=result.rejection.value if result.rejection else None,
    )
    return ValidationResponse(
        accepted=result.accepted,
        rejection=result.rejection,
        code=result.code,
        detail=result.detail,
    )
