"""
FastAPI router for text token endpoints.

Tokens are generated inline; large counts still run batched so the event
loop keeps serving other requests between batches.
"""

import logging

from fastapi import APIRouter, Depends, Request

from ...api.models import TokenPreviewResponse, TokenResponse
from ...config.models import DatagenConfig
from ...shared.dependencies import get_config, rate_limit
from ...shared.models import TokenRequest
from ..controller import GenerationController
from ..tokens import generate_tokens, preview_tokens

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/tokens",
    response_model=TokenResponse,
    summary="Generate text tokens",
    description="Generate random strings or email addresses from character pools",
)
@rate_limit(max_requests=30, window_seconds=60)
async def create_tokens(
    request: Request,
    token_request: TokenRequest,
    config: DatagenConfig = Depends(get_config),
):
    """Generate tokens and return them."""
    result = await generate_tokens(
        token_request, controller=GenerationController(config.engine)
    )
    return TokenResponse.from_result(result)


@router.post(
    "/tokens/preview",
    response_model=TokenPreviewResponse,
    summary="Preview text tokens",
    description="A few numbered sample tokens with pool details and a time estimate",
)
async def create_token_preview(token_request: TokenRequest):
    """Preview a token request."""
    return TokenPreviewResponse(**preview_tokens(token_request))
