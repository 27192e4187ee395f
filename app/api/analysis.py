# =============================================================================
# Analysis API — Run the Parsing Pipeline on Supplied Text
# =============================================================================
#
# POST /analyze runs extract() and render() on text the caller already has
# (e.g. a dashboard re-rendering a stored answer). No agent call is made.
# =============================================================================

from __future__ import annotations

import logging

from fastapi import APIRouter

from app.config import settings
from app.models.requests import AnalyzeRequest
from app.models.responses import AnalyzeResponse, DisplayBlockOut, RecommendationOut
from app.services.extractor import extract, policy_from_settings
from app.services.renderer import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    summary="Extract recommendations and display blocks from agent text",
)
async def analyze_endpoint(request: AnalyzeRequest) -> AnalyzeResponse:
    policy = policy_from_settings(settings, request.variant)
    recommendations = extract(request.text, policy)
    blocks = render(request.text)

    logger.info(
        "Analyzed %d chars (%s): %d recommendations, %d blocks",
        len(request.text),
        request.variant,
        len(recommendations),
        len(blocks),
    )

    return AnalyzeResponse(
        variant=request.variant,
        recommendations=[RecommendationOut.from_record(r) for r in recommendations],
        blocks=[DisplayBlockOut.from_block(b) for b in blocks],
    )
