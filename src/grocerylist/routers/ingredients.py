"""API routes for single ingredient normalization."""

from fastapi import APIRouter, HTTPException, status

from grocerylist.logging_config import get_logger
from grocerylist.normalize.canonical import generate_canonical_key
from grocerylist.normalize.parser import parse_ingredient_line
from grocerylist.schemas import CamelModel, ParsedIngredient

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/ingredients", tags=["ingredients"])


class NormalizeRequest(CamelModel):
    """Raw ingredient line to parse."""

    raw_text: str


class NormalizeResponse(CamelModel):
    """Parsed ingredient with its deduplication key."""

    parsed: ParsedIngredient
    canonical_key: str


@router.post("/normalize", response_model=NormalizeResponse, response_model_by_alias=True)
async def normalize_ingredient(request: NormalizeRequest) -> NormalizeResponse:
    """Parse one ingredient line, e.g. for a preview without a full recompute."""
    if not request.raw_text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="rawText is required and must be a non-empty string",
        )

    parsed = parse_ingredient_line(request.raw_text)
    return NormalizeResponse(parsed=parsed, canonical_key=generate_canonical_key(parsed))
