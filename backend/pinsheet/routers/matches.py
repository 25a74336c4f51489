from fastapi import APIRouter

from ..exceptions import http_problem
from ..schemas import (
    BakerRotationIn,
    BakerSlotOut,
    TraditionalMatchIn,
    TraditionalMatchOut,
)
from ..services.matches import baker_schedule, traditional_match_summary
from ..services.validation import ValidationError

router = APIRouter(prefix="/matches", tags=["matches"])


# POST /api/matches/baker/rotation
@router.post("/baker/rotation", response_model=list[BakerSlotOut])
def baker_rotation(body: BakerRotationIn) -> list[BakerSlotOut]:
    try:
        schedule = baker_schedule(body.playerIds)
    except ValidationError as exc:
        raise http_problem(
            status_code=422,
            detail=str(exc),
            code="baker_invalid_lineup",
        )
    return [BakerSlotOut(**slot) for slot in schedule]


# POST /api/matches/traditional
@router.post("/traditional", response_model=TraditionalMatchOut)
def traditional_match(body: TraditionalMatchIn) -> TraditionalMatchOut:
    return TraditionalMatchOut(**traditional_match_summary(body.playerScores))
