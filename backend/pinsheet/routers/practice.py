from fastapi import APIRouter

from ..exceptions import UnknownDrill
from ..schemas import SpareDrillOut, SpareSessionIn, SpareSessionOut
from ..services.practice import SPARE_DRILLS, get_drill, score_spare_session
from ..services.validation import ValidationError

router = APIRouter(prefix="/practice", tags=["practice"])


# GET /api/practice/spares/drills
@router.get("/spares/drills", response_model=list[SpareDrillOut])
def list_drills() -> list[SpareDrillOut]:
    return [
        SpareDrillOut(
            id=d.id,
            name=d.name,
            pins=list(d.pins),
            difficulty=d.difficulty,
            leaveType=d.leave_type,
        )
        for d in SPARE_DRILLS
    ]


# POST /api/practice/spares/session
@router.post("/spares/session", response_model=SpareSessionOut)
def spare_session(body: SpareSessionIn) -> SpareSessionOut:
    try:
        drill = get_drill(body.drillId)
    except ValidationError:
        raise UnknownDrill(body.drillId)
    return SpareSessionOut(**score_spare_session(drill, body.attempts))
