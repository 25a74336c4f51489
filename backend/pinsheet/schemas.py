from typing import Dict, List, Literal, Optional, Union
from datetime import datetime
from pydantic import BaseModel, Field, model_validator, field_validator, ConfigDict

from .scoring.bowling import Ball, Frame, Game, derive_frame
from .scoring.pins import PinLeave, create_pin_leave
from .time_utils import coerce_utc

GameMode = Literal[
    "practice-spares",
    "practice-full",
    "match-traditional",
    "match-baker",
    "league",
]
Symbol = Union[int, Literal["X", "/", "-", "F", "G"]]


def _check_pins(value: List[int]) -> List[int]:
    if any(not 1 <= p <= 10 for p in value):
        raise ValueError("pins are numbered 1-10")
    if len(set(value)) != len(value):
        raise ValueError("pins must not repeat")
    return sorted(value)


class BallIn(BaseModel):
    ballNumber: int = Field(..., ge=1, le=3)
    pinsKnockedDown: int = Field(..., ge=0, le=10)
    pinsetBefore: List[int]
    pinsetAfter: List[int]
    isFoul: bool = False
    isGutter: bool = False
    timestamp: Optional[datetime] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("pinsetBefore", "pinsetAfter")
    @classmethod
    def _validate_pinset(cls, value: List[int]) -> List[int]:
        return _check_pins(value)

    @model_validator(mode="after")
    def _check_pinsets(self):
        if not set(self.pinsetAfter) <= set(self.pinsetBefore):
            raise ValueError("pinsetAfter must be a subset of pinsetBefore")
        if self.isFoul or self.isGutter:
            # the rack is untouched and nothing is credited
            if self.pinsKnockedDown != 0 or self.pinsetAfter != self.pinsetBefore:
                raise ValueError("foul and gutter balls knock down no pins")
        elif self.pinsKnockedDown != len(self.pinsetBefore) - len(self.pinsetAfter):
            raise ValueError("pinsKnockedDown does not match pinsetBefore/pinsetAfter")
        return self

    def to_ball(self) -> Ball:
        return Ball(
            ball_number=self.ballNumber,
            pins_knocked_down=self.pinsKnockedDown,
            pinset_before=tuple(self.pinsetBefore),
            pinset_after=tuple(self.pinsetAfter),
            is_foul=self.isFoul,
            is_gutter=self.isGutter,
            timestamp=self.timestamp,
        )


class PinLeaveOut(BaseModel):
    pins: List[int]
    count: int
    isSplit: bool
    isWashout: bool
    isConverted: bool
    leaveType: str

    @classmethod
    def from_leave(cls, leave: PinLeave) -> "PinLeaveOut":
        return cls(
            pins=list(leave.pins),
            count=leave.count,
            isSplit=leave.is_split,
            isWashout=leave.is_washout,
            isConverted=leave.is_converted,
            leaveType=leave.leave_type,
        )


class PinLeaveIn(BaseModel):
    pins: List[int]
    isConverted: bool = False

    model_config = ConfigDict(extra="ignore")

    @field_validator("pins")
    @classmethod
    def _validate_pins(cls, value: List[int]) -> List[int]:
        return _check_pins(value)


class FrameIn(BaseModel):
    """A recorded frame. Flags left out are derived from the balls."""

    frameNumber: int = Field(..., ge=1, le=10)
    balls: List[BallIn] = Field(default_factory=list, max_length=3)
    isStrike: Optional[bool] = None
    isSpare: Optional[bool] = None
    leaveAfterBall1: Optional[PinLeaveIn] = None
    playerId: Optional[str] = None
    gameId: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    def to_frame(self) -> Frame:
        frame = Frame(
            frame_number=self.frameNumber,
            balls=tuple(b.to_ball() for b in self.balls),
            player_id=self.playerId,
            game_id=self.gameId,
        )
        if self.isStrike is None or self.isSpare is None:
            return derive_frame(frame)
        leave = None
        if self.leaveAfterBall1 is not None and self.leaveAfterBall1.pins:
            leave = create_pin_leave(
                self.leaveAfterBall1.pins, self.leaveAfterBall1.isConverted
            )
        return Frame(
            frame_number=frame.frame_number,
            balls=frame.balls,
            is_strike=self.isStrike,
            is_spare=self.isSpare,
            leave=leave,
            player_id=frame.player_id,
            game_id=frame.game_id,
        )


class GameIn(BaseModel):
    id: str = Field(..., min_length=1)
    playerId: str
    totalScore: int = Field(..., ge=0, le=300)
    isComplete: bool = True
    mode: Optional[GameMode] = None
    sessionId: Optional[str] = None
    createdAt: Optional[datetime] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("createdAt")
    @classmethod
    def _created_at_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return coerce_utc(value)

    def to_game(self) -> Game:
        return Game(
            id=self.id,
            player_id=self.playerId,
            total_score=self.totalScore,
            is_complete=self.isComplete,
            mode=self.mode,
            session_id=self.sessionId,
            created_at=self.createdAt,
        )


class BallOut(BaseModel):
    ballNumber: int
    pinsKnockedDown: int
    pinsetBefore: List[int]
    pinsetAfter: List[int]
    isFoul: bool
    isGutter: bool


class FrameOut(BaseModel):
    """A frame with its scoresheet marks and resolved (or pending) score."""
    frameNumber: int
    playerId: Optional[str] = None
    balls: List[BallOut] = Field(default_factory=list)
    isStrike: bool = False
    isSpare: bool = False
    leaveAfterBall1: Optional[PinLeaveOut] = None
    symbols: List[Symbol] = Field(default_factory=list)
    score: Optional[int] = None
    runningTotal: Optional[int] = None
    pending: bool = False


class ScoreRequest(BaseModel):
    frames: List[FrameIn] = Field(default_factory=list, max_length=10)


class ScoreOut(BaseModel):
    frames: List[FrameOut]
    total: int
    complete: bool


class GameConfigIn(BaseModel):
    gameId: Optional[str] = None
    playerId: Optional[str] = None
    mode: Optional[GameMode] = None
    playerIds: List[str] = Field(default_factory=list)


class EventIn(BaseModel):
    type: Literal["ROLL", "STRIKE", "SPARE", "MISS", "UNDO"]
    standing: Optional[List[int]] = None
    foul: bool = False
    gutter: bool = False
    timestamp: Optional[datetime] = None

    @model_validator(mode="after")
    def _validate_roll(self):
        if self.type == "ROLL" and self.standing is None:
            raise ValueError("standing is required for ROLL events")
        return self


class EventsRequest(BaseModel):
    config: GameConfigIn = Field(default_factory=GameConfigIn)
    events: List[EventIn] = Field(default_factory=list)


class LiveGameOut(BaseModel):
    """Replayed state of a game in progress."""
    gameId: Optional[str] = None
    mode: Optional[str] = None
    frames: List[FrameOut]
    total: int
    complete: bool
    currentFrame: int
    currentBall: int
    pinsStanding: List[int]
    canUndo: bool


class BakerRotationIn(BaseModel):
    playerIds: List[str]


class BakerSlotOut(BaseModel):
    frameNumber: int
    playerId: str


class TraditionalMatchIn(BaseModel):
    playerScores: Dict[str, int]

    @field_validator("playerScores")
    @classmethod
    def _validate_scores(cls, value: Dict[str, int]) -> Dict[str, int]:
        for player_id, score in value.items():
            if not 0 <= score <= 300:
                raise ValueError(f"score for {player_id} must be between 0 and 300")
        return value


class TraditionalMatchOut(BaseModel):
    playerScores: Dict[str, int]
    teamTotal: int


class LeaveStatsOut(BaseModel):
    pinset: List[int]
    count: int
    conversionRate: float


class PlayerStatsOut(BaseModel):
    """Statistics snapshot over a window of a player's completed games."""
    playerId: str = ""
    totalGames: int = 0
    averageScore: float = 0
    highGame: int = 0
    strikePercentage: float = 0
    sparePercentage: float = 0
    singlePinSparePercentage: float = 0
    multiPinSparePercentage: float = 0
    splitLeavesPercentage: float = 0
    splitConversionPercentage: float = 0
    openFramesPercentage: float = 0
    gutterCount: int = 0
    foulCount: int = 0
    firstBallAverage: float = 0
    pocketHitPercentage: float = 0
    carryRate: float = 0
    doublePercentage: float = 0
    triplePercentage: float = 0
    commonLeaves: List[LeaveStatsOut] = Field(default_factory=list)


class PlayerStatsRequest(BaseModel):
    games: List[GameIn] = Field(default_factory=list)
    frames: List[FrameIn] = Field(default_factory=list)
    limit: Optional[int] = Field(default=None, gt=0)


class SessionStatsRequest(BaseModel):
    sessionId: str = Field(..., min_length=1)
    games: List[GameIn] = Field(default_factory=list)
    frames: List[FrameIn] = Field(default_factory=list)


class TeamStatsRequest(BaseModel):
    players: Dict[str, PlayerStatsOut] = Field(default_factory=dict)
    # optional raw games per player for pooled totals
    games: Dict[str, List[GameIn]] = Field(default_factory=dict)


class TeamGamesOut(BaseModel):
    players: int
    totalGames: int
    averageScore: float
    highGame: int


class TeamStatsOut(BaseModel):
    averageScore: float
    highGame: int
    strikePercentage: float
    sparePercentage: float
    pooled: Optional[TeamGamesOut] = None


class GameSummaryOut(BaseModel):
    id: str
    score: int
    mode: Optional[str] = None
    date: Optional[datetime] = None


class DashboardOut(BaseModel):
    stats: PlayerStatsOut
    games: List[GameSummaryOut] = Field(default_factory=list)
    rollingAverage: List[float] = Field(default_factory=list)
    pinFrequency: Dict[int, int] = Field(default_factory=dict)


class SpareDrillOut(BaseModel):
    id: str
    name: str
    pins: List[int]
    difficulty: Literal["easy", "medium", "hard"]
    leaveType: str


class SpareSessionIn(BaseModel):
    drillId: str
    attempts: List[List[int]] = Field(default_factory=list)

    @field_validator("attempts")
    @classmethod
    def _validate_attempts(cls, value: List[List[int]]) -> List[List[int]]:
        return [_check_pins(standing) for standing in value]


class SpareSessionOut(BaseModel):
    drillId: str
    attempts: int
    conversions: int
    conversionRate: float
