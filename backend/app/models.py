from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer

from models import Coordinate, TurnRecord


class GameCoord(BaseModel):
    row: int = Field(0, ge=0, le=255)
    col: int = Field(0, ge=0, le=255)


class GameTurn(BaseModel):
    """Wire shape of a TurnRecord. The server-side ``updated_at`` is never sent."""

    model_config = ConfigDict(populate_by_name=True)

    from_: GameCoord = Field(default_factory=GameCoord, alias="from")
    to: GameCoord = Field(default_factory=GameCoord)
    turn: int = Field(0, ge=0, le=65535)

    @classmethod
    def from_record(cls, record: TurnRecord) -> "GameTurn":
        return cls(
            from_=GameCoord(row=record.from_.row, col=record.from_.col),
            to=GameCoord(row=record.to.row, col=record.to.col),
            turn=record.turn,
        )

    def to_record(self) -> TurnRecord:
        return TurnRecord(
            from_=Coordinate(row=self.from_.row, col=self.from_.col),
            to=Coordinate(row=self.to.row, col=self.to.col),
            turn=self.turn,
        )


class GameReply(BaseModel):
    success: bool = False
    error: str | None = None
    data: GameTurn | None = None

    @model_serializer(mode="wrap")
    def _omit_empty_error(self, handler: Any) -> dict[str, Any]:
        payload = handler(self)
        if payload.get("error") is None:
            payload.pop("error", None)
        return payload


class GameCreateResponse(BaseModel):
    game_id: str
    join_url: str
