"""Records sent on the lichess board game stream (one JSON object per line)."""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from lichess_board.core.shared_types import GameStatus, Side

STARTING_POSITION = "startpos"
STANDARD_VARIANT = "standard"


class StreamRecord(BaseModel):
    """Accept the camelCase names lichess uses, ignore fields we have no use for."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Player(StreamRecord):
    # AI opponents come without an id, only an aiLevel
    id: Optional[str] = None
    name: Optional[str] = None
    rating: Optional[int] = None
    ai_level: Optional[int] = Field(default=None, alias="aiLevel")


class Variant(StreamRecord):
    key: str = STANDARD_VARIANT
    name: Optional[str] = None


# --- EVENTS ---
class GameStateEvent(StreamRecord):
    """Incremental update. `moves` is still the complete history from the start of the game."""

    type: Literal["gameState"] = "gameState"
    moves: str = ""
    status: GameStatus = GameStatus.STARTED
    wtime: Optional[int] = None
    btime: Optional[int] = None
    winc: Optional[int] = None
    binc: Optional[int] = None
    winner: Optional[Side] = None


class GameFullEvent(StreamRecord):
    """Full snapshot: who plays which side and the whole game state."""

    type: Literal["gameFull"] = "gameFull"
    id: str
    white: Player
    black: Player
    state: GameStateEvent
    variant: Variant = Field(default_factory=Variant)
    initial_fen: str = Field(default=STARTING_POSITION, alias="initialFen")
    rated: bool = False


class ChatLineEvent(StreamRecord):
    type: Literal["chatLine"] = "chatLine"
    username: str
    text: str
    room: str = "player"


class OpponentGoneEvent(StreamRecord):
    type: Literal["opponentGone"] = "opponentGone"
    gone: bool
    claim_win_in_seconds: Optional[int] = Field(
        default=None, alias="claimWinInSeconds"
    )


GameEvent = Annotated[
    Union[GameFullEvent, GameStateEvent, ChatLineEvent, OpponentGoneEvent],
    Field(discriminator="type"),
]

KNOWN_EVENT_TYPES = frozenset(["gameFull", "gameState", "chatLine", "opponentGone"])
