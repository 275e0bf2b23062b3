import datetime as dt
from pathlib import Path
from typing import Optional

from sqlmodel import Field, Relationship, SQLModel, Session, create_engine

from backend.config import settings


class Round(SQLModel, table=True):
    __tablename__ = "rounds"

    id: Optional[int] = Field(default=None, primary_key=True)
    telegram_user_id: str = ""
    date: dt.date = Field(default_factory=dt.date.today)
    course_name: Optional[str] = None
    start_hole: int = 1
    is_seed: bool = False
    created_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc)
    )

    holes: list["Hole"] = Relationship(back_populates="round")


class Hole(SQLModel, table=True):
    __tablename__ = "holes"

    id: Optional[int] = Field(default=None, primary_key=True)
    round_id: int = Field(foreign_key="rounds.id")
    hole_number: int
    par: int
    yardage: int
    score: int
    putts: int = 0
    fairway_hit: Optional[bool] = None  # None on par 3s
    gir: bool = False

    round: Optional[Round] = Relationship(back_populates="holes")
    shots: list["Shot"] = Relationship(back_populates="hole")


class Shot(SQLModel, table=True):
    __tablename__ = "shots"

    id: Optional[int] = Field(default=None, primary_key=True)
    hole_id: int = Field(foreign_key="holes.id")
    shot_number: int
    shot_type: str  # "tee", "approach", "around_green", "putting"
    distance_before: int
    distance_after: int
    distance_unit: str  # "yards" or "feet"
    shot_distance: int
    used_driver: Optional[bool] = None
    result: str
    miss_direction: Optional[str] = None
    putt_break: Optional[str] = None
    putt_slope: Optional[str] = None

    hole: Optional[Hole] = Relationship(back_populates="shots")


connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
engine = create_engine(settings.database_url, echo=False, connect_args=connect_args)


def init_db() -> None:
    if settings.database_url.startswith("sqlite:///"):
        Path(settings.database_url[len("sqlite:///"):]).parent.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)


def get_session() -> Session:
    return Session(engine)
