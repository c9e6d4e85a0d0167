"""
Record shapes returned by the Brawl Stars API.

The client hands back decoded JSON as-is, so these are TypedDicts describing
that JSON rather than classes that wrap it. Field names follow the API.
"""

from enum import StrEnum
from typing import NotRequired, TypedDict


class GameMode(StrEnum):
    """Event game modes as reported by the API."""

    GEM_GRAB = "gemGrab"
    SOLO_SHOWDOWN = "soloShowdown"
    DUO_SHOWDOWN = "duoShowdown"
    BOUNTY = "bounty"
    HEIST = "heist"
    BRAWL_BALL = "brawlBall"
    SIEGE = "siege"
    HOT_ZONE = "hotZone"
    BIG_GAME = "bigGame"
    KNOCKOUT = "knockout"
    VOLLEY_BRAWL = "volleyBrawl"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "GameMode":
        # New modes ship before client releases do
        return cls.UNKNOWN


# =============================================================================
# Brawlers
# =============================================================================


class StarPower(TypedDict):
    id: int
    name: str


class Gear(TypedDict):
    id: int
    name: str
    level: int


class Brawler(TypedDict):
    id: int
    name: str
    starPowers: list[StarPower]
    gadgets: list[StarPower]


# =============================================================================
# Players
# =============================================================================


class PlayerIcon(TypedDict):
    id: int


class PlayerClub(TypedDict):
    name: str
    tag: str


class PlayerBrawler(TypedDict):
    id: int
    name: str
    power: int
    rank: int
    trophies: int
    highestTrophies: int
    starPowers: list[StarPower]
    gadgets: list[StarPower]
    gears: NotRequired[list[Gear]]


# "3vs3Victories" can't be declared with class syntax
_PlayerBase = TypedDict("_PlayerBase", {"3vs3Victories": int})


class Player(_PlayerBase):
    name: str
    tag: str
    icon: PlayerIcon
    club: NotRequired[PlayerClub]
    trophies: int
    highestTrophies: int
    isQualifiedFromChampionshipChallenge: bool
    nameColor: str
    brawlers: list[PlayerBrawler]
    bestRoboRumbleTime: int
    bestTimeAsBigBrawler: int
    duoVictories: int
    soloVictories: int
    powerPlayPoints: NotRequired[int]
    expPoints: int
    expLevel: int
    x3vs3Victories: int


class BattlelogEvent(TypedDict):
    id: int
    mode: str
    map: str


class PlayerBattlelog(TypedDict):
    battleTime: str
    event: BattlelogEvent
    battle: dict


class RankingsPlayerClub(TypedDict):
    name: str


class RankingsPlayer(TypedDict):
    tag: str
    name: str
    nameColor: str
    icon: PlayerIcon
    trophies: int
    rank: int
    club: NotRequired[RankingsPlayerClub]


# =============================================================================
# Clubs
# =============================================================================


class ClubMember(TypedDict):
    tag: str
    name: str
    nameColor: str
    role: str
    trophies: int
    icon: PlayerIcon


class Club(TypedDict):
    tag: str
    name: str
    description: NotRequired[str]
    type: str
    badgeId: int
    requiredTrophies: int
    trophies: int
    members: list[ClubMember]


class RankingsClub(TypedDict):
    tag: str
    name: str
    badgeId: int
    trophies: int
    rank: int
    memberCount: int


# =============================================================================
# Events
# =============================================================================


class Event(TypedDict):
    id: int
    mode: str
    map: str
    modifiers: NotRequired[list[str]]


class EventSlot(TypedDict):
    startTime: str
    endTime: str
    event: Event
