"""
Data Models Module.

TypedDict shapes for API records and the game mode enum.
"""

from .models import (
    BattlelogEvent,
    Brawler,
    Club,
    ClubMember,
    Event,
    EventSlot,
    GameMode,
    Gear,
    Player,
    PlayerBattlelog,
    PlayerBrawler,
    PlayerClub,
    PlayerIcon,
    RankingsClub,
    RankingsPlayer,
    RankingsPlayerClub,
    StarPower,
)

__all__ = [
    "BattlelogEvent",
    "Brawler",
    "Club",
    "ClubMember",
    "Event",
    "EventSlot",
    "GameMode",
    "Gear",
    "Player",
    "PlayerBattlelog",
    "PlayerBrawler",
    "PlayerClub",
    "PlayerIcon",
    "RankingsClub",
    "RankingsPlayer",
    "RankingsPlayerClub",
    "StarPower",
]
