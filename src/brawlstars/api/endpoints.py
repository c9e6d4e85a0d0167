"""
Brawl Stars API endpoint definitions.

Resource paths for the official Brawl Stars API, relative to the base URL.
Tags are passed through clean_tag() and sent with the leading '#' encoded
as %23.
"""

# Base URL
BRAWLSTARS_BASE_URL = "https://api.brawlstars.com/v1"

# =============================================================================
# Players
# =============================================================================

# Player profile - trophies, brawlers, victories per mode
PLAYER = "/players/%23{tag}"

# Battle log - the player's most recent battles
PLAYER_BATTLELOG = "/players/%23{tag}/battlelog"

# =============================================================================
# Clubs
# =============================================================================

CLUB = "/clubs/%23{tag}"

# Club members - supports before/after/limit paging
CLUB_MEMBERS = "/clubs/%23{tag}/members"

# =============================================================================
# Rankings (country is a two letter code or "global")
# =============================================================================

PLAYER_RANKINGS = "/rankings/{country}/players"
CLUB_RANKINGS = "/rankings/{country}/clubs"
BRAWLER_RANKINGS = "/rankings/{country}/brawlers/{brawler_id}"

# =============================================================================
# Brawlers and events
# =============================================================================

BRAWLERS = "/brawlers"
BRAWLER = "/brawlers/{brawler_id}"

# Event rotation - currently active map slots
EVENT_ROTATION = "/events/rotation"


# =============================================================================
# Endpoint Helper Functions
# =============================================================================


def clean_tag(tag: str) -> str:
    """
    Normalize a player or club tag for use in a resource path.

    Tags are case-insensitive and never contain the letter O, so a typed
    'O' is read as zero. The leading '#' is dropped; paths add it back
    encoded.
    """
    return tag.strip().upper().replace("O", "0").lstrip("#")


def get_player_path(tag: str) -> str:
    """Get path for a player profile."""
    return PLAYER.format(tag=clean_tag(tag))


def get_player_battlelog_path(tag: str) -> str:
    """Get path for a player's battle log."""
    return PLAYER_BATTLELOG.format(tag=clean_tag(tag))


def get_club_path(tag: str) -> str:
    """Get path for a club."""
    return CLUB.format(tag=clean_tag(tag))


def get_club_members_path(tag: str) -> str:
    """Get path for a club's member list."""
    return CLUB_MEMBERS.format(tag=clean_tag(tag))


def get_player_rankings_path(country: str) -> str:
    """Get path for player rankings in a country."""
    return PLAYER_RANKINGS.format(country=country)


def get_club_rankings_path(country: str) -> str:
    """Get path for club rankings in a country."""
    return CLUB_RANKINGS.format(country=country)


def get_brawler_rankings_path(country: str, brawler_id: int | str) -> str:
    """Get path for a brawler's player rankings in a country."""
    return BRAWLER_RANKINGS.format(country=country, brawler_id=brawler_id)


def get_brawler_path(brawler_id: int | str) -> str:
    """Get path for a single brawler."""
    return BRAWLER.format(brawler_id=brawler_id)
