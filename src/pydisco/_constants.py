"""Internal constants shared across the library."""

BASE_URL = "https://discord.com/api/v10"
CDN_URL = "https://cdn.discordapp.com"
USER_AGENT = "DiscordBot (https://github.com/pydisco/pydisco, 0.1)"

# Milliseconds since the Unix epoch of the first snowflake second (2015-01-01).
DISCORD_EPOCH_MS = 1_420_070_400_000

# ------------------------------------------------------------------
# REST routes
# ------------------------------------------------------------------

GUILD_AUTOMOD_RULES = "/guilds/{guild_id}/auto-moderation/rules"
GUILD_AUTOMOD_RULE = "/guilds/{guild_id}/auto-moderation/rules/{rule_id}"
GUILD_SCHEDULED_EVENTS = "/guilds/{guild_id}/scheduled-events"
GUILD_SCHEDULED_EVENT = "/guilds/{guild_id}/scheduled-events/{event_id}"
GUILD_SCHEDULED_EVENT_USERS = "/guilds/{guild_id}/scheduled-events/{event_id}/users"

# ------------------------------------------------------------------
# CDN routes (extension and size are appended by format_image_url)
# ------------------------------------------------------------------

GUILD_SCHEDULED_EVENT_COVER = "/guild-events/{event_id}/{image}"
GUILD_ICON = "/icons/{guild_id}/{icon}"
USER_AVATAR = "/avatars/{user_id}/{avatar}"
DEFAULT_USER_AVATAR = "/embed/avatars/{index}"

# ------------------------------------------------------------------
# CDN image formatting
# ------------------------------------------------------------------

IMAGE_FORMATS: tuple[str, ...] = ("jpg", "jpeg", "png", "webp", "gif")
IMAGE_SIZE_MIN = 16
IMAGE_SIZE_MAX = 4096


def _is_valid_size(size: int) -> bool:
    return IMAGE_SIZE_MIN <= size <= IMAGE_SIZE_MAX and size & (size - 1) == 0


def format_image_url(
    cdn_url: str,
    path: str,
    *,
    fmt: str | None = None,
    size: int | None = None,
    default_format: str = "jpg",
    default_size: int = IMAGE_SIZE_MAX,
) -> str:
    """Build a CDN URL for an image *path*.

    An unknown or missing *fmt* falls back to ``gif`` for animated hashes
    (``a_`` prefix) and *default_format* otherwise. A *size* that is not a
    power of two in ``[16, 4096]`` falls back to *default_size*.
    """
    if not fmt or fmt.lower() not in IMAGE_FORMATS:
        fmt = "gif" if "/a_" in path else default_format
    else:
        fmt = fmt.lower()
    if not size or not _is_valid_size(size):
        size = default_size
    return f"{cdn_url}{path}.{fmt}?size={size}"
