"""User model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydisco._constants import DEFAULT_USER_AVATAR, USER_AVATAR
from pydisco.models._base import Base, parse_snowflake
from pydisco.state.merge import FieldSpec

if TYPE_CHECKING:
    from pydisco.client import DiscoClient


class User(Base):
    """A user as seen by the client (creators, event subscribers)."""

    _FIELDS = (
        FieldSpec("username", "username"),
        FieldSpec("discriminator", "discriminator"),
        FieldSpec("global_name", "global_name", nullable=True),
        FieldSpec("avatar", "avatar", nullable=True),
        FieldSpec("bot", "bot", bool),
        FieldSpec("system", "system", bool),
    )

    username: str | None = None
    discriminator: str | None = None
    global_name: str | None = None
    avatar: str | None = None
    bot: bool = False
    system: bool = False

    def __init__(self, data: Mapping[str, Any], client: DiscoClient) -> None:
        super().__init__(data.get("id"))
        self._client = client
        self.update(data)

    @classmethod
    def from_payload(cls, data: Mapping[str, Any], client: DiscoClient) -> User:
        """Merge *data* into the cached user, or build an uncached one."""
        cached = client.users.get(str(data.get("id")))
        if cached is not None:
            cached.update(data)
            return cached
        return cls(data, client)

    @property
    def mention(self) -> str:
        return f"<@{self.id}>"

    @property
    def default_avatar_url(self) -> str:
        """URL of the built-in avatar shown when no custom one is set."""
        if self.discriminator in (None, "0", "0000"):
            index = (parse_snowflake(self.id) >> 22) % 6
        else:
            index = int(self.discriminator) % 5
        return self._client.format_image(DEFAULT_USER_AVATAR.format(index=index), "png")

    @property
    def avatar_url(self) -> str:
        return self.dynamic_avatar_url()

    def dynamic_avatar_url(self, fmt: str | None = None, size: int | None = None) -> str:
        """Avatar URL in the requested format/size, falling back to the default avatar."""
        if not self.avatar:
            return self.default_avatar_url
        return self._client.format_image(USER_AVATAR.format(user_id=self.id, avatar=self.avatar), fmt, size)
