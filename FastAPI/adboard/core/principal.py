from dataclasses import dataclass
from enum import Enum


class ViewerKind(str, Enum):
    ANONYMOUS = "anonymous"
    MEMBER = "member"
    ADMIN = "admin"


@dataclass(frozen=True, slots=True)
class Actor:
    """Authenticated identity performing a mutation."""

    id: str
    is_admin: bool = False


@dataclass(frozen=True, slots=True)
class Viewer:
    """Who is reading. One value covers anonymous visitors, members and admins."""

    kind: ViewerKind
    user_id: str | None = None

    @classmethod
    def anonymous(cls) -> "Viewer":
        return cls(kind=ViewerKind.ANONYMOUS)

    @classmethod
    def for_actor(cls, actor: Actor | None) -> "Viewer":
        if actor is None:
            return cls.anonymous()
        kind = ViewerKind.ADMIN if actor.is_admin else ViewerKind.MEMBER
        return cls(kind=kind, user_id=actor.id)

    @property
    def is_admin(self) -> bool:
        return self.kind is ViewerKind.ADMIN

    @property
    def is_authenticated(self) -> bool:
        return self.kind is not ViewerKind.ANONYMOUS
