from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .models import User


@dataclass
class UserDTO:
    id: int
    username: str
    role: str
    created_at: Optional[datetime]


def user_to_dto(u: User) -> UserDTO:
    return UserDTO(
        id=u.id,
        username=u.username,
        role=u.role,
        created_at=getattr(u, "date_joined", None),
    )
