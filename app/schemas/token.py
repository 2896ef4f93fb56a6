from pydantic import BaseModel
from typing import Optional
from app.core.constants import ADMIN_ROLE

class TokenPayload(BaseModel):
    sub: str
    role: Optional[str] = None
    exp: Optional[int] = None

class CurrentUser(BaseModel):
    """The authenticated caller. user_id is the account email."""
    user_id: str
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE
