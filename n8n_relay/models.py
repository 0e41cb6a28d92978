from typing import Optional
from pydantic import BaseModel


# Fields stay optional so a missing value is reported by the relay itself
# with its own message instead of a generic body validation error.
class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class SignupRequest(BaseModel):
    email: Optional[str] = None
    role: Optional[str] = None
