from pydantic import BaseModel, EmailStr
from typing import Optional

# Registration request; presence of name/email/password is checked by the handler
class UserCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    phone: Optional[str] = None

# Schema for user authentication credentials
class UserLogin(BaseModel):
    email: EmailStr
    password: str

# Public view of a user account (never includes the password hash)
class UserResponse(BaseModel):
    id: int
    name: str
    email: EmailStr
    phone: Optional[str] = None
    is_admin: bool = False

    class Config:
        from_attributes = True

class RegisterResponse(BaseModel):
    message: str
    userId: int
    user: UserResponse

class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserResponse
