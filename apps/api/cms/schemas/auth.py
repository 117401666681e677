from pydantic import BaseModel, EmailStr

from cms.schemas.user import UserOut

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut

class ConsoleLoginOut(BaseModel):
    redirect_to: str
    user: UserOut
