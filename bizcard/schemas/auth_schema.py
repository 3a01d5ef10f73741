from pydantic import BaseModel, Field


class Credentials(BaseModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=256)


class UserOut(BaseModel):
    user_id: str
    email: str
