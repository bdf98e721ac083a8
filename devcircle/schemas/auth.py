from pydantic import BaseModel, EmailStr, Field

class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=1)

class SocialRegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class EmailRequest(BaseModel):
    email: EmailStr

class MessageResponse(BaseModel):
    message: str
