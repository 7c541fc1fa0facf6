from pydantic import BaseModel, EmailStr

class UserBase(BaseModel):
    name: str
    email: EmailStr

class UserCreate(UserBase):
    password: str

class LoginRequest(BaseModel):
    # unknown or malformed emails both end in 401 "User not found"
    email: str
    password: str

class User(UserBase):
    id: str
    
    class Config:
        from_attributes = True

class AuthResponse(BaseModel):
    user: User
    token: str
