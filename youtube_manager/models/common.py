from pydantic import BaseModel


class AuthStatus(BaseModel):
    authenticated: bool
    token_file: str
    message: str
