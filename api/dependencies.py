"""API Dependencies - Authentication"""
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from domain.auth import User
from infrastructure.security import decode_access_token
from api.schemas import TokenData

# Tokens are issued by the external identity provider
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")

async def get_current_user(token: str = Depends(oauth2_scheme)) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
        token_data = TokenData(**payload)
    except (JWTError, ValueError):
        raise credentials_exception

    if token_data.sub is None:
        raise credentials_exception
    return User(
        user_id=token_data.sub,
        username=token_data.username,
        email=token_data.email,
        disabled=bool(payload.get("disabled", False)),
    )

async def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    if current_user.disabled:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user
