import re

import jwt
from fastapi import HTTPException, Request, status

from bustrips.auth.utils import decode_access_token

_BEARER = re.compile(r"^Bearer$", re.IGNORECASE)

def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

def get_current_user_id(request: Request) -> str:
    """Validate the bearer token and expose its subject on ``request.state.user_id``"""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise _unauthorized("No token provided")
    
    parts = auth_header.split(" ")
    if len(parts) != 2:
        raise _unauthorized("Token error")
    
    scheme, token = parts
    if not _BEARER.match(scheme):
        raise _unauthorized("Token malformatted")
    
    settings = request.app.state.settings
    try:
        payload = decode_access_token(token, settings.SECRET_KEY, settings.ALGORITHM)
    except jwt.PyJWTError:
        raise _unauthorized("Token invalid")
    
    user_id = payload.get("id")
    if not user_id:
        raise _unauthorized("Token invalid")
    
    request.state.user_id = user_id
    return user_id
