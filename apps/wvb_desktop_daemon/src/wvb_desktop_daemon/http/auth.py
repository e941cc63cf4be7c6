import secrets

from fastapi import HTTPException, Request, status


async def require_auth(request: Request) -> None:
    expected = f"Bearer {request.app.state.ctx.auth_token}"
    header = request.headers.get("Authorization", "")
    if not secrets.compare_digest(header.encode(), expected.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
