from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from imagehoster.api.deps import ACCESS_COOKIE_NAME, get_db
from imagehoster.core.config import settings
from imagehoster.core.errors import PasswordPolicyViolation, TransactionFailure, UsernameTaken
from imagehoster.core.security import Identity, create_access_token
from imagehoster.models.user import User
from imagehoster.schema.auth import TokenRead
from imagehoster.schema.user import UserCreate, UserLogin, UserRead
from imagehoster.services import gallery_service

router = APIRouter()


def set_auth_cookie(response: Response, access_token: str) -> None:
    secure = settings.environment.lower() == "production"
    response.set_cookie(
        ACCESS_COOKIE_NAME,
        access_token,
        max_age=settings.access_token_expires_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=secure,
        path="/",
    )


def _token_response(response: Response, user: User) -> TokenRead:
    access = create_access_token(Identity(user_id=user.id, username=user.username))
    set_auth_cookie(response, access)
    return TokenRead(access_token=access, user=UserRead.model_validate(user))


@router.post("/register", response_model=TokenRead)
async def register(payload: UserCreate, response: Response, session: AsyncSession = Depends(get_db)) -> TokenRead:
    try:
        user = await gallery_service.register_user(session, payload)
    except PasswordPolicyViolation as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": exc.message, "username": exc.username},
        ) from exc
    except UsernameTaken as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except TransactionFailure as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return _token_response(response, user)


@router.post("/login", response_model=TokenRead)
async def login(payload: UserLogin, response: Response, session: AsyncSession = Depends(get_db)) -> TokenRead:
    user = await gallery_service.login(session, payload.username, payload.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return _token_response(response, user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response) -> Response:
    secure = settings.environment.lower() == "production"
    directives = ["Path=/", "HttpOnly", "SameSite=Lax"]
    if secure:
        directives.append("Secure")
    header_value = f"{ACCESS_COOKIE_NAME}=; {'; '.join(directives)}"
    response.raw_headers.append((b"set-cookie", header_value.encode("latin-1")))
    response.status_code = status.HTTP_204_NO_CONTENT
    return response
