"""Auth endpoints: register and login."""

from fastapi import APIRouter, Depends, HTTPException, status

from factory import ServiceFactory
from domain.exceptions import AuthenticationError, DuplicateLoginError, RepositoryError
from application.dto import RegisterRequest, LoginRequest, AuthToken
from adapters.rest.dependencies import get_factory
from adapters.rest.schemas import RegisterBody, LoginBody, TokenResponse, ErrorDetail

router = APIRouter(prefix="/user", tags=["auth"])


def _persistence_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=ErrorDetail(
            code="persistence_error",
            message="Could not access the account store.",
        ).model_dump(exclude_none=True),
    )


def _token_response(token: AuthToken) -> TokenResponse:
    return TokenResponse(
        access_token=token.access_token,
        token_type=token.token_type,
        user_id=token.user_id,
        nickname=token.nickname,
    )


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    body: RegisterBody,
    factory: ServiceFactory = Depends(get_factory),
):
    auth_service = factory.create_authentication_service()
    try:
        token = await auth_service.register(RegisterRequest(
            nickname=body.nickname,
            password=body.password,
        ))
    except DuplicateLoginError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc),
        )
    except RepositoryError:
        raise _persistence_error()
    return _token_response(token)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginBody,
    factory: ServiceFactory = Depends(get_factory),
):
    auth_service = factory.create_authentication_service()
    try:
        token = await auth_service.login(LoginRequest(
            nickname=body.nickname,
            password=body.password,
        ))
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        )
    except RepositoryError:
        raise _persistence_error()
    return _token_response(token)
