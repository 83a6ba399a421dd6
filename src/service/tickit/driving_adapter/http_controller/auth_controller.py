from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, status

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.tickit.app.command.login_user_use_case import LoginUserUseCase
from src.service.tickit.app.command.register_user_use_case import RegisterUserUseCase
from src.service.tickit.driving_adapter.http_controller.auth.jwt_auth import JwtAuth
from src.service.tickit.driving_adapter.http_controller.schema.user_schema import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)


router = APIRouter()


@router.post('/register', response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
@inject
async def register(
    request: RegisterRequest,
    use_case: RegisterUserUseCase = Depends(RegisterUserUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> TokenResponse:
    user_entity = await use_case.register(
        email=request.email,
        full_name=request.full_name,
        phone=request.phone,
        plain_password=request.password,
    )
    return TokenResponse(token=jwt_auth.create_jwt_token(user_entity))


@router.post('/login', response_model=TokenResponse)
@Logger.io
@inject
async def login(
    request: LoginRequest,
    use_case: LoginUserUseCase = Depends(LoginUserUseCase.depends),
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
) -> TokenResponse:
    user_entity = await use_case.login(email=request.email, plain_password=request.password)
    return TokenResponse(token=jwt_auth.create_jwt_token(user_entity))
