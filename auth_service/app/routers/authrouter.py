from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from shared.core import auth
from shared.core.database import get_db
from shared.core.schemas import JsonOutResult, UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..schemas import authchemas, userschema
from ..services.authservices import AuthService

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post("/register", response_model=JsonOutResult, status_code=status.HTTP_201_CREATED)
def register(
        request: userschema.UserCreate,
        service: AuthService = Depends(get_auth_service)):
    result = service.register(request.name, request.email, request.password)
    return success_response(
        authchemas.AuthenticationResponse(**result),
        message="User registered successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY
    )


@router.post("/login", response_model=JsonOutResult)
def login(
        request: authchemas.LoginRequest,
        service: AuthService = Depends(get_auth_service)):
    result = service.login(request.email, request.password)
    return success_response(
        authchemas.AuthenticationResponse(**result),
        message="Login successful"
    )


@router.get("/me", response_model=JsonOutResult)
def me(
        service: AuthService = Depends(get_auth_service),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return success_response(service.get_user_by_id(current_user.user_id))


# tokens are stateless, the client just discards it
@router.post("/logout", response_model=JsonOutResult)
def logout(current_user: UserToken = Depends(auth.validate_current_token)):
    return success_response({}, message="Logged out successfully")
