"""
Authentication Routes

POST /signup - Register new student account
POST /login  - Check credentials and return the session user
"""

from fastapi import APIRouter, Depends

from ats_portal.schemas.schemas import LoginRequest, LoginResponse, MessageResponse, SignupRequest
from ats_portal.services.user_service import UserService, get_user_service

router = APIRouter(tags=["Authentication"])


@router.post("/signup", response_model=MessageResponse, status_code=201)
async def signup(request: SignupRequest, users: UserService = Depends(get_user_service)):
    """
    Register a new student account.

    Nothing sensitive is echoed back; login afterwards to get the user view.
    """
    users.signup(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password=request.password
    )
    return MessageResponse(message="User created successfully")


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, users: UserService = Depends(get_user_service)):
    """
    Login and receive the public user view.

    The client stores the returned `user` object as its session.
    """
    user = users.login(request.email, request.password)
    return LoginResponse(message="Login successful", user=user)
