from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session
from store_api.core.database import get_db
from store_api.models.schemas import LoginRequest, UserCreate, UserResponse
from store_api.services.user_service import UserService

router = APIRouter()


@router.post("/login", response_model=UserResponse)
async def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Verify an email/password pair and return the matching user"""
    if not credentials.email.strip() or not credentials.password.strip():
        raise HTTPException(status_code=400, detail="Email and password are required.")

    user = await UserService(db).authenticate(credentials.email, credentials.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid email or password.")
    return user


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    """Register a new user"""
    user = await UserService(db).create_user(user_data)
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return user
