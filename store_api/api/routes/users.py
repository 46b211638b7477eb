from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from typing import List
from store_api.core.database import get_db
from store_api.models.schemas import UserResponse, UserUpdate
from store_api.services.user_service import UserService

router = APIRouter()


def user_not_found(user_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"User with ID {user_id} not found.")


@router.get("", response_model=List[UserResponse])
async def get_users(db: Session = Depends(get_db)):
    """Get all users"""
    return await UserService(db).get_all_users()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: Session = Depends(get_db)):
    user = await UserService(db).get_user(user_id)
    if not user:
        raise user_not_found(user_id)
    return user


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: int, user_update: UserUpdate, db: Session = Depends(get_db)):
    user = await UserService(db).update_user(user_id, user_update)
    if not user:
        raise user_not_found(user_id)
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, db: Session = Depends(get_db)):
    """Delete a user and their orders"""
    if not await UserService(db).delete_user(user_id):
        raise user_not_found(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
