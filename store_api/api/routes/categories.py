from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session
from typing import List
from store_api.core.database import get_db
from store_api.models.schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from store_api.services.category_service import CategoryService

router = APIRouter()


def category_not_found(category_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Category with ID {category_id} not found.")


@router.get("", response_model=List[CategoryResponse])
async def get_categories(db: Session = Depends(get_db)):
    """Get all categories with their product counts"""
    return await CategoryService(db).get_all_categories()


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: int, db: Session = Depends(get_db)):
    category = await CategoryService(db).get_category(category_id)
    if not category:
        raise category_not_found(category_id)
    return category


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(category_data: CategoryCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    category = await CategoryService(db).create_category(category_data)
    response.headers["Location"] = str(request.url_for("get_category", category_id=category.id))
    return category


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(category_id: int, category_update: CategoryUpdate, db: Session = Depends(get_db)):
    category = await CategoryService(db).update_category(category_id, category_update)
    if not category:
        raise category_not_found(category_id)
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int, db: Session = Depends(get_db)):
    if not await CategoryService(db).delete_category(category_id):
        raise category_not_found(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
