from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.orm import Session
from typing import List
from store_api.core.config import settings
from store_api.core.database import get_db
from store_api.models.schemas import PagedResult, ProductCreate, ProductResponse, ProductUpdate
from store_api.services.product_service import ProductService

router = APIRouter()


def product_not_found(product_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Product with ID {product_id} not found.")


def require_search_term(name: str) -> str:
    if not name.strip():
        raise HTTPException(status_code=400, detail="Search term cannot be empty.")
    return name


class PageParams:
    def __init__(
        self,
        page_number: int = Query(1, alias="pageNumber", ge=1),
        page_size: int = Query(settings.default_page_size, alias="pageSize", gt=0),
    ):
        self.page_number = page_number
        self.page_size = page_size


@router.get("", response_model=List[ProductResponse])
async def get_products(db: Session = Depends(get_db)):
    """Get all products"""
    return await ProductService(db).get_all_products()


@router.get("/paged", response_model=PagedResult[ProductResponse])
async def get_products_paged(page: PageParams = Depends(), db: Session = Depends(get_db)):
    """Get one page of products"""
    return await ProductService(db).get_products_page(page.page_number, page.page_size)


@router.get("/search", response_model=List[ProductResponse])
async def search_products(name: str = Query(""), db: Session = Depends(get_db)):
    """Search products by name (case-insensitive substring)"""
    return await ProductService(db).search_products(require_search_term(name))


@router.get("/search/paged", response_model=PagedResult[ProductResponse])
async def search_products_paged(
    name: str = Query(""),
    page: PageParams = Depends(),
    db: Session = Depends(get_db),
):
    """Search products by name, one page at a time"""
    return await ProductService(db).search_products_page(
        require_search_term(name), page.page_number, page.page_size
    )


@router.get("/category/{category_id}", response_model=List[ProductResponse])
async def get_products_by_category(category_id: int, db: Session = Depends(get_db)):
    """Get the products of one category"""
    return await ProductService(db).get_products_by_category(category_id)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int, db: Session = Depends(get_db)):
    """Get a specific product"""
    product = await ProductService(db).get_product(product_id)
    if not product:
        raise product_not_found(product_id)
    return product


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(product_data: ProductCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    """Create a new product"""
    product = await ProductService(db).create_product(product_data)
    response.headers["Location"] = str(request.url_for("get_product", product_id=product.id))
    return product


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(product_id: int, product_update: ProductUpdate, db: Session = Depends(get_db)):
    """Update a product; only the fields sent are changed"""
    product = await ProductService(db).update_product(product_id, product_update)
    if not product:
        raise product_not_found(product_id)
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(product_id: int, db: Session = Depends(get_db)):
    """Delete a product"""
    if not await ProductService(db).delete_product(product_id):
        raise product_not_found(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
