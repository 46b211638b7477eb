from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session
from typing import List
from store_api.core.database import get_db
from store_api.models.schemas import OrderCreate, OrderResponse, OrderUpdate
from store_api.services.order_service import OrderService

router = APIRouter()


def order_not_found(order_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Order with ID {order_id} not found.")


@router.get("", response_model=List[OrderResponse])
async def get_orders(db: Session = Depends(get_db)):
    """Get all orders"""
    return await OrderService(db).get_all_orders()


@router.get("/user/{user_id}", response_model=List[OrderResponse])
async def get_orders_by_user(user_id: int, db: Session = Depends(get_db)):
    """Get the orders placed by one user"""
    return await OrderService(db).get_orders_by_user(user_id)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: int, db: Session = Depends(get_db)):
    """Get a specific order"""
    order = await OrderService(db).get_order(order_id)
    if not order:
        raise order_not_found(order_id)
    return order


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(order_data: OrderCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    """Place an order; stock for every line item is reserved atomically"""
    order = await OrderService(db).create_order(order_data)
    response.headers["Location"] = str(request.url_for("get_order", order_id=order.id))
    return order


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(order_id: int, order_update: OrderUpdate, db: Session = Depends(get_db)):
    """Change the shipping address and/or status of an order"""
    order = await OrderService(db).update_order(order_id, order_update)
    if not order:
        raise order_not_found(order_id)
    return order


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(order_id: int, db: Session = Depends(get_db)):
    """Delete an order and its line items"""
    if not await OrderService(db).delete_order(order_id):
        raise order_not_found(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
