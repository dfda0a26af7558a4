"""
FastAPI Router — Users • Orders • Schema
========================================

Purpose
-------
Defines the HTTP API for:
- Users: register, list, read, change email, delete (orders are deleted too)
- Orders: place, list per user, change status, per-user total
- Schema: the DDL generated for the models, for a chosen SQL dialect

Key Notes
---------
- Input validation via Pydantic models in `storefront.api.models`.
- Endpoints are plain `def` functions; FastAPI runs them in its threadpool,
  where the `@transactional` service functions open their own sessions.
- Domain errors are mapped to HTTP status codes:
    * `UserNotFoundError`, `OrderNotFoundError` → 404
    * `DuplicateUserError` → 409
    * `InvalidOrderError` → 422
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response
from fastapi.responses import PlainTextResponse

from storefront.api.models import (
    EmailUpdate,
    OrderCreate,
    OrderOut,
    StatusUpdate,
    UserCreate,
    UserOut,
    UserTotal,
)
from storefront.database.core.funcs import (
    change_email,
    get_user,
    list_orders,
    list_users,
    place_order,
    register_user,
    remove_user,
    set_order_status,
    user_total,
)
from storefront.database.exceptions import (
    DuplicateUserError,
    InvalidOrderError,
    OrderNotFoundError,
    UnsupportedDriverError,
    UserNotFoundError,
)
from storefront.database.helpers.ddl import render_create_ddl

router = APIRouter()
"""Creates the FastAPI router in which we define its routes"""


@router.post("/users", response_model=UserOut, status_code=201)
def create_user(data: UserCreate):
    """Register a new user. 409 if the user name or email is taken."""
    try:
        return register_user(username=data.username, email=data.email, full_name=data.full_name)
    except DuplicateUserError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/users", response_model=List[UserOut])
def read_users(limit: Optional[int] = Query(None, ge=0), offset: Optional[int] = Query(None, ge=0)):
    """List users ordered by user name."""
    return list_users(limit=limit, offset=offset)


@router.get("/users/{username}", response_model=UserOut)
def read_user(username: str):
    try:
        return get_user(username=username)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/users/{username}", response_model=UserOut)
def update_user_email(username: str, data: EmailUpdate):
    """Change the email of a user. 404 if missing, 409 if the email is taken."""
    try:
        return change_email(username=username, email=data.email)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateUserError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/users/{username}", status_code=204)
def delete_user(username: str):
    """Delete a user and all of their orders."""
    try:
        remove_user(username=username)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.post("/users/{username}/orders", response_model=OrderOut, status_code=201)
def create_order(username: str, data: OrderCreate):
    """Place an order for a user."""
    try:
        return place_order(
            username=username,
            product_name=data.product_name,
            quantity=data.quantity,
            unit_price=data.unit_price,
        )
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidOrderError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/users/{username}/orders", response_model=List[OrderOut])
def read_orders(username: str):
    """Orders of a user, most recent first."""
    try:
        return list_orders(username=username)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/users/{username}/total", response_model=UserTotal)
def read_user_total(username: str):
    try:
        return UserTotal(username=username, total=user_total(username=username))
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/orders/{order_id}", response_model=OrderOut)
def update_order_status(order_id: UUID, data: StatusUpdate):
    """Move an order to another status. Cancelled orders are final."""
    try:
        return set_order_status(order_id=order_id, status=data.status)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidOrderError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/schema", response_class=PlainTextResponse)
def read_schema(dialect: str = "postgresql"):
    """The CREATE statements generated for the models on `dialect`."""
    try:
        return render_create_ddl(dialect)
    except UnsupportedDriverError as e:
        raise HTTPException(status_code=400, detail=str(e))
