"""
Orders API Endpoints
Places orders and reads them back
"""
import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from orders_service.core.database import get_transaction
from orders_service.core.exceptions import OrderCreationError, OrderPersistenceError
from orders_service.domain.order import OrderCreate
from orders_service.repositories.base import OrderStore
from orders_service.repositories.customer_repository import CustomerRepository
from orders_service.repositories.order_repository import OrderRepository
from orders_service.repositories.product_repository import ProductRepository
from orders_service.services.order_service import CreateOrderService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_order_service(conn=Depends(get_transaction)) -> CreateOrderService:
    """
    Build the order service on one transactional connection

    Product rows are locked for the rest of the transaction once read.
    """
    return CreateOrderService(
        customers=CustomerRepository(conn),
        products=ProductRepository(conn, lock_rows=True),
        orders=OrderRepository(conn)
    )


def get_order_store() -> OrderStore:
    """Order store for read-only endpoints"""
    return OrderRepository()


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    service: CreateOrderService = Depends(get_order_service),
    conn=Depends(get_transaction)
):
    """
    Create an order for a customer

    Body:
        customer_id: Customer placing the order
        products: List of {id, quantity}

    Returns the created order with captured prices. The transaction is
    committed here, before the response is sent.
    """
    try:
        order = service.execute(payload.customer_id, payload.products)
    except OrderCreationError as e:
        logger.info(f"Order creation failed ({e.kind}): {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())

    try:
        conn.commit()
    except Exception as e:
        logger.error(f"Error committing order {order.id}: {e}")
        error = OrderPersistenceError(f"Could not commit order: {e}")
        raise HTTPException(status_code=error.status_code, detail=error.to_dict())

    return {
        "status": "success",
        "data": order.to_dict()
    }


@router.get("/{order_id}")
def get_order(order_id: UUID, orders: OrderStore = Depends(get_order_store)):
    """
    Get one order with its customer and line items
    """
    try:
        order = orders.find_by_id(order_id)
    except Exception as e:
        logger.error(f"Error fetching order {order_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Error fetching order: {str(e)}")

    if order is None:
        raise HTTPException(status_code=404, detail=f"Order {order_id} not found")

    return {
        "status": "success",
        "data": order.to_dict()
    }
