"""Payment method and transaction routers"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import Identity, get_current_identity, require_staff
from ...database import get_db
from ...shared.schemas import MessageResponse
from .schemas import (
    PaymentMethodCreate,
    PaymentMethodResponse,
    PaymentMethodUpdate,
    TransactionCreate,
    TransactionResponse,
    TransactionUpdate,
)
from .service import PaymentMethodService, TransactionService

payment_method_router = APIRouter(prefix="/payment-method", tags=["Payment Methods"])
transaction_router = APIRouter(prefix="/transaction", tags=["Transactions"])


def get_payment_method_service(db: Session = Depends(get_db)) -> PaymentMethodService:
    """Dependency injection for PaymentMethodService"""
    return PaymentMethodService(db)


def get_transaction_service(db: Session = Depends(get_db)) -> TransactionService:
    """Dependency injection for TransactionService"""
    return TransactionService(db)


# ============================================================================
# PAYMENT METHODS
# ============================================================================


@payment_method_router.get("", response_model=list[PaymentMethodResponse])
async def get_all_payment_methods(
    service: PaymentMethodService = Depends(get_payment_method_service),
):
    return [PaymentMethodResponse.model_validate(m) for m in service.list_payment_methods()]


@payment_method_router.post("", response_model=PaymentMethodResponse, status_code=201)
async def create_payment_method(
    data: PaymentMethodCreate,
    _staff: Identity = Depends(require_staff),
    service: PaymentMethodService = Depends(get_payment_method_service),
):
    return PaymentMethodResponse.model_validate(service.create_payment_method(data))


@payment_method_router.get("/{method_id}", response_model=PaymentMethodResponse)
async def get_payment_method(
    method_id: str, service: PaymentMethodService = Depends(get_payment_method_service)
):
    return PaymentMethodResponse.model_validate(service.get_payment_method(method_id))


@payment_method_router.put("/{method_id}", response_model=PaymentMethodResponse)
async def update_payment_method(
    method_id: str,
    data: PaymentMethodUpdate,
    _staff: Identity = Depends(require_staff),
    service: PaymentMethodService = Depends(get_payment_method_service),
):
    return PaymentMethodResponse.model_validate(service.update_payment_method(method_id, data))


@payment_method_router.delete("/{method_id}", response_model=MessageResponse)
async def delete_payment_method(
    method_id: str,
    _staff: Identity = Depends(require_staff),
    service: PaymentMethodService = Depends(get_payment_method_service),
):
    return service.delete_payment_method(method_id)


# ============================================================================
# TRANSACTIONS
# ============================================================================


@transaction_router.get("", response_model=list[TransactionResponse])
async def get_all_transactions(
    identity: Identity = Depends(get_current_identity),
    service: TransactionService = Depends(get_transaction_service),
):
    """Staff see every transaction, customers only their own"""
    return [TransactionResponse.model_validate(t) for t in service.list_transactions(identity)]


@transaction_router.post("", response_model=TransactionResponse, status_code=201)
async def create_transaction(
    data: TransactionCreate,
    identity: Identity = Depends(get_current_identity),
    service: TransactionService = Depends(get_transaction_service),
):
    return TransactionResponse.model_validate(service.create_transaction(data, identity))


@transaction_router.get("/{transaction_id}", response_model=TransactionResponse)
async def get_transaction(
    transaction_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TransactionService = Depends(get_transaction_service),
):
    return TransactionResponse.model_validate(
        service.get_visible_transaction(transaction_id, identity)
    )


@transaction_router.put("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: str,
    data: TransactionUpdate,
    _staff: Identity = Depends(require_staff),
    service: TransactionService = Depends(get_transaction_service),
):
    return TransactionResponse.model_validate(service.update_transaction(transaction_id, data))


@transaction_router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
    transaction_id: str,
    _staff: Identity = Depends(require_staff),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.delete_transaction(transaction_id)
