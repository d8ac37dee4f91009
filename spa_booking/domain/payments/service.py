"""Payment business logic"""

import logging

from sqlalchemy.orm import Session

from ...auth import Identity
from ...enums import RoleEnum
from ...errors import BadRequestError, ForbiddenError, NotFoundError
from ...models import Account, Appointment, PaymentMethod, Transaction
from ...shared.repository import ensure_exists
from .repository import PaymentMethodRepository, TransactionRepository
from .schemas import (
    PaymentMethodCreate,
    PaymentMethodUpdate,
    TransactionCreate,
    TransactionUpdate,
)

logger = logging.getLogger(__name__)

STAFF_ROLES = {RoleEnum.STAFF, RoleEnum.ADMIN}


class PaymentMethodService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = PaymentMethodRepository()

    def list_payment_methods(self) -> list[PaymentMethod]:
        methods = self.repo.list_all(self.db)
        if not methods:
            raise NotFoundError("No payment methods found")
        return methods

    def get_payment_method(self, method_id: str) -> PaymentMethod:
        method = self.repo.get(self.db, method_id)
        if not method:
            raise NotFoundError("Payment method not found")
        return method

    def create_payment_method(self, data: PaymentMethodCreate) -> PaymentMethod:
        method = self.repo.create(self.db, **data.model_dump())
        logger.info(f"🆕 Payment method created: {method.method}")
        return method

    def update_payment_method(self, method_id: str, data: PaymentMethodUpdate) -> PaymentMethod:
        method = self.get_payment_method(method_id)
        return self.repo.update(self.db, method, **data.model_dump(exclude_unset=True))

    def delete_payment_method(self, method_id: str) -> dict:
        method = self.get_payment_method(method_id)
        self.repo.delete(self.db, method)
        logger.info(f"🗑️ Payment method {method_id} deleted")
        return {"message": "Payment method deleted successfully"}


class TransactionService:
    """
    Records payments against appointments.

    Customers see and create only their own transactions; staff and admins
    see everything and are the only ones allowed to change or remove them.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = TransactionRepository()

    def _check_visible(self, customer_id: str, identity: Identity) -> None:
        if identity.role not in STAFF_ROLES and customer_id != identity.account_id:
            raise ForbiddenError("You can only access your own transactions")

    def list_transactions(self, identity: Identity) -> list[Transaction]:
        if identity.role in STAFF_ROLES:
            transactions = self.repo.list_all(self.db)
        else:
            transactions = self.repo.list_by_customer(self.db, identity.account_id)
        if not transactions:
            raise NotFoundError("No transactions found")
        return transactions

    def get_transaction(self, transaction_id: str) -> Transaction:
        transaction = self.repo.get(self.db, transaction_id)
        if not transaction:
            raise NotFoundError("Transaction not found")
        return transaction

    def get_visible_transaction(self, transaction_id: str, identity: Identity) -> Transaction:
        transaction = self.get_transaction(transaction_id)
        self._check_visible(transaction.customer_id, identity)
        return transaction

    def _check_references(self, customer_id, appointment_id, payment_method_id) -> None:
        ensure_exists(self.db, Account, customer_id, "Customer")
        appointment = ensure_exists(self.db, Appointment, appointment_id, "Appointment")
        method = ensure_exists(self.db, PaymentMethod, payment_method_id, "Payment method")
        if method is not None and not method.is_active:
            raise BadRequestError("Payment method is not active")
        if appointment is not None and customer_id and appointment.customer_id != customer_id:
            raise BadRequestError("Appointment does not belong to this customer")

    def create_transaction(self, data: TransactionCreate, identity: Identity) -> Transaction:
        self._check_visible(data.customer_id, identity)
        self._check_references(data.customer_id, data.appointment_id, data.payment_method_id)

        transaction = self.repo.create(self.db, **data.model_dump())
        logger.info(
            f"💳 Transaction {transaction.id} recorded for appointment {data.appointment_id} "
            f"({transaction.status.value})"
        )
        return transaction

    def update_transaction(self, transaction_id: str, data: TransactionUpdate) -> Transaction:
        transaction = self.get_transaction(transaction_id)
        self._check_references(
            data.customer_id or transaction.customer_id,
            data.appointment_id,
            data.payment_method_id,
        )
        transaction = self.repo.update(self.db, transaction, **data.model_dump(exclude_unset=True))
        logger.info(f"✏️ Transaction {transaction.id} updated ({transaction.status.value})")
        return transaction

    def delete_transaction(self, transaction_id: str) -> dict:
        transaction = self.get_transaction(transaction_id)
        self.repo.delete(self.db, transaction)
        logger.info(f"🗑️ Transaction {transaction_id} deleted")
        return {"message": "Transaction deleted successfully"}
