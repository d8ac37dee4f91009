"""Payment repositories"""

from sqlalchemy.orm import Session, joinedload

from ...models import PaymentMethod, Transaction
from ...shared.repository import CRUDRepository


class PaymentMethodRepository(CRUDRepository[PaymentMethod]):
    model = PaymentMethod
    entity_name = "Payment method"


class TransactionRepository(CRUDRepository[Transaction]):
    model = Transaction
    entity_name = "Transaction"

    def populate_options(self) -> list:
        return [joinedload(Transaction.payment_method)]

    def list_by_customer(self, db: Session, customer_id: str) -> list[Transaction]:
        return self.list_all(db, Transaction.customer_id == customer_id)
