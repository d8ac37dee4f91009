"""Account repository - Database operations for accounts"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Account
from ...shared.repository import CRUDRepository


class AccountRepository(CRUDRepository[Account]):
    """Repository for account database operations"""

    model = Account
    entity_name = "Account"

    def get_by_username(self, db: Session, username: str) -> Optional[Account]:
        return db.query(Account).filter(Account.username == username).first()

    def get_by_email(self, db: Session, email: str) -> Optional[Account]:
        return db.query(Account).filter(Account.email == email).first()

    def get_by_login(
        self, db: Session, username: Optional[str], email: Optional[str]
    ) -> Optional[Account]:
        """Find an account by username or email, whichever was supplied"""
        criteria = []
        if username:
            criteria.append(Account.username == username.strip())
        if email:
            criteria.append(Account.email == email.strip().lower())
        return db.query(Account).filter(or_(*criteria)).first()
