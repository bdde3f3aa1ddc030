"""
Contact Repository
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.contact import Contact
from app.repositories.base import BaseRepository


class ContactRepository(BaseRepository[Contact]):

    def __init__(self, db: Session):
        super().__init__(Contact, db)

    def list_active_tailors(self) -> List[Contact]:
        return (
            self.db.query(Contact)
            .filter(Contact.type == "tailor", Contact.is_active.is_(True))
            .order_by(Contact.name.asc())
            .all()
        )

    def get_active_tailor(self, contact_id: int) -> Optional[Contact]:
        return (
            self.db.query(Contact)
            .filter(
                Contact.id == contact_id,
                Contact.type == "tailor",
                Contact.is_active.is_(True),
            )
            .first()
        )
