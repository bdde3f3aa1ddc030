"""
Product Repository
"""
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from app.models.product import Product
from app.repositories.base import BaseRepository


class ProductRepository(BaseRepository[Product]):

    def __init__(self, db: Session):
        super().__init__(Product, db)

    def get_material_id(self, product_id: int) -> Optional[int]:
        return (
            self.db.query(Product.material_id)
            .filter(Product.id == product_id)
            .scalar()
        )

    def get_active_by_ids(self, product_ids: Iterable[int]) -> List[Product]:
        ids = set(product_ids)
        if not ids:
            return []
        return (
            self.db.query(Product)
            .filter(Product.id.in_(ids), Product.is_active.is_(True))
            .all()
        )
