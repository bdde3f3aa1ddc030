"""
Material Repository
"""
from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.material import Material
from app.repositories.base import BaseRepository


class MaterialRepository(BaseRepository[Material]):

    def __init__(self, db: Session):
        super().__init__(Material, db)

    def get_with_stock_issues(self) -> List[Material]:
        """Active materials that are out of stock or below their safety stock."""
        return (
            self.db.query(Material)
            .filter(
                Material.is_active.is_(True),
                or_(
                    Material.qty_on_hand <= 0,
                    Material.qty_on_hand < Material.safety_stock,
                ),
            )
            .order_by(Material.name)
            .all()
        )
