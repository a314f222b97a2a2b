# backend/app/db/models/case_model.py
"""
Este archivo contiene los modelos de maleta (Case) y de sus items para la aplicación.
"""

import enum

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.database import Base


class CaseStatus(str, enum.Enum):
    """Estados posibles de una maleta."""
    AVAILABLE = "Available"
    IN_FIELD = "InField"
    FINALIZED = "Finalized"


class Case(Base):
    __tablename__ = "cases"

    id = Column(Integer, primary_key=True, autoincrement=True)
    seller_id = Column(Integer, ForeignKey("sellers.id"), nullable=True, index=True)
    status = Column(String(20), nullable=False, default=CaseStatus.AVAILABLE.value, index=True)
    photo = Column(Text, nullable=True)  # Data URI o URL externa de la primera foto
    # Importes calculados por quien llama y persistidos tal cual
    total_gross = Column(Float, nullable=False, default=0)
    commission_value = Column(Float, nullable=False, default=0)
    estimated_profit = Column(Float, nullable=False, default=0)
    delivery_date = Column(DateTime(timezone=True), nullable=True)
    return_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    seller = relationship("Seller", back_populates="cases")
    # passive_deletes deja el borrado de items a ON DELETE CASCADE de la base de datos
    items = relationship(
        "CaseItem",
        back_populates="case",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CaseItem.id",
    )

    def __repr__(self):
        return f"<Case(id={self.id}, seller_id={self.seller_id}, status='{self.status}')>"


class CaseItem(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    case_id = Column(Integer, ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=True)  # NULL = identificado pero sin precio

    case = relationship("Case", back_populates="items")

    def __repr__(self):
        return f"<CaseItem(id={self.id}, case_id={self.case_id}, price={self.price})>"
