# backend/app/db/models/seller_model.py
"""
Se encarga de definir el modelo de vendedora para la aplicación.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.database import Base

class Seller(Base):
    """
    Vendedora de campo que recibe maletas en consignación.
    El teléfono se guarda tal cual; la normalización a dígitos ocurre solo al componer mensajes.
    """
    __tablename__ = "sellers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    phone = Column(String(50), nullable=False)
    commission_rate = Column(Float, nullable=False, default=0.3)  # Fracción entre 0 y 1
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Sin cascada: una vendedora con maletas no puede eliminarse
    cases = relationship("Case", back_populates="seller")

    def __repr__(self):
        return f"<Seller(id={self.id}, name='{self.name}', rate={self.commission_rate})>"
