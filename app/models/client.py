"""
Client, SKU and Evidence models.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.utils.datetime_utils import utc_now_naive


class Client(Base):
    """Client model - created through get-or-create keyed on code"""
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    code = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=utc_now_naive, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utc_now_naive, onupdate=utc_now_naive, server_default=func.now(), nullable=False)

    # Relationships
    skus = relationship("Sku", back_populates="client", cascade="all, delete-orphan", passive_deletes=True)
    evidence = relationship("Evidence", back_populates="client", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Client(id={self.id}, code='{self.code}')>"


class Sku(Base):
    """SKU model - a client's main SKUs (up to 10, enforced by the UI)"""
    __tablename__ = "skus"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    code = Column(String(100), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    order = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=utc_now_naive, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=utc_now_naive, onupdate=utc_now_naive, server_default=func.now(), nullable=False)

    client = relationship("Client", back_populates="skus")

    def __repr__(self):
        return f"<Sku(id={self.id}, client_id={self.client_id}, code='{self.code}')>"


class Evidence(Base):
    """Evidence model - metadata of a photo or file attached to a client"""
    __tablename__ = "evidence"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    file_url = Column(Text, nullable=False)
    file_name = Column(String(255), nullable=False)
    file_type = Column(String(50), nullable=False)
    file_size = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    uploaded_at = Column(DateTime, default=utc_now_naive, server_default=func.now(), nullable=False, index=True)

    client = relationship("Client", back_populates="evidence")

    def __repr__(self):
        return f"<Evidence(id={self.id}, client_id={self.client_id}, file_name='{self.file_name}')>"
