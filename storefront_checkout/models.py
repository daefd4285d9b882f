from sqlalchemy import (
    Column,
    String,
    JSON,
    DateTime,
    func,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class SettingsDocument(Base):
    """
    Merchant configuration stored as one JSON document per key.

    Mirrors the storefront's document store: the shipping settings live under
    the "shipping" key and are read and replaced as a whole.
    """
    __tablename__ = "settings_documents"

    key = Column(String, primary_key=True)  # e.g., "shipping"
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=True)
