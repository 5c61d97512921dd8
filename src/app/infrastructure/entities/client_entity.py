from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.database.database import Base


class ClientEntity(Base):
    """SQLAlchemy model for Client table."""
    __tablename__ = "clients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    # Unique index backs up the service-level email check against concurrent writers
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)

    # Rows are removed by ON DELETE CASCADE, so the ORM never loads them on delete
    transactions: Mapped[list["TransactionEntity"]] = relationship(
        "TransactionEntity",
        back_populates="client",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
