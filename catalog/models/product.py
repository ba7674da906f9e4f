from sqlalchemy import Boolean, Column, Date, Float, Integer, String

from catalog.database import Base


class ProductRecord(Base):
    """
    Row of the `products` table used by the relational store.

    Attributes:
        id: Auto-increment identifier assigned by the database
        name: Product name
        quantity: Units in stock
        code_value: Caller supplied product code (uniqueness is checked
            by the repository, not by a constraint)
        is_published: Whether the product can be bought
        expiration: Expiration date
        price: Unit price
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    code_value = Column(String(255), nullable=False)
    is_published = Column(Boolean, nullable=False, default=False)
    expiration = Column(Date, nullable=False)
    price = Column(Float, nullable=False)

    def __repr__(self):
        return f"<ProductRecord(id={self.id}, code_value='{self.code_value}', quantity={self.quantity})>"
