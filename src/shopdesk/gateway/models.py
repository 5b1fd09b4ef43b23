"""SQLAlchemy models for the shopdesk store.

Column names follow the hosted store's camelCase layout so that a wire
record maps one-to-one onto a row.
"""

from sqlalchemy import (
    JSON,
    Column,
    Date,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Subscription(Base):
    """Subscription license model."""

    __tablename__ = "subscriptions"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    activation_date = Column("activationDate", Date, nullable=False)
    expiration_date = Column("expirationDate", Date, nullable=False)
    notes = Column(String, nullable=False, default="")
    category = Column(String, nullable=False, default="General")


class Transaction(Base):
    """Expense or income model."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    type = Column(String, nullable=False)
    person = Column(String, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    date = Column(Date, nullable=False)


class Customer(Base):
    """Customer model with purchases embedded as a JSON list."""

    __tablename__ = "customers"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    username = Column(String, nullable=False, default="")
    purchases = Column(JSON, nullable=False, default=list)
    notes = Column(String, nullable=False, default="")


class Product(Base):
    """Product model."""

    __tablename__ = "products"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    cost_price = Column("costPrice", Numeric(12, 2), nullable=False)
    selling_price = Column("sellingPrice", Numeric(12, 2), nullable=False)
    supplier = Column(String, nullable=False, default="")
    notes = Column(String, nullable=False, default="")


class Sale(Base):
    """Sale record model."""

    __tablename__ = "sales"

    id = Column(String, primary_key=True)
    customer_name = Column("customerName", String, nullable=False)
    customer_username = Column("customerUsername", String, nullable=False, default="")
    date = Column(Date, nullable=False)
    product_name = Column("productName", String, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    notes = Column(String, nullable=False, default="")


MODELS_BY_COLLECTION = {
    "subscriptions": Subscription,
    "transactions": Transaction,
    "customers": Customer,
    "products": Product,
    "sales": Sale,
}


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
