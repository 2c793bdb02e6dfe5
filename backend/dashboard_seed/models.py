import uuid
from datetime import date
from enum import Enum

from sqlalchemy import Text
from sqlmodel import SQLModel, Field


class InvoiceStatusEnum(str, Enum):
    pending = "pending"
    paid = "paid"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, sa_type=Text)
    password: str = Field(sa_type=Text)  # hash bcrypt, nunca el texto plano


class Customer(SQLModel, table=True):
    __tablename__ = "customers"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(max_length=255)
    image_url: str = Field(max_length=255)


class Invoice(SQLModel, table=True):
    __tablename__ = "invoices"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    # Referencia a customers.id sin restricción FK; la consistencia se valida al sembrar
    customer_id: uuid.UUID
    amount: int  # centavos
    status: str = Field(max_length=255)
    date: date


class Revenue(SQLModel, table=True):
    __tablename__ = "revenue"

    month: str = Field(primary_key=True, max_length=4)
    revenue: int


SEED_TABLES = (User, Customer, Invoice, Revenue)
