from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlmodel import SQLModel, select

from . import placeholder_data
from .db import insert_ignoring_conflicts
from .errors import InvalidSampleData
from .models import Customer, Invoice, InvoiceStatusEnum, Revenue, User
from .observers import SeedObserver
from .security import get_password_hash


Record = Dict[str, Any]


def _copy_records(records: List[Record]) -> List[Record]:
    return [dict(item) for item in records]


@dataclass
class SampleData:
    """The records written by one seeding run, one list per table."""

    users: List[Record] = field(default_factory=lambda: _copy_records(placeholder_data.users))
    customers: List[Record] = field(default_factory=lambda: _copy_records(placeholder_data.customers))
    invoices: List[Record] = field(default_factory=lambda: _copy_records(placeholder_data.invoices))
    revenue: List[Record] = field(default_factory=lambda: _copy_records(placeholder_data.revenue))


@dataclass
class TableResult:
    table: str
    attempted: int
    inserted: int


@dataclass
class SeedReport:
    results: List[TableResult] = field(default_factory=list)

    def inserted(self, table: str) -> int:
        for result in self.results:
            if result.table == table:
                return result.inserted
        raise KeyError(table)

    @property
    def total_inserted(self) -> int:
        return sum(result.inserted for result in self.results)


def ensure_uuid_extension(connection: Connection) -> None:
    # uuid_generate_v4() solo existe en PostgreSQL
    if connection.dialect.name == "postgresql":
        connection.execute(text('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"'))


def _ensure_table(connection: Connection, model: Type[SQLModel]) -> None:
    model.__table__.create(connection, checkfirst=True)


def _insert_missing(connection: Connection, model: Type[SQLModel], rows: List[Record]) -> int:
    table = model.__table__
    inserted = 0
    for row in rows:
        result = connection.execute(insert_ignoring_conflicts(connection, table).values(**row))
        inserted += max(result.rowcount, 0)
    return inserted


def seed_users(connection: Connection, users: List[Record], observer: SeedObserver) -> TableResult:
    table = User.__tablename__
    observer.table_detail(table, "Creating uuid-ossp extension")
    ensure_uuid_extension(connection)
    observer.table_detail(table, "Creating users table")
    _ensure_table(connection, User)

    observer.table_detail(table, "Hashing passwords")
    rows = [{**user, "password": get_password_hash(user["password"])} for user in users]

    observer.table_detail(table, "Inserting users")
    inserted = _insert_missing(connection, User, rows)
    return TableResult(table=table, attempted=len(rows), inserted=inserted)


def seed_customers(connection: Connection, customers: List[Record], observer: SeedObserver) -> TableResult:
    table = Customer.__tablename__
    ensure_uuid_extension(connection)
    _ensure_table(connection, Customer)
    observer.table_detail(table, "Inserting customers")
    inserted = _insert_missing(connection, Customer, customers)
    return TableResult(table=table, attempted=len(customers), inserted=inserted)


def _check_invoices(connection: Connection, invoices: List[Record]) -> None:
    known_customers = set(connection.execute(select(Customer.id)).scalars())
    unknown = sorted({str(item["customer_id"]) for item in invoices if item["customer_id"] not in known_customers})
    if unknown:
        raise InvalidSampleData(f"Invoices reference unknown customers: {', '.join(unknown)}")

    allowed = {status.value for status in InvoiceStatusEnum}
    bad_status = sorted({item["status"] for item in invoices if item["status"] not in allowed})
    if bad_status:
        raise InvalidSampleData(f"Invoices use unknown statuses: {', '.join(bad_status)}")


def seed_invoices(connection: Connection, invoices: List[Record], observer: SeedObserver) -> TableResult:
    table = Invoice.__tablename__
    ensure_uuid_extension(connection)
    _ensure_table(connection, Invoice)
    observer.table_detail(table, "Checking invoice customers")
    _check_invoices(connection, invoices)
    observer.table_detail(table, "Inserting invoices")
    inserted = _insert_missing(connection, Invoice, invoices)
    return TableResult(table=table, attempted=len(invoices), inserted=inserted)


def seed_revenue(connection: Connection, revenue: List[Record], observer: SeedObserver) -> TableResult:
    table = Revenue.__tablename__
    _ensure_table(connection, Revenue)
    observer.table_detail(table, "Inserting revenue")
    inserted = _insert_missing(connection, Revenue, revenue)
    return TableResult(table=table, attempted=len(revenue), inserted=inserted)


def seed_all(
    engine: Engine,
    data: Optional[SampleData] = None,
    observer: Optional[SeedObserver] = None,
) -> SeedReport:
    """Create the four dashboard tables and load the sample records.

    Everything runs in one transaction: either all four tables are seeded or
    nothing written by this run is kept. Rows that already exist are skipped,
    so calling this repeatedly is safe.
    """
    data = data or SampleData()
    observer = observer or SeedObserver()
    report = SeedReport()

    with engine.begin() as connection:
        # Orden fijo: invoices depende de customers
        steps = [
            (User.__tablename__, seed_users, data.users),
            (Customer.__tablename__, seed_customers, data.customers),
            (Invoice.__tablename__, seed_invoices, data.invoices),
            (Revenue.__tablename__, seed_revenue, data.revenue),
        ]
        for table, step, records in steps:
            observer.table_started(table)
            result = step(connection, records, observer)
            observer.table_finished(result)
            report.results.append(result)

    return report
