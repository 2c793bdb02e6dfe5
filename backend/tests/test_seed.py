from uuid import UUID

import pytest
from sqlalchemy import func
from sqlmodel import Session, select

from dashboard_seed import placeholder_data
from dashboard_seed.db import create_seed_engine
from dashboard_seed.errors import InvalidSampleData
from dashboard_seed.models import Customer, Invoice, Revenue, User
from dashboard_seed.security import verify_password
from dashboard_seed.seed import SampleData, seed_all


@pytest.fixture()
def engine(test_settings):
    engine = create_seed_engine(test_settings)
    yield engine
    engine.dispose()


def test_seed_all_loads_every_sample_record(engine, observer):
    report = seed_all(engine, observer=observer)

    assert [result.table for result in report.results] == ["users", "customers", "invoices", "revenue"]
    assert report.inserted("users") == len(placeholder_data.users)
    assert report.inserted("customers") == len(placeholder_data.customers)
    assert report.inserted("invoices") == len(placeholder_data.invoices)
    assert report.inserted("revenue") == len(placeholder_data.revenue)
    assert [args[0] for name, args in observer.events if name == "table_started"] == [
        "users",
        "customers",
        "invoices",
        "revenue",
    ]


def test_seed_all_is_idempotent(engine):
    first = seed_all(engine)
    second = seed_all(engine)

    assert second.total_inserted == 0
    assert [r.attempted for r in second.results] == [r.attempted for r in first.results]
    with Session(engine) as session:
        assert session.exec(select(func.count()).select_from(Invoice)).one() == len(placeholder_data.invoices)
        duplicated_months = session.exec(
            select(Revenue.month).group_by(Revenue.month).having(func.count() > 1)
        ).all()
        assert duplicated_months == []


def test_admin_password_is_stored_hashed(engine):
    seed_all(engine)

    with Session(engine) as session:
        users = session.exec(select(User).where(User.email == "admin@example.com")).all()

    assert len(users) == 1
    admin = users[0]
    assert admin.name == "Admin"
    assert admin.password != "123456"
    assert admin.password.startswith("$2")
    assert verify_password("123456", admin.password)


def test_invoice_with_unknown_customer_rolls_back_everything(engine):
    data = SampleData()
    data.invoices.append(
        {
            "id": UUID("00000000-0000-4000-8000-0000000000ff"),
            "customer_id": UUID("00000000-0000-4000-8000-00000000dead"),
            "amount": 100,
            "status": "pending",
            "date": placeholder_data.invoices[0]["date"],
        }
    )

    with pytest.raises(InvalidSampleData, match="unknown customers"):
        seed_all(engine, data=data)

    with Session(engine) as session:
        assert session.exec(select(func.count()).select_from(User)).one() == 0


def test_invoice_with_unknown_status_is_rejected(engine):
    data = SampleData()
    data.invoices[0]["status"] = "overdue"

    with pytest.raises(InvalidSampleData, match="overdue"):
        seed_all(engine, data=data)


def test_existing_customer_row_is_left_untouched(engine):
    seed_all(engine)
    customer_id = placeholder_data.customers[0]["id"]
    with Session(engine) as session:
        customer = session.get(Customer, customer_id)
        customer.name = "Renamed Rabbit"
        session.add(customer)
        session.commit()

    report = seed_all(engine)

    assert report.inserted("customers") == 0
    with Session(engine) as session:
        assert session.get(Customer, customer_id).name == "Renamed Rabbit"


def test_sample_data_copies_do_not_leak_into_placeholders():
    data = SampleData()
    data.users[0]["name"] = "Changed"
    assert placeholder_data.users[0]["name"] == "Admin"
