import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date

import pytest
from fastapi.testclient import TestClient

from auth import CurrentUser, create_token
from main import app
from models import Customer, CustomerCreate, Measurements, UserRole
from orders import new_order
from store import MemoryStore
from tailor_route import get_store


def make_measurements(**overrides):
  data = dict(
    suit_type="Shalwar Kameez", shoulder="18", chest="42", waist="38", neck="15.5",
    arm_length="24", wrist="9.5", shirt_length="39", shalwar_length="40",
    paincha="8.5", damain="22", measurement_date=date(2026, 10, 18), delivery_date=date(2026, 11, 1),
  )
  data.update(overrides)
  return Measurements(**data)


def make_customer(id, name, mobile_number, father_name="Father"):
  return Customer(id=id, name=name, father_name=father_name, address="Lahore", mobile_number=mobile_number)


def make_order(id, customer_id, price=1500, advance=500):
  return new_order(customer_id, make_measurements(), price, advance).model_copy(update={"id": id})


@pytest.fixture
def store():
  return MemoryStore()


@pytest.fixture
def ali(store):
  return store.create_customer(CustomerCreate(
    name="Ali Khan", father_name="Akbar", address="Lahore", mobile_number="03001234567",
  ))


@pytest.fixture
def client(store):
  app.dependency_overrides[get_store] = lambda: store
  yield TestClient(app)
  app.dependency_overrides.clear()


@pytest.fixture
def tailor_headers():
  token = create_token(CurrentUser(role=UserRole.TAILOR))
  return {"Authorization": f"Bearer {token}"}


def customer_headers(customer_id):
  token = create_token(CurrentUser(role=UserRole.CUSTOMER, customer_id=customer_id))
  return {"Authorization": f"Bearer {token}"}
