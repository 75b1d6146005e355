# store.py
"""Storage boundary.

The API reads full snapshots (`list_customers`, `list_orders`) and writes
whole field groups back. Last write wins; there is no versioning.
"""
from typing import Dict, List, Optional, Protocol
from datetime import datetime
from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field, Session, select

from models import Customer, CustomerCreate, Order, OrderStatus, new_id, utcnow

ORDER_FIELDS = {"status", "messages", "photos", "payment"}
CUSTOMER_FIELDS = {"profile_picture"}
JSON_FIELDS = {"measurements", "payment", "messages", "photos"}

class Store(Protocol):
  def list_customers(self) -> List[Customer]: ...
  def list_orders(self) -> List[Order]: ...
  def get_customer(self, customer_id: str) -> Optional[Customer]: ...
  def get_order(self, order_id: str) -> Optional[Order]: ...
  def create_customer(self, data: CustomerCreate) -> Customer: ...
  def create_order(self, draft: Order) -> Order: ...
  def update_order(self, order_id: str, **fields) -> Optional[Order]: ...
  def update_customer(self, customer_id: str, **fields) -> Optional[Customer]: ...

def _check_fields(fields: dict, allowed: set) -> None:
  extra = set(fields) - allowed
  if extra:
    raise ValueError(f"Cannot update fields: {', '.join(sorted(extra))}")

class MemoryStore:
  def __init__(self):
    # dicts keep insertion order
    self.customers: Dict[str, Customer] = {}
    self.orders: Dict[str, Order] = {}

  def list_customers(self) -> List[Customer]:
    return list(self.customers.values())

  def list_orders(self) -> List[Order]:
    return list(self.orders.values())

  def get_customer(self, customer_id: str) -> Optional[Customer]:
    return self.customers.get(customer_id)

  def get_order(self, order_id: str) -> Optional[Order]:
    return self.orders.get(order_id)

  def create_customer(self, data: CustomerCreate) -> Customer:
    c = Customer(id=new_id(), **data.model_dump())
    self.customers[c.id] = c
    return c

  def create_order(self, draft: Order) -> Order:
    o = draft.model_copy(update={"id": new_id()})
    self.orders[o.id] = o
    return o

  def update_order(self, order_id: str, **fields) -> Optional[Order]:
    _check_fields(fields, ORDER_FIELDS)
    o = self.orders.get(order_id)
    if o is None:
      return None
    o = o.model_copy(update=fields)
    self.orders[order_id] = o
    return o

  def update_customer(self, customer_id: str, **fields) -> Optional[Customer]:
    _check_fields(fields, CUSTOMER_FIELDS)
    c = self.customers.get(customer_id)
    if c is None:
      return None
    c = c.model_copy(update=fields)
    self.customers[customer_id] = c
    return c

# --- SQL tables ---

class CustomerRecord(SQLModel, table=True):
  __tablename__ = "customers"
  seq: Optional[int] = Field(default=None, primary_key=True)
  id: str = Field(index=True, unique=True)
  name: str
  father_name: str
  address: str
  mobile_number: str = Field(index=True)
  cnic: str = ""
  profile_picture: Optional[str] = None
  created_at: datetime = Field(default_factory=utcnow)

class OrderRecord(SQLModel, table=True):
  __tablename__ = "orders"
  seq: Optional[int] = Field(default=None, primary_key=True)
  id: str = Field(index=True, unique=True)
  customer_id: str = Field(index=True)
  status: OrderStatus = OrderStatus.PENDING
  measurements: dict = Field(sa_column=Column(JSON, nullable=False))
  payment: dict = Field(sa_column=Column(JSON, nullable=False))
  messages: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
  photos: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
  created_at: datetime = Field(default_factory=utcnow)

def _customer(rec: CustomerRecord) -> Customer:
  return Customer.model_validate(rec.model_dump(exclude={"seq", "created_at"}))

def _order(rec: OrderRecord) -> Order:
  return Order.model_validate(rec.model_dump(exclude={"seq"}))

def _columns(model: SQLModel, names) -> dict:
  dumped = model.model_dump(mode="json")
  return {k: dumped[k] if k in JSON_FIELDS else getattr(model, k) for k in names}

class SqlStore:
  def __init__(self, session: Session):
    self.session = session

  def list_customers(self) -> List[Customer]:
    rows = self.session.exec(select(CustomerRecord).order_by(CustomerRecord.seq)).all()
    return [_customer(r) for r in rows]

  def list_orders(self) -> List[Order]:
    rows = self.session.exec(select(OrderRecord).order_by(OrderRecord.seq)).all()
    return [_order(r) for r in rows]

  def create_customer(self, data: CustomerCreate) -> Customer:
    rec = CustomerRecord(id=new_id(), **data.model_dump())
    self.session.add(rec)
    self.session.commit()
    self.session.refresh(rec)
    return _customer(rec)

  def create_order(self, draft: Order) -> Order:
    o = draft.model_copy(update={"id": new_id()})
    rec = OrderRecord(**_columns(o, Order.model_fields))
    self.session.add(rec)
    self.session.commit()
    self.session.refresh(rec)
    return _order(rec)

  def _get(self, table, row_id: str):
    return self.session.exec(select(table).where(table.id == row_id)).first()

  def get_customer(self, customer_id: str) -> Optional[Customer]:
    rec = self._get(CustomerRecord, customer_id)
    return _customer(rec) if rec else None

  def get_order(self, order_id: str) -> Optional[Order]:
    rec = self._get(OrderRecord, order_id)
    return _order(rec) if rec else None

  def update_order(self, order_id: str, **fields) -> Optional[Order]:
    _check_fields(fields, ORDER_FIELDS)
    rec = self._get(OrderRecord, order_id)
    if rec is None:
      return None
    updated = _order(rec).model_copy(update=fields)
    for k, v in _columns(updated, fields).items():
      setattr(rec, k, v)
    self.session.add(rec)
    self.session.commit()
    self.session.refresh(rec)
    return _order(rec)

  def update_customer(self, customer_id: str, **fields) -> Optional[Customer]:
    _check_fields(fields, CUSTOMER_FIELDS)
    rec = self._get(CustomerRecord, customer_id)
    if rec is None:
      return None
    for k, v in fields.items():
      setattr(rec, k, v)
    self.session.add(rec)
    self.session.commit()
    self.session.refresh(rec)
    return _customer(rec)
