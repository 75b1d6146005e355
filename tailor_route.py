# tailor_route.py
import logging
from datetime import date, timedelta
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, SQLModel

from auth import CurrentUser, create_token, get_current_user, require_tailor
from db import get_session
from directory import (
  UNKNOWN_CUSTOMER,
  customer_name_for,
  filter_customers,
  filter_orders,
  find_customer,
  find_customer_by_mobile,
  orders_for_customer,
)
from models import (
  SUIT_TYPES,
  Customer,
  CustomerCreate,
  CustomerLogin,
  Measurements,
  Message,
  MessageCreate,
  Order,
  OrderCreate,
  PaymentCreate,
  PaymentDetails,
  PhotoCreate,
  StatusUpdate,
  UserRole,
  measurement_grid,
  measurement_metadata,
)
from orders import (
  append_message,
  append_photo,
  can_change_status,
  can_transition,
  new_order,
  record_payment,
  set_profile_picture,
  transition,
)
from store import SqlStore, Store

router = APIRouter(prefix="/api", tags=["tailor"])
auth_router = APIRouter(prefix="/auth", tags=["auth"])
log = logging.getLogger(__name__)

def get_store(session: Session = Depends(get_session)) -> Store:
  return SqlStore(session)

# --- views ---

class LabeledValue(SQLModel):
  label: str
  value: Any

class OrderView(Order):
  customer_name: str = UNKNOWN_CUSTOMER

class OrderDetail(OrderView):
  measurement_grid: List[LabeledValue] = []
  measurement_metadata: List[LabeledValue] = []

class Token(SQLModel):
  token: str
  role: UserRole
  customer_id: Optional[str] = None

def _view(o: Order, customers: List[Customer]) -> OrderView:
  return OrderView.model_validate({**o.model_dump(), "customer_name": customer_name_for(o, customers)})

def _detail(o: Order, customers: List[Customer]) -> OrderDetail:
  return OrderDetail.model_validate({
    **o.model_dump(),
    "customer_name": customer_name_for(o, customers),
    "measurement_grid": [LabeledValue(label=k, value=v) for k, v in measurement_grid(o.measurements)],
    "measurement_metadata": [LabeledValue(label=k, value=v) for k, v in measurement_metadata(o.measurements)],
  })

def _ensure_access(user: CurrentUser, customer_id: str) -> None:
  if user.role != UserRole.TAILOR and not user.owns(customer_id):
    raise HTTPException(status_code=403, detail="Not allowed")

def _order_or_404(store: Store, order_id: str) -> Order:
  o = store.get_order(order_id)
  if o is None:
    raise HTTPException(status_code=404, detail="Order not found")
  return o

def _customer_or_404(store: Store, customer_id: str) -> Customer:
  c = store.get_customer(customer_id)
  if c is None:
    raise HTTPException(status_code=404, detail="Customer not found")
  return c

def _saved(updated: Optional[Order]) -> Order:
  # the order can vanish between read and write
  if updated is None:
    raise HTTPException(status_code=404, detail="Order not found")
  return updated

# --- auth ---

@auth_router.post("/tailor", response_model=Token)
def login_tailor():
  user = CurrentUser(role=UserRole.TAILOR)
  log.info("tailor logged in")
  return Token(token=create_token(user), role=user.role)

@auth_router.post("/customer", response_model=Token)
def login_customer(body: CustomerLogin, store: Store = Depends(get_store)):
  customer = find_customer_by_mobile(store.list_customers(), body.mobile_number)
  if not customer:
    log.warning("login failed for mobile number %s", body.mobile_number)
    raise HTTPException(status_code=401, detail="No customer found with this mobile number.")
  user = CurrentUser(role=UserRole.CUSTOMER, customer_id=customer.id)
  log.info("customer %s logged in", customer.id)
  return Token(token=create_token(user), role=user.role, customer_id=customer.id)

@router.get("/me", response_model=CurrentUser)
def me(user: CurrentUser = Depends(get_current_user)):
  return user

# --- customers ---

@router.get("/suit-types", response_model=List[str])
def list_suit_types():
  return SUIT_TYPES

@router.get("/customers", response_model=List[Customer])
def list_customers(q: Optional[str] = None, store: Store = Depends(get_store), user=Depends(require_tailor)):
  return filter_customers(store.list_customers(), q)

@router.post("/customers", response_model=Customer, status_code=201)
def create_customer(body: CustomerCreate, store: Store = Depends(get_store), user=Depends(require_tailor)):
  c = store.create_customer(body)
  log.info("customer %s registered", c.id)
  return c

@router.get("/customers/{customer_id}", response_model=Customer)
def get_customer(customer_id: str, store: Store = Depends(get_store), user: CurrentUser = Depends(get_current_user)):
  _ensure_access(user, customer_id)
  return _customer_or_404(store, customer_id)

@router.put("/customers/{customer_id}/profile-picture", response_model=Customer)
def put_profile_picture(customer_id: str, body: PhotoCreate, store: Store = Depends(get_store),
                        user: CurrentUser = Depends(get_current_user)):
  _ensure_access(user, customer_id)
  c = set_profile_picture(_customer_or_404(store, customer_id), body.photo)
  saved = store.update_customer(customer_id, profile_picture=c.profile_picture)
  if saved is None:
    raise HTTPException(status_code=404, detail="Customer not found")
  log.info("profile picture replaced for customer %s", customer_id)
  return saved

@router.get("/customers/{customer_id}/orders", response_model=List[OrderView])
def list_customer_orders(customer_id: str, store: Store = Depends(get_store),
                         user: CurrentUser = Depends(get_current_user)):
  _ensure_access(user, customer_id)
  customers = store.list_customers()
  return [_view(o, customers) for o in orders_for_customer(store.list_orders(), customer_id)]

# --- orders ---

@router.get("/orders", response_model=List[OrderView])
def list_orders(q: Optional[str] = None, store: Store = Depends(get_store), user=Depends(require_tailor)):
  customers = store.list_customers()
  return [_view(o, customers) for o in filter_orders(store.list_orders(), customers, q)]

@router.post("/orders", response_model=OrderView, status_code=201)
def create_order(body: OrderCreate, store: Store = Depends(get_store), user=Depends(require_tailor)):
  customers = store.list_customers()
  if not find_customer(customers, body.customer_id):
    raise HTTPException(status_code=404, detail="Customer not found")
  draft = new_order(body.customer_id, body.measurements, body.stitching_price, body.advance_paid)
  o = store.create_order(draft)
  log.info("order %s created for customer %s (%s)", o.id, o.customer_id, o.payment.status.value)
  return _view(o, customers)

@router.get("/orders/{order_id}", response_model=OrderDetail)
def get_order(order_id: str, store: Store = Depends(get_store), user: CurrentUser = Depends(get_current_user)):
  o = _order_or_404(store, order_id)
  _ensure_access(user, o.customer_id)
  return _detail(o, store.list_customers())

@router.patch("/orders/{order_id}/status", response_model=OrderView)
def update_status(order_id: str, body: StatusUpdate, store: Store = Depends(get_store),
                  user: CurrentUser = Depends(get_current_user)):
  if not can_change_status(user.role):
    raise HTTPException(status_code=403, detail="Only the tailor may change order status")
  o = _order_or_404(store, order_id)
  if not can_transition(o.status, body.status):
    raise HTTPException(status_code=409, detail=f"Cannot move from {o.status.value} to {body.status.value}")
  o = _saved(store.update_order(order_id, status=transition(o, body.status).status))
  log.info("order %s status set to %s", order_id, o.status.value)
  return _view(o, store.list_customers())

@router.post("/orders/{order_id}/messages", response_model=List[Message], status_code=201)
def send_message(order_id: str, body: MessageCreate, store: Store = Depends(get_store), user=Depends(require_tailor)):
  o = _order_or_404(store, order_id)
  o = _saved(store.update_order(order_id, messages=append_message(o, body.urdu, body.english)))
  log.info("message %s sent on order %s", o.messages[0].id, order_id)
  return o.messages

@router.post("/orders/{order_id}/photos", response_model=List[str], status_code=201)
def add_photo(order_id: str, body: PhotoCreate, store: Store = Depends(get_store),
              user: CurrentUser = Depends(get_current_user)):
  o = _order_or_404(store, order_id)
  _ensure_access(user, o.customer_id)
  o = _saved(store.update_order(order_id, photos=append_photo(o.photos, body.photo)))
  log.info("photo %d added to order %s", len(o.photos), order_id)
  return o.photos

@router.post("/orders/{order_id}/payments", response_model=PaymentDetails)
def add_payment(order_id: str, body: PaymentCreate, store: Store = Depends(get_store), user=Depends(require_tailor)):
  o = _order_or_404(store, order_id)
  o = _saved(store.update_order(order_id, payment=record_payment(o.payment, body.amount)))
  log.info("payment of %s recorded on order %s, remaining %s", body.amount, order_id, o.payment.remaining_amount)
  return o.payment

@router.post("/seed")
def seed_if_empty(store: Store = Depends(get_store), user=Depends(require_tailor)):
  # Seed only if the store is empty
  if store.list_customers():
    return {"ok": True, "seeded": False}

  ali = store.create_customer(CustomerCreate(
    name="Ali Khan", father_name="Akbar Khan", address="House 12, Street 4, Lahore",
    mobile_number="03001234567", cnic="35202-1234567-1",
  ))
  bilal = store.create_customer(CustomerCreate(
    name="Bilal Ahmed", father_name="Rashid Ahmed", address="Flat 3, Gulberg, Lahore",
    mobile_number="03217654321",
  ))

  today = date.today()
  store.create_order(new_order(ali.id, Measurements(
    suit_type="Shalwar Kameez", shoulder="18", chest="42", waist="38", neck="15.5", arm_length="24",
    wrist="9.5", shirt_length="39", shalwar_length="40", paincha="8.5", damain="22",
    delivery_date=today + timedelta(days=7),
  ), 1500, 500))
  store.create_order(new_order(bilal.id, Measurements(
    suit_type="Kurta Pajama", shoulder="17", chest="40", waist="36", neck="15", arm_length="23",
    wrist="9", shirt_length="41", shalwar_length="39", paincha="8", damain="21",
    delivery_date=today + timedelta(days=10), special_notes="Double stitching on collar",
  ), 2000, 2000))

  log.info("seeded demo customers and orders")
  return {"ok": True, "seeded": True}
