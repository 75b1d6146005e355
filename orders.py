# orders.py
"""Order rules: payment derivation, status lifecycle, messages and photos.

Every function here is pure. Mutations return new values that the caller
writes back through the store; inputs are never edited in place.
"""
from typing import List, Sequence

from models import (
  Customer,
  Measurements,
  Message,
  Order,
  OrderStatus,
  PaymentDetails,
  PaymentStatus,
  UserRole,
  new_id,
  utcnow,
)

# No ordering constraint between statuses: any status may follow any other.
TRANSITIONS = {s: frozenset(OrderStatus) for s in OrderStatus}


def derive_payment(stitching_price: float, advance_paid: float) -> PaymentDetails:
  remaining = stitching_price - advance_paid
  return PaymentDetails(
    stitching_price=stitching_price,
    advance_paid=advance_paid,
    remaining_amount=remaining,
    status=PaymentStatus.PAID if remaining <= 0 else PaymentStatus.UNPAID,
  )


def record_payment(payment: PaymentDetails, amount: float) -> PaymentDetails:
  """Add `amount` to the advance and re-derive the remaining due."""
  return derive_payment(payment.stitching_price, payment.advance_paid + amount)


def new_order(customer_id: str, measurements: Measurements,
              stitching_price: float, advance_paid: float) -> Order:
  """Draft order with creation defaults; the store assigns the id."""
  return Order(
    customer_id=customer_id,
    measurements=measurements,
    status=OrderStatus.PENDING,
    payment=derive_payment(stitching_price, advance_paid),
    messages=[],
    photos=[],
    created_at=utcnow(),
  )


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
  return target in TRANSITIONS[current]


def can_change_status(role: UserRole) -> bool:
  return role == UserRole.TAILOR


def transition(order: Order, target: OrderStatus) -> Order:
  return order.model_copy(update={"status": target})


def append_message(order: Order, urdu: str, english: str) -> List[Message]:
  msg = Message(id=new_id(), urdu=urdu, english=english, timestamp=utcnow())
  return [msg, *order.messages]


def append_photo(photos: Sequence[str], photo: str) -> List[str]:
  return [*photos, photo]


def set_profile_picture(customer: Customer, picture: str) -> Customer:
  return customer.model_copy(update={"profile_picture": picture})
