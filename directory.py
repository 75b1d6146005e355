# directory.py
from typing import Dict, List, Optional, Sequence

from models import Customer, Order

UNKNOWN_CUSTOMER = "Unknown"

def _contains(term: str, value: Optional[str]) -> bool:
  return term.lower() in (value or "").lower()

def _by_id(customers: Sequence[Customer]) -> Dict[str, Customer]:
  index: Dict[str, Customer] = {}
  for c in customers:
    # first wins, same as a linear find
    index.setdefault(c.id, c)
  return index

def filter_customers(customers: Sequence[Customer], term: Optional[str] = None) -> List[Customer]:
  if not term:
    return list(customers)
  return [
    c for c in customers
    if _contains(term, c.name)
    or term in c.mobile_number
    or _contains(term, c.father_name)
  ]

def filter_orders(orders: Sequence[Order], customers: Sequence[Customer], term: Optional[str] = None) -> List[Order]:
  if not term:
    return list(orders)
  index = _by_id(customers)
  matched = []
  for o in orders:
    customer = index.get(o.customer_id)
    if _contains(term, o.id) or (customer is not None and _contains(term, customer.name)):
      matched.append(o)
  return matched

def customer_name_for(order: Order, customers: Sequence[Customer]) -> str:
  customer = _by_id(customers).get(order.customer_id)
  return customer.name if customer else UNKNOWN_CUSTOMER

def find_customer(customers: Sequence[Customer], customer_id: str) -> Optional[Customer]:
  return _by_id(customers).get(customer_id)

def find_customer_by_mobile(customers: Sequence[Customer], mobile_number: str) -> Optional[Customer]:
  """Login lookup. Exact match on the raw text; the first customer wins."""
  for c in customers:
    if c.mobile_number == mobile_number:
      return c
  return None

def orders_for_customer(orders: Sequence[Order], customer_id: str) -> List[Order]:
  return [o for o in orders if o.customer_id == customer_id]
