# models.py
import math
import uuid
from enum import Enum
from typing import List, NamedTuple, Optional
from datetime import date, datetime, timezone
from pydantic import field_validator
from sqlmodel import SQLModel, Field

DEFAULT_PROFILE_PICTURE = (
  "data:image/svg+xml,%3Csvg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 100 100'%3E"
  "%3Crect width='100' height='100' fill='%236366f1'/%3E"
  "%3Ccircle cx='50' cy='40' r='20' fill='%23fff'/%3E"
  "%3Ccircle cx='50' cy='110' r='45' fill='%23fff'/%3E%3C/svg%3E"
)

SUIT_TYPES = [
  "Shalwar Kameez",
  "Kurta Pajama",
  "Waistcoat",
  "Prince Coat",
  "Sherwani",
  "Pant Shirt",
]

def utcnow() -> datetime:
  return datetime.now(timezone.utc)

def new_id(length: int = 12) -> str:
  return uuid.uuid4().hex[:length]

class OrderStatus(str, Enum):
  PENDING = "Pending"
  STITCHING = "In Stitching"
  READY = "Ready"
  DELIVERED = "Delivered"

class PaymentStatus(str, Enum):
  PAID = "Paid"
  UNPAID = "Unpaid"

class UserRole(str, Enum):
  TAILOR = "Tailor"
  CUSTOMER = "Customer"

class FieldKind(str, Enum):
  MEASUREMENT = "measurement"
  METADATA = "metadata"

class MeasurementField(NamedTuple):
  name: str
  label: str
  kind: FieldKind

# Grid fields render as a measurement table, metadata fields as headings/notes.
MEASUREMENT_FIELDS = (
  MeasurementField("suit_type", "Suit Type", FieldKind.METADATA),
  MeasurementField("shoulder", "Shoulder", FieldKind.MEASUREMENT),
  MeasurementField("chest", "Chest", FieldKind.MEASUREMENT),
  MeasurementField("waist", "Waist", FieldKind.MEASUREMENT),
  MeasurementField("neck", "Neck", FieldKind.MEASUREMENT),
  MeasurementField("arm_length", "Arm Length", FieldKind.MEASUREMENT),
  MeasurementField("wrist", "Wrist", FieldKind.MEASUREMENT),
  MeasurementField("shirt_length", "Shirt Length", FieldKind.MEASUREMENT),
  MeasurementField("shalwar_length", "Shalwar Length", FieldKind.MEASUREMENT),
  MeasurementField("paincha", "Paincha", FieldKind.MEASUREMENT),
  MeasurementField("damain", "Damain", FieldKind.MEASUREMENT),
  MeasurementField("num_pockets", "Pockets", FieldKind.MEASUREMENT),
  MeasurementField("num_suits", "Suits", FieldKind.MEASUREMENT),
  MeasurementField("cloth_length_given", "Cloth Length Given", FieldKind.MEASUREMENT),
  MeasurementField("measurement_date", "Measurement Date", FieldKind.METADATA),
  MeasurementField("delivery_date", "Delivery Date", FieldKind.METADATA),
  MeasurementField("special_notes", "Special Notes", FieldKind.METADATA),
)

class Measurements(SQLModel):
  suit_type: str = SUIT_TYPES[0]
  shoulder: str = ""
  chest: str = ""
  waist: str = ""
  neck: str = ""
  arm_length: str = ""
  wrist: str = ""
  shirt_length: str = ""
  shalwar_length: str = ""
  paincha: str = ""
  damain: str = ""
  num_pockets: int = 2
  num_suits: int = 1
  cloth_length_given: str = ""
  measurement_date: date = Field(default_factory=date.today)
  delivery_date: date
  special_notes: str = ""

def _fields_of_kind(m: Measurements, kind: FieldKind):
  return [(f.label, getattr(m, f.name)) for f in MEASUREMENT_FIELDS if f.kind == kind]

def measurement_grid(m: Measurements):
  return _fields_of_kind(m, FieldKind.MEASUREMENT)

def measurement_metadata(m: Measurements):
  return _fields_of_kind(m, FieldKind.METADATA)

class PaymentDetails(SQLModel):
  stitching_price: float
  advance_paid: float
  remaining_amount: float  # derived, see orders.derive_payment
  status: PaymentStatus

class Message(SQLModel):
  id: str
  urdu: str
  english: str
  timestamp: datetime

class Customer(SQLModel):
  id: str
  name: str
  father_name: str
  address: str
  mobile_number: str
  cnic: str = ""
  profile_picture: Optional[str] = None

  @property
  def picture(self) -> str:
    return self.profile_picture or DEFAULT_PROFILE_PICTURE

class Order(SQLModel):
  id: str = ""  # empty until the store assigns one
  customer_id: str
  measurements: Measurements
  status: OrderStatus = OrderStatus.PENDING
  payment: PaymentDetails
  messages: List[Message] = Field(default_factory=list)  # newest first
  photos: List[str] = Field(default_factory=list)  # oldest first
  created_at: datetime = Field(default_factory=utcnow)

# --- request bodies ---

def _finite(v: float) -> float:
  if not math.isfinite(v):
    raise ValueError("must be a finite number")
  return v

class CustomerCreate(SQLModel):
  name: str = Field(min_length=1)
  father_name: str = Field(min_length=1)
  address: str = Field(min_length=1)
  mobile_number: str = Field(min_length=1)
  cnic: str = ""
  profile_picture: Optional[str] = DEFAULT_PROFILE_PICTURE

  @field_validator("profile_picture")
  @classmethod
  def placeholder_picture(cls, v: Optional[str]) -> str:
    return v or DEFAULT_PROFILE_PICTURE

  @field_validator("name", "father_name", "address", "mobile_number")
  @classmethod
  def not_blank(cls, v: str) -> str:
    v = v.strip()
    if not v:
      raise ValueError("must not be blank")
    return v

class OrderCreate(SQLModel):
  customer_id: str
  measurements: Measurements
  stitching_price: float = Field(ge=0)
  advance_paid: float = Field(default=0, ge=0)

  @field_validator("stitching_price", "advance_paid")
  @classmethod
  def finite_amount(cls, v: float) -> float:
    return _finite(v)

  @field_validator("measurements")
  @classmethod
  def known_suit_type(cls, m: Measurements) -> Measurements:
    if m.suit_type not in SUIT_TYPES:
      raise ValueError(f"unknown suit type: {m.suit_type}")
    return m

class StatusUpdate(SQLModel):
  status: OrderStatus

class MessageCreate(SQLModel):
  urdu: str = ""
  english: str = ""

class PhotoCreate(SQLModel):
  photo: str = Field(min_length=1)

class PaymentCreate(SQLModel):
  amount: float = Field(gt=0)

  @field_validator("amount")
  @classmethod
  def finite_amount(cls, v: float) -> float:
    return _finite(v)

class CustomerLogin(SQLModel):
  mobile_number: str
