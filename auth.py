# auth.py
import os
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from dotenv import load_dotenv
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from models import UserRole

load_dotenv()

# HS256 wants at least 32 bytes of key
JWT_SECRET = os.getenv("JWT_SECRET", "tailor-shop-dev-secret-change-me-in-env")
JWT_ALGO = "HS256"
TOKEN_TTL_DAYS = int(os.getenv("TOKEN_TTL_DAYS", "7"))

security = HTTPBearer(auto_error=False)
log = logging.getLogger(__name__)


class CurrentUser(BaseModel):
  role: UserRole
  customer_id: Optional[str] = None

  def owns(self, customer_id: str) -> bool:
    return self.role == UserRole.CUSTOMER and self.customer_id == customer_id


def create_token(user: CurrentUser) -> str:
  exp = datetime.now(timezone.utc) + timedelta(days=TOKEN_TTL_DAYS)
  payload = {"role": user.role.value, "customer_id": user.customer_id, "exp": exp}
  return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGO)


def decode_token(token: str) -> CurrentUser:
  try:
    payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGO])
  except jwt.ExpiredSignatureError:
    raise HTTPException(status_code=401, detail="Token expired")
  except jwt.InvalidTokenError:
    raise HTTPException(status_code=401, detail="Invalid token")
  try:
    return CurrentUser(role=payload.get("role"), customer_id=payload.get("customer_id"))
  except ValueError:
    raise HTTPException(status_code=401, detail="Invalid token payload")


def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> CurrentUser:
  if credentials is None:
    raise HTTPException(status_code=401, detail="Not authenticated")
  return decode_token(credentials.credentials)


def require_tailor(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
  if user.role != UserRole.TAILOR:
    log.warning("customer %s attempted a tailor-only action", user.customer_id)
    raise HTTPException(status_code=403, detail="Tailor only")
  return user
