from conftest import make_customer, make_order
from models import DEFAULT_PROFILE_PICTURE
from orders import append_message, append_photo, set_profile_picture


def test_messages_are_newest_first():
  order = make_order("o1", "c1")
  order = order.model_copy(update={"messages": append_message(order, "پہلا", "first")})
  m1 = order.messages[0]
  order = order.model_copy(update={"messages": append_message(order, "دوسرا", "second")})
  m2 = order.messages[0]
  assert order.messages == [m2, m1]
  assert (m1.urdu, m1.english) == ("پہلا", "first")
  assert m2.english == "second"
  assert m1.id != m2.id
  assert m2.timestamp >= m1.timestamp


def test_append_message_does_not_touch_input():
  order = make_order("o1", "c1")
  msgs = append_message(order, "", "")
  assert order.messages == []
  assert len(msgs) == 1
  assert msgs[0].urdu == "" and msgs[0].english == ""


def test_photos_are_chronological():
  photos = append_photo([], "data:image/png;base64,P1")
  photos = append_photo(photos, "data:image/png;base64,P2")
  assert photos == ["data:image/png;base64,P1", "data:image/png;base64,P2"]


def test_append_photo_does_not_touch_input():
  existing = ["p1"]
  assert append_photo(existing, "p2") == ["p1", "p2"]
  assert existing == ["p1"]


def test_profile_picture_is_replaced_not_appended():
  c = make_customer("c1", "Ali", "0300")
  assert c.picture == DEFAULT_PROFILE_PICTURE
  c = set_profile_picture(c, "pic-1")
  c = set_profile_picture(c, "pic-2")
  assert c.profile_picture == "pic-2"
  assert c.picture == "pic-2"
