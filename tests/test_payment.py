from models import PaymentStatus
from orders import derive_payment, record_payment


def test_partial_advance_is_unpaid():
  p = derive_payment(1500, 500)
  assert p.remaining_amount == 1000
  assert p.status == PaymentStatus.UNPAID


def test_full_advance_is_paid():
  p = derive_payment(1500, 1500)
  assert p.remaining_amount == 0
  assert p.status == PaymentStatus.PAID


def test_overpayment_reads_as_paid_and_is_not_clamped():
  p = derive_payment(1500, 2000)
  assert p.remaining_amount == -500
  assert p.status == PaymentStatus.PAID


def test_inputs_are_kept():
  p = derive_payment(1200, 300)
  assert (p.stitching_price, p.advance_paid) == (1200, 300)


def test_negative_input_is_not_rejected():
  p = derive_payment(-100, 0)
  assert p.remaining_amount == -100
  assert p.status == PaymentStatus.PAID


def test_record_payment_rederives_remaining_and_status():
  p = derive_payment(1500, 500)
  p = record_payment(p, 600)
  assert p.advance_paid == 1100
  assert p.remaining_amount == 400
  assert p.status == PaymentStatus.UNPAID
  p = record_payment(p, 400)
  assert p.remaining_amount == 0
  assert p.status == PaymentStatus.PAID
