from decimal import Decimal

from chalicelib.utils import validators


def test_is_positive_int():
    assert validators.is_positive_int(3)
    assert not validators.is_positive_int(0)
    assert not validators.is_positive_int(-2)
    assert not validators.is_positive_int(True)
    assert not validators.is_positive_int(Decimal('2.5'))
    assert not validators.is_positive_int('3')


def test_is_positive_amount():
    assert validators.is_positive_amount(Decimal('0.01'))
    assert validators.is_positive_amount(5)
    assert not validators.is_positive_amount(Decimal('0.00'))
    assert not validators.is_positive_amount(-1)
    assert not validators.is_positive_amount('9.99')
    assert not validators.is_positive_amount(None)


def test_is_str_len():
    is_name = validators.is_str_len(2, 100)
    assert is_name('Ab')
    assert not is_name('A')
    assert not is_name('A' * 101)
    assert not is_name(None)


def test_is_email():
    assert validators.is_email('waiter@restaurant.com')
    assert not validators.is_email('waiter.restaurant.com')
    assert not validators.is_email('')


def test_is_iso_datetime():
    assert validators.is_iso_datetime('2023-05-01T12:00:00')
    assert not validators.is_iso_datetime('01/05/2023')


def test_is_one_of():
    is_method = validators.is_one_of('CARD', 'CASH')
    assert is_method('CARD')
    assert not is_method('card')
    assert not is_method(None)
