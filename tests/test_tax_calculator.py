from decimal import Decimal

import pytest

from app.domain.exceptions import InvalidAttribute, MissingReferenceData
from app.domain.services.tax_calculator import TaxCalculator


@pytest.fixture
def calculator():
    return TaxCalculator()


@pytest.mark.parametrize("net, rate_id, expected", [
    (Decimal("100.00"), "05", Decimal("21.00")),
    (Decimal("100.00"), "04", Decimal("10.50")),
    (Decimal("33.33"), "06", Decimal("9.00")),    # 8.9991
    (Decimal("0.10"), "04", Decimal("0.01")),     # 0.0105
    (Decimal("12.50"), "09", Decimal("0.31")),    # 0.3125
    (Decimal("250"), "03", Decimal("0.00")),
])
def test_tax_amount_rounds_half_up_to_cents(calculator, net, rate_id, expected):
    assert calculator.tax_amount(net, rate_id) == expected
    assert calculator.tax_amount(net, rate_id).as_tuple().exponent == -2


def test_tax_amount_accepts_float_net(calculator):
    assert calculator.tax_amount(100.1, "05") == Decimal("21.02")


@pytest.mark.parametrize("rate_id", ["03", "04", "05", "06", "08", "09"])
def test_total_is_zero_for_zero_net(calculator, rate_id):
    tax = calculator.tax_amount(Decimal("0"), rate_id)
    assert calculator.total(Decimal("0"), tax) == 0


def test_total_adds_tax_to_net(calculator):
    tax = calculator.tax_amount(Decimal("100.00"), "05")
    assert calculator.total(Decimal("100.00"), tax) == Decimal("121.00")


def test_total_short_circuits_even_with_nonzero_tax(calculator):
    assert calculator.total(0, Decimal("5.00")) == 0


def test_unknown_rate_is_missing_reference_data(calculator):
    with pytest.raises(MissingReferenceData) as exc:
        calculator.rate_for("99")
    assert exc.value.attribute == "tax_rate_id"
    assert isinstance(exc.value, InvalidAttribute)


def test_missing_rate_id_fails(calculator):
    with pytest.raises(MissingReferenceData):
        calculator.tax_amount(Decimal("10"), None)
