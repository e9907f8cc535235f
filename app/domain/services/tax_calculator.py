# app/domain/services/tax_calculator.py
from decimal import Decimal, ROUND_HALF_UP

from app.domain.exceptions import MissingReferenceData
from app.domain.models.reference_data import DEFAULT_REFERENCE_DATA, ReferenceData

CENTS = Decimal("0.01")


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # Los float pasan por str para no arrastrar error binario
    return Decimal(str(value))


class TaxCalculator:
    """Cálculo de IVA y total a partir del neto y la alícuota."""
    def __init__(self, reference: ReferenceData = DEFAULT_REFERENCE_DATA):
        self.reference = reference

    def rate_for(self, tax_rate_id: str) -> Decimal:
        if tax_rate_id not in self.reference.tax_rates:
            raise MissingReferenceData("tax_rate_id", tax_rate_id)
        return self.reference.tax_rates[tax_rate_id]

    def tax_amount(self, net, tax_rate_id: str) -> Decimal:
        amount = _to_decimal(net) * self.rate_for(tax_rate_id)
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)

    def total(self, net, tax_amount) -> Decimal:
        net = _to_decimal(net)
        # Neto cero devuelve 0 literal, sin pasar por la suma
        if net.is_zero():
            return Decimal(0)
        return net + _to_decimal(tax_amount)
