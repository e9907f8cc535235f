# app/domain/services/invoice_type_resolver.py
from enum import Enum
from typing import Type, Union

from app.domain.exceptions import InvalidAttribute
from app.domain.models.reference_data import (
    DEFAULT_REFERENCE_DATA, InvoiceKind, IvaCondition, ReferenceData
)


def _coerce(enum_cls: Type[Enum], value, attribute: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidAttribute(attribute, value) from None


class InvoiceTypeResolver:
    """
    Resuelve el código de comprobante (CbteTipo) a partir de la condición
    de IVA del emisor, la del receptor y la clase de comprobante.
    """
    def __init__(self, reference: ReferenceData = DEFAULT_REFERENCE_DATA):
        self.reference = reference

    def resolve(
        self,
        seller_condition: Union[IvaCondition, str],
        buyer_condition: Union[IvaCondition, str],
        invoice_kind: Union[InvoiceKind, str] = InvoiceKind.INVOICE,
    ) -> str:
        seller = _coerce(IvaCondition, seller_condition, "seller_condition")
        by_buyer = self.reference.bill_types.get(seller)
        if by_buyer is None:
            raise InvalidAttribute("seller_condition", seller_condition)

        buyer = _coerce(IvaCondition, buyer_condition, "buyer_condition")
        by_kind = by_buyer.get(buyer)
        if by_kind is None:
            raise InvalidAttribute("buyer_condition", buyer_condition)

        kind = _coerce(InvoiceKind, invoice_kind, "invoice_kind")
        code = by_kind.get(kind)
        if code is None:
            raise InvalidAttribute("invoice_kind", invoice_kind)
        return code
