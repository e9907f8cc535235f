# app/domain/models/invoice.py
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from app.domain.models.reference_data import (
    Concept, Currency, DocumentType, InvoiceKind, IvaCondition
)
from app.domain.models.settings import BillingSettings

APPROVED = "A"


class InvoiceRequest(BaseModel):
    """
    Datos de un comprobante a autorizar. Se construye a partir de los
    atributos del llamador y sólo se modifica al armar el pedido
    (numeración y fechas por defecto). No se reutiliza para un segundo envío.
    """
    net: Decimal = Field(Decimal("0"), ge=0)
    document_type: DocumentType
    currency: Currency
    concept: Concept
    tax_rate_id: Optional[str] = None
    # Se aceptan símbolos sin validar: el resolvedor informa cuál es inválido
    seller_condition: Union[IvaCondition, str]
    buyer_condition: Optional[Union[IvaCondition, str]] = None
    invoice_kind: Union[InvoiceKind, str] = InvoiceKind.INVOICE
    due_date: Optional[date] = None
    service_period_start: Optional[date] = None
    service_period_end: Optional[date] = None
    # DocNro es obligatorio en el WSFE: 0 cuando el receptor no se identifica (DocTipo 99)
    document_number: int = 0
    credential_block: Dict[str, Any] = Field(default_factory=dict)

    # --- Campos que se completan durante el armado del pedido ---
    invoice_number: Optional[int] = None

    _submitted: bool = PrivateAttr(default=False)

    model_config = ConfigDict(validate_assignment=True)

    @classmethod
    def create(cls, settings: BillingSettings, credential_block: Dict[str, Any], **attrs) -> "InvoiceRequest":
        """Aplica los valores por defecto configurados a los atributos recibidos."""
        values = {
            "document_type": settings.default_document_type,
            "currency": settings.default_currency,
            "concept": settings.default_concept,
            "seller_condition": settings.own_iva_condition,
        }
        values.update({k: v for k, v in attrs.items() if v is not None})
        values["credential_block"] = dict(credential_block)
        return cls(**values)

    @property
    def submitted(self) -> bool:
        return self._submitted

    def mark_submitted(self) -> None:
        self._submitted = True


class InvoiceResult(BaseModel):
    """
    Resultado plano de una autorización: campos decodificados de la
    respuesta más los campos del pedido con nombres normalizados.
    """
    header_result: Optional[str] = None
    detail_result: Optional[str] = None
    authorized_on: Optional[str] = None
    cae: Optional[str] = None
    cae_due_date: Optional[str] = None
    observations: List[Dict[str, str]] = Field(default_factory=list)
    errors: List[Dict[str, str]] = Field(default_factory=list)

    model_config = ConfigDict(
        frozen=True,
        extra='allow'  # Los campos del pedido se agregan como atributos extra
    )

    @property
    def authorized(self) -> bool:
        return self.header_result == APPROVED and self.detail_result == APPROVED

    def as_dict(self) -> Dict[str, Any]:
        data = self.model_dump()
        data["authorized"] = self.authorized
        return data


def is_authorized(result: Optional[InvoiceResult]) -> bool:
    """Veredicto de autorización; sin respuesta nunca está autorizado."""
    return result is not None and result.authorized
