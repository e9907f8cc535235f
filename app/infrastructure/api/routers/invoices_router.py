# app/infrastructure/api/routers/invoices_router.py
import threading
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

import config
from app.application.use_cases.authorize_invoice import AuthorizeInvoiceUseCase
from app.domain.exceptions import (
    InvalidAttribute, MalformedResponse, TransportFailure
)
from app.domain.models.invoice import InvoiceRequest
from app.domain.models.reference_data import Concept, Currency, DocumentType
from app.domain.models.settings import BillingSettings
from app.domain.ports.auth_provider import AuthProvider
from app.domain.services.request_builder import RequestBuilder
from app.infrastructure.external.auth_data import EnvAuthProvider
from app.infrastructure.external.wsfe_adapter import WsfeAdapter

router = APIRouter(prefix="/api/v1/facturas", tags=["Facturas"])

# El último comprobante autorizado sólo avanza con el envío: numerar y enviar
# de a un pedido por vez (el endpoint corre en el threadpool).
_AUTHORIZE_LOCK = threading.Lock()


class AuthorizeInvoicePayload(BaseModel):
    """Atributos del comprobante tal como los envía el cliente."""
    net: Decimal = Field(Decimal("0"), ge=0, description="Importe neto gravado.")
    tax_rate_id: str = Field(..., description="Id de alícuota de IVA (ej. '05' = 21%).")
    buyer_condition: str = Field(..., description="Condición frente al IVA del receptor.")
    invoice_kind: str = "invoice"
    seller_condition: Optional[str] = None
    document_type: Optional[DocumentType] = None
    document_number: int = Field(0, ge=0, description="Número de documento del receptor (0 si no se identifica).")
    currency: Optional[Currency] = None
    concept: Optional[Concept] = None
    due_date: Optional[date] = None
    service_period_start: Optional[date] = None
    service_period_end: Optional[date] = None


def get_settings() -> BillingSettings:
    return config.get_billing_settings()


def get_auth_provider() -> AuthProvider:
    return EnvAuthProvider()


def get_use_case(
    settings: BillingSettings = Depends(get_settings),
    auth_provider: AuthProvider = Depends(get_auth_provider),
) -> AuthorizeInvoiceUseCase:
    adapter = WsfeAdapter(auth_provider, settings, timeout=config.WSFE_TIMEOUT)
    return AuthorizeInvoiceUseCase(
        request_builder=RequestBuilder(settings, numbering=adapter),
        remote_call=adapter,
    )


@router.post("/autorizar", summary="Solicitar CAE para un comprobante")
def authorize_invoice(
    payload: AuthorizeInvoicePayload,
    settings: BillingSettings = Depends(get_settings),
    auth_provider: AuthProvider = Depends(get_auth_provider),
    use_case: AuthorizeInvoiceUseCase = Depends(get_use_case),
):
    """
    Arma el pedido, lo envía al WSFE y devuelve el resultado plano junto
    con el veredicto de autorización. Sin reintentos: un error de
    transporte se informa como 502.
    """
    request = InvoiceRequest.create(settings, auth_provider.credential_block(), **payload.model_dump())
    try:
        with _AUTHORIZE_LOCK:
            result = use_case.execute(request)
    except InvalidAttribute as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (TransportFailure, MalformedResponse) as e:
        raise HTTPException(status_code=502, detail=str(e))

    return {"authorized": result.authorized, "result": result.as_dict()}
