# app/domain/services/request_builder.py
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from app.domain.exceptions import MissingReferenceData
from app.domain.models.invoice import InvoiceRequest
from app.domain.models.reference_data import DEFAULT_REFERENCE_DATA, Concept, ReferenceData
from app.domain.models.settings import BillingSettings
from app.domain.ports.numbering_provider import NumberingProvider
from app.domain.services.invoice_type_resolver import InvoiceTypeResolver
from app.domain.services.tax_calculator import TaxCalculator

DATE_FORMAT = "%Y%m%d"
ZERO = Decimal("0.00")
IVA_ID = "5"


def _lookup(table: Dict, key, attribute: str):
    if key not in table:
        raise MissingReferenceData(attribute, key)
    return table[key]


class RequestBuilder:
    """
    Arma el documento completo de FECAESolicitar a partir de un
    `InvoiceRequest`. Cada llamada a `build` consume un número de
    comprobante, por lo que no es idempotente.
    """
    def __init__(
        self,
        settings: BillingSettings,
        numbering: NumberingProvider,
        reference: ReferenceData = DEFAULT_REFERENCE_DATA,
        clock: Optional[Callable[[], date]] = None,
    ):
        self.settings = settings
        self.numbering = numbering
        self.reference = reference
        self.resolver = InvoiceTypeResolver(reference)
        self.calculator = TaxCalculator(reference)
        self._clock = clock or date.today

    def header(self, invoice_type_code: str) -> Dict[str, Any]:
        return {"CantReg": "1", "PtoVta": self.settings.sale_point, "CbteTipo": invoice_type_code}

    def build(self, request: InvoiceRequest) -> Dict[str, Any]:
        today = self._clock()
        cbte_fch = today.strftime(DATE_FORMAT)

        invoice_type_code = self.resolver.resolve(
            request.seller_condition, request.buyer_condition, request.invoice_kind
        )
        iva_sum = self.calculator.tax_amount(request.net, request.tax_rate_id)
        total = self.calculator.total(request.net, iva_sum)

        concepto = _lookup(self.reference.concepts, request.concept, "concept")
        doc_tipo = _lookup(self.reference.document_types, request.document_type, "document_type")
        moneda = _lookup(self.reference.currencies, request.currency, "currency")

        # La numeración va al final: un atributo inválido no consume número
        number = self.numbering.next_number(invoice_type_code)
        request.invoice_number = number
        logging.info(f"[WSFE] Comprobante tipo {invoice_type_code} N° {number} (PtoVta {self.settings.sale_point}).")

        # El WSFE valida el orden de los elementos del detalle
        detail = {
            "Concepto": concepto,
            "DocTipo": doc_tipo,
            "DocNro": request.document_number,
            "CbteDesde": number,
            "CbteHasta": number,
            "CbteFch": cbte_fch,
            "ImpTotal": total,
            "ImpTotConc": ZERO,
            "ImpNeto": request.net,
            "ImpOpEx": ZERO,
            "ImpTrib": ZERO,
            "ImpIVA": iva_sum,
        }

        if request.concept != Concept.PRODUCTOS:
            request.service_period_start = request.service_period_start or today
            request.service_period_end = request.service_period_end or today
            request.due_date = request.due_date or today
            detail.update({
                "FchServDesde": request.service_period_start.strftime(DATE_FORMAT),
                "FchServHasta": request.service_period_end.strftime(DATE_FORMAT),
                "FchVtoPago": request.due_date.strftime(DATE_FORMAT),
            })

        detail.update({
            "MonId": moneda["codigo"],
            "MonCotiz": 1,
            "Iva": {"AlicIva": {"Id": IVA_ID, "BaseImp": request.net, "Importe": iva_sum}},
        })

        document = dict(request.credential_block)
        document["FeCAEReq"] = {
            "FeCabReq": self.header(invoice_type_code),
            "FeDetReq": {"FECAEDetRequest": detail},
        }
        return document
