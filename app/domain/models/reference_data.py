# app/domain/models/reference_data.py
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, IntEnum
from typing import Dict


class IvaCondition(str, Enum):
    RESPONSABLE_INSCRIPTO = "responsable_inscripto"
    RESPONSABLE_MONOTRIBUTO = "responsable_monotributo"
    CONSUMIDOR_FINAL = "consumidor_final"
    EXENTO = "exento"


class InvoiceKind(str, Enum):
    INVOICE = "invoice"
    DEBIT = "debit"
    CREDIT = "credit"


class Concept(IntEnum):
    # 0 = productos: no lleva período de servicio ni vencimiento de pago
    PRODUCTOS = 0
    SERVICIOS = 1
    PRODUCTOS_Y_SERVICIOS = 2


class DocumentType(str, Enum):
    CUIT = "cuit"
    CUIL = "cuil"
    CDI = "cdi"
    LE = "le"
    LC = "lc"
    CI_EXTRANJERA = "ci_extranjera"
    EN_TRAMITE = "en_tramite"
    ACTA_NACIMIENTO = "acta_nacimiento"
    PASAPORTE = "pasaporte"
    CI_BS_AS_RNP = "ci_bs_as_rnp"
    DNI = "dni"
    OTRO = "otro"


class Currency(str, Enum):
    PESO = "peso"
    DOLAR = "dolar"
    REAL = "real"
    EURO = "euro"
    ORO = "oro"


CONCEPTOS: Dict[Concept, str] = {
    Concept.PRODUCTOS: "01",
    Concept.SERVICIOS: "02",
    Concept.PRODUCTOS_Y_SERVICIOS: "03",
}

DOCUMENTOS: Dict[DocumentType, str] = {
    DocumentType.CUIT: "80",
    DocumentType.CUIL: "86",
    DocumentType.CDI: "87",
    DocumentType.LE: "89",
    DocumentType.LC: "90",
    DocumentType.CI_EXTRANJERA: "91",
    DocumentType.EN_TRAMITE: "92",
    DocumentType.ACTA_NACIMIENTO: "93",
    DocumentType.PASAPORTE: "94",
    DocumentType.CI_BS_AS_RNP: "95",
    DocumentType.DNI: "96",
    DocumentType.OTRO: "99",
}

MONEDAS: Dict[Currency, Dict[str, str]] = {
    Currency.PESO: {"codigo": "PES", "nombre": "Pesos Argentinos"},
    Currency.DOLAR: {"codigo": "DOL", "nombre": "Dolar Estadounidense"},
    Currency.REAL: {"codigo": "012", "nombre": "Real"},
    Currency.EURO: {"codigo": "060", "nombre": "Euro"},
    Currency.ORO: {"codigo": "049", "nombre": "Gramos de Oro Fino"},
}

ALIC_IVA: Dict[str, Decimal] = {
    "03": Decimal("0"),
    "04": Decimal("0.105"),
    "05": Decimal("0.21"),
    "06": Decimal("0.27"),
    "08": Decimal("0.05"),
    "09": Decimal("0.025"),
}

_TIPO_A = {InvoiceKind.INVOICE: "01", InvoiceKind.DEBIT: "02", InvoiceKind.CREDIT: "03"}
_TIPO_B = {InvoiceKind.INVOICE: "06", InvoiceKind.DEBIT: "07", InvoiceKind.CREDIT: "08"}
_TIPO_C = {InvoiceKind.INVOICE: "11", InvoiceKind.DEBIT: "12", InvoiceKind.CREDIT: "13"}

# Condición del emisor -> condición del receptor -> clase de comprobante -> CbteTipo
BILL_TYPE: Dict[IvaCondition, Dict[IvaCondition, Dict[InvoiceKind, str]]] = {
    IvaCondition.RESPONSABLE_INSCRIPTO: {
        IvaCondition.RESPONSABLE_INSCRIPTO: _TIPO_A,
        IvaCondition.CONSUMIDOR_FINAL: _TIPO_B,
        IvaCondition.EXENTO: _TIPO_B,
        IvaCondition.RESPONSABLE_MONOTRIBUTO: _TIPO_B,
    },
    IvaCondition.RESPONSABLE_MONOTRIBUTO: {
        IvaCondition.RESPONSABLE_INSCRIPTO: _TIPO_C,
        IvaCondition.CONSUMIDOR_FINAL: _TIPO_C,
        IvaCondition.EXENTO: _TIPO_C,
        IvaCondition.RESPONSABLE_MONOTRIBUTO: _TIPO_C,
    },
}


@dataclass(frozen=True)
class ReferenceData:
    """Tablas de referencia del WSFE, inmutables durante la vida del proceso."""
    bill_types: Dict[IvaCondition, Dict[IvaCondition, Dict[InvoiceKind, str]]] = field(default_factory=lambda: BILL_TYPE)
    currencies: Dict[Currency, Dict[str, str]] = field(default_factory=lambda: MONEDAS)
    document_types: Dict[DocumentType, str] = field(default_factory=lambda: DOCUMENTOS)
    concepts: Dict[Concept, str] = field(default_factory=lambda: CONCEPTOS)
    tax_rates: Dict[str, Decimal] = field(default_factory=lambda: ALIC_IVA)


DEFAULT_REFERENCE_DATA = ReferenceData()
