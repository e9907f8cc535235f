from datetime import date
from typing import Dict, List

import pytest

from app.domain.models.settings import BillingSettings
from app.domain.ports.numbering_provider import NumberingProvider

TODAY = date(2024, 3, 15)

CREDENTIALS = {"Auth": {"Token": "tok", "Sign": "sig", "Cuit": 20123456789}}


class InMemoryNumbering(NumberingProvider):
    """Numeración secuencial por tipo de comprobante, sin WSFE."""
    def __init__(self, last: Dict[str, int] = None):
        self.last = dict(last or {})
        self.calls: List[str] = []

    def next_number(self, invoice_type_code: str) -> int:
        self.calls.append(invoice_type_code)
        self.last[invoice_type_code] = self.last.get(invoice_type_code, 0) + 1
        return self.last[invoice_type_code]


def approved_response(header: str = "A", detail: str = "A", cae: str = "74112345678901") -> dict:
    return {
        "FECAESolicitarResponse": {
            "FECAESolicitarResult": {
                "FeCabResp": {
                    "Cuit": "20123456789",
                    "PtoVta": "3",
                    "CbteTipo": "6",
                    "FchProceso": "20240315101500",
                    "CantReg": "1",
                    "Resultado": header,
                    "Reproceso": "N",
                },
                "FeDetResp": {
                    "FECAEDetResponse": {
                        "Concepto": "1",
                        "DocTipo": "80",
                        "DocNro": "30712345678",
                        "CbteDesde": "8",
                        "CbteHasta": "8",
                        "CbteFch": "20240315",
                        "Resultado": detail,
                        "CAE": cae,
                        "CAEFchVto": "20240325",
                    }
                },
            }
        }
    }


@pytest.fixture
def settings() -> BillingSettings:
    return BillingSettings(sale_point=3)


@pytest.fixture
def numbering() -> InMemoryNumbering:
    return InMemoryNumbering({"06": 7})


@pytest.fixture
def clock():
    return lambda: TODAY


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def credentials() -> dict:
    return {"Auth": dict(CREDENTIALS["Auth"])}


@pytest.fixture
def make_response():
    return approved_response
