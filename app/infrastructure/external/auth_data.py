# app/infrastructure/external/auth_data.py
import os
from typing import Any, Dict

from dotenv import load_dotenv

from app.domain.ports.auth_provider import AuthProvider

load_dotenv()

WSFE_URLS = {
    "homologacion": "https://wswhomo.afip.gov.ar/wsfev1/service.asmx",
    "produccion": "https://servicios1.afip.gov.ar/wsfev1/service.asmx",
}


class EnvAuthProvider(AuthProvider):
    """
    Lee el ticket de acceso (token y sign emitidos por el WSAA) y la CUIT
    del emisor desde variables de entorno.
    """
    def __init__(self):
        self.token = os.getenv("WSFE_TOKEN")
        self.sign = os.getenv("WSFE_SIGN")
        self.cuit = os.getenv("WSFE_CUIT")
        self.environment = os.getenv("WSFE_ENVIRONMENT", "homologacion")
        self.url = os.getenv("WSFE_URL")

        if not all([self.token, self.sign, self.cuit]):
            raise ValueError("Faltan variables de entorno para el WSFE (TOKEN, SIGN, CUIT)")
        if not self.url and self.environment not in WSFE_URLS:
            raise ValueError(f"Entorno de WSFE desconocido: {self.environment}")

    def credential_block(self) -> Dict[str, Any]:
        return {"Auth": {"Token": self.token, "Sign": self.sign, "Cuit": int(self.cuit)}}

    def endpoint_url(self) -> str:
        return self.url or WSFE_URLS[self.environment]
