# config.py
import os

from dotenv import load_dotenv

from app.domain.models.settings import BillingSettings

load_dotenv()

# --- CONFIGURACIÓN DEL EMISOR ---
# Punto de venta habilitado en AFIP para factura electrónica
SALE_POINT = int(os.getenv("WSFE_SALE_POINT", "1"))

# Condición frente al IVA del emisor
OWN_IVA_CONDITION = os.getenv("WSFE_OWN_IVA_CONDITION", "responsable_inscripto")

# --- VALORES POR DEFECTO DE LOS COMPROBANTES ---
DEFAULT_DOCUMENT_TYPE = os.getenv("WSFE_DEFAULT_DOCUMENT_TYPE", "cuit")
DEFAULT_CURRENCY = os.getenv("WSFE_DEFAULT_CURRENCY", "peso")
DEFAULT_CONCEPT = int(os.getenv("WSFE_DEFAULT_CONCEPT", "0"))

# Timeout en segundos de las llamadas al WSFE
WSFE_TIMEOUT = int(os.getenv("WSFE_TIMEOUT", "60"))


def get_billing_settings() -> BillingSettings:
    return BillingSettings(
        sale_point=SALE_POINT,
        own_iva_condition=OWN_IVA_CONDITION,
        default_document_type=DEFAULT_DOCUMENT_TYPE,
        default_currency=DEFAULT_CURRENCY,
        default_concept=DEFAULT_CONCEPT,
    )

# --- CONFIGURACIÓN DE CORS ---
# Orígenes separados por coma; vacío deshabilita CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
