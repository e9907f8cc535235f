# app/domain/models/settings.py
from pydantic import BaseModel, ConfigDict, Field

from app.domain.models.reference_data import Concept, Currency, DocumentType, IvaCondition


class BillingSettings(BaseModel):
    """
    Configuración del emisor que antes vivía en variables globales.
    Se construye una vez (ver `config.get_billing_settings`) y se pasa
    explícitamente a los servicios que la necesitan.
    """
    sale_point: int = Field(1, ge=1)
    own_iva_condition: IvaCondition = IvaCondition.RESPONSABLE_INSCRIPTO
    default_document_type: DocumentType = DocumentType.CUIT
    default_currency: Currency = Currency.PESO
    default_concept: Concept = Concept.PRODUCTOS

    model_config = ConfigDict(frozen=True)
