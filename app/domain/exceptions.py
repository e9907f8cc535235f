# app/domain/exceptions.py


class BillingError(Exception):
    """Error base del flujo de autorización de comprobantes."""


class InvalidAttribute(BillingError):
    """
    Un atributo del comprobante no existe en los datos de referencia.
    `attribute` indica cuál de las claves de búsqueda fue rechazada.
    """
    def __init__(self, attribute: str, value=None, message: str = None):
        self.attribute = attribute
        self.value = value
        super().__init__(message or f"Atributo inválido '{attribute}': {value!r}")


class MissingReferenceData(InvalidAttribute):
    """La alícuota pedida no figura en la tabla de IVA."""
    def __init__(self, attribute: str, value=None):
        super().__init__(attribute, value, f"Sin datos de referencia para '{attribute}': {value!r}")


class TransportFailure(BillingError):
    """La llamada remota al WSFE no pudo completarse."""


class MalformedResponse(BillingError):
    """La respuesta del WSFE no trae los campos esperados."""


class InvoiceAlreadySubmitted(BillingError):
    """Un comprobante sólo puede enviarse a autorizar una vez."""
