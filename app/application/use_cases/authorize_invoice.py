# app/application/use_cases/authorize_invoice.py
import logging

from app.domain.exceptions import InvoiceAlreadySubmitted
from app.domain.models.invoice import InvoiceRequest, InvoiceResult
from app.domain.ports.remote_call import RemoteCallAdapter
from app.domain.services.request_builder import RequestBuilder
from app.domain.services.response_decoder import ResponseDecoder


class AuthorizeInvoiceUseCase:
    def __init__(
        self,
        request_builder: RequestBuilder,
        remote_call: RemoteCallAdapter,
        response_decoder: ResponseDecoder = None,
    ):
        self.request_builder = request_builder
        self.remote_call = remote_call
        self.response_decoder = response_decoder or ResponseDecoder()

    def execute(self, request: InvoiceRequest) -> InvoiceResult:
        """
        Orquesta la autorización de un comprobante: arma el pedido, lo envía
        al WSFE y decodifica la respuesta. No hay reintentos; cualquier error
        se propaga al llamador y no se expone un resultado parcial.
        """
        if request.submitted:
            raise InvoiceAlreadySubmitted("El comprobante ya fue enviado a autorizar.")

        try:
            document = self.request_builder.build(request)
            request.mark_submitted()
            tag = f"{document['FeCAEReq']['FeCabReq']['CbteTipo']}-{request.invoice_number}"

            logging.info(f"[{tag}] Enviando pedido de CAE al WSFE...")
            raw_response = self.remote_call.submit(document)

            result = self.response_decoder.decode(raw_response, document)
            if result.authorized:
                logging.info(f"[{tag}] Comprobante autorizado. CAE {result.cae} vence {result.cae_due_date}.")
            else:
                logging.warning(
                    f"[{tag}] Comprobante NO autorizado "
                    f"(cabecera={result.header_result}, detalle={result.detail_result}). "
                    f"Observaciones: {result.observations} Errores: {result.errors}"
                )
            return result
        except Exception:
            logging.error("Falló la autorización del comprobante.", exc_info=True)
            raise

    def authorize(self, request: InvoiceRequest) -> bool:
        return self.execute(request).authorized
