# app/infrastructure/external/wsfe_adapter.py
import logging
from decimal import Decimal
from typing import Any, Dict

import requests
from lxml import etree

from app.domain.exceptions import MalformedResponse, TransportFailure
from app.domain.models.settings import BillingSettings
from app.domain.ports.auth_provider import AuthProvider
from app.domain.ports.numbering_provider import NumberingProvider
from app.domain.ports.remote_call import RemoteCallAdapter

WSFE_NS = "http://ar.gov.afip.dif.FEV1/"
SOAP_NS = "http://schemas.xmlsoap.org/soap/envelope/"


def _format_value(value: Any) -> str:
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def _append(parent, name: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, list):
        for item in value:
            _append(parent, name, item)
        return
    element = etree.SubElement(parent, f"{{{WSFE_NS}}}{name}")
    if isinstance(value, dict):
        for key, child in value.items():
            _append(element, key, child)
    else:
        element.text = _format_value(value)


def _to_dict(element) -> Any:
    """Convierte un elemento XML en dict anidado por nombre local; los hermanos repetidos quedan en lista."""
    children = [child for child in element if isinstance(child.tag, str)]
    if not children:
        return element.text.strip() if element.text and element.text.strip() else None

    data: Dict[str, Any] = {}
    for child in children:
        key = etree.QName(child).localname
        value = _to_dict(child)
        if key in data:
            if not isinstance(data[key], list):
                data[key] = [data[key]]
            data[key].append(value)
        else:
            data[key] = value
    return data


class WsfeAdapter(RemoteCallAdapter, NumberingProvider):
    """
    Adaptador SOAP 1.1 para el WSFEv1 de AFIP. Resuelve tanto el pedido de
    CAE (FECAESolicitar) como la numeración (FECompUltimoAutorizado).
    """
    def __init__(self, auth_provider: AuthProvider, settings: BillingSettings, timeout: int = 60):
        self.auth_provider = auth_provider
        self.settings = settings
        self.url = auth_provider.endpoint_url()
        self.timeout = timeout
        self._parser = etree.XMLParser(resolve_entities=False, no_network=True)

    def _envelope(self, operation: str, body: Dict[str, Any]) -> bytes:
        envelope = etree.Element(f"{{{SOAP_NS}}}Envelope", nsmap={"soap": SOAP_NS, "ar": WSFE_NS})
        soap_body = etree.SubElement(envelope, f"{{{SOAP_NS}}}Body")
        _append(soap_body, operation, body)
        return etree.tostring(envelope, xml_declaration=True, encoding="utf-8")

    def _call(self, operation: str, body: Dict[str, Any]) -> Dict[str, Any]:
        headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": f'"{WSFE_NS}{operation}"',
        }
        logging.info(f"[WSFE] Llamando a {operation} en {self.url}...")
        try:
            response = requests.post(self.url, data=self._envelope(operation, body), headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"[WSFE] Error de red en {operation}: {e}")
            raise TransportFailure(f"No se pudo contactar al WSFE: {e}") from e

        try:
            root = etree.fromstring(response.content, parser=self._parser)
        except etree.XMLSyntaxError as e:
            logging.error(f"[WSFE] Respuesta no XML en {operation} (HTTP {response.status_code}): {response.text[:500]}")
            raise TransportFailure(f"Respuesta inválida del WSFE (HTTP {response.status_code})") from e

        soap_body = root.find(f"{{{SOAP_NS}}}Body")
        payload = [child for child in soap_body if isinstance(child.tag, str)] if soap_body is not None else []
        if not payload:
            raise TransportFailure(f"Respuesta SOAP vacía para {operation}.")

        if etree.QName(payload[0]).localname == "Fault":
            fault = _to_dict(payload[0]) or {}
            message = fault.get("faultstring") if isinstance(fault, dict) else fault
            logging.error(f"[WSFE] SOAP Fault en {operation}: {message}")
            raise TransportFailure(f"SOAP Fault: {message}")

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise TransportFailure(f"Error HTTP del WSFE: {e}") from e

        return {etree.QName(payload[0]).localname: _to_dict(payload[0])}

    def submit(self, document: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("FECAESolicitar", document)

    def next_number(self, invoice_type_code: str) -> int:
        body = dict(self.auth_provider.credential_block())
        body.update({"PtoVta": self.settings.sale_point, "CbteTipo": invoice_type_code})

        response = self._call("FECompUltimoAutorizado", body)
        result = (response.get("FECompUltimoAutorizadoResponse") or {}).get("FECompUltimoAutorizadoResult") or {}

        errors = (result.get("Errors") or {}).get("Err")
        if errors:
            errors = errors if isinstance(errors, list) else [errors]
            detail = "; ".join(f"{e.get('Code')}: {e.get('Msg')}" for e in errors)
            raise TransportFailure(f"El WSFE rechazó la consulta de numeración: {detail}")

        if result.get("CbteNro") is None:
            raise MalformedResponse("FECompUltimoAutorizado no devolvió CbteNro.")
        return int(result["CbteNro"]) + 1
