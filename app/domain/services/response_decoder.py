# app/domain/services/response_decoder.py
"""
Decodificación de la respuesta de FECAESolicitar.

Los nombres de campo del WSFE se traducen con tablas fijas: el conjunto de
campos es cerrado, así que cada nombre de salida queda definido acá y no
depende de una conversión genérica de mayúsculas.
"""
from typing import Any, Dict, List, Optional

from app.domain.exceptions import MalformedResponse
from app.domain.models.invoice import InvoiceResult

RESPONSE_HEADER_FIELDS = {
    "Resultado": "header_result",
    "FchProceso": "authorized_on",
}

RESPONSE_DETAIL_FIELDS = {
    "Resultado": "detail_result",
    "CAEFchVto": "cae_due_date",
    "CAE": "cae",
}

REQUEST_HEADER_FIELDS = {
    "CantReg": "cant_reg",
    "PtoVta": "pto_vta",
    "CbteTipo": "cbte_tipo",
}

REQUEST_DETAIL_FIELDS = {
    "Concepto": "concepto",
    "DocTipo": "doc_tipo",
    "DocNro": "doc_num",
    "CbteDesde": "cbte_desde",
    "CbteHasta": "cbte_hasta",
    "CbteFch": "cbte_fch",
    "ImpTotal": "imp_total",
    "ImpTotConc": "imp_tot_conc",
    "ImpNeto": "imp_neto",
    "ImpOpEx": "imp_op_ex",
    "ImpTrib": "imp_trib",
    "ImpIVA": "imp_iva",
    "FchServDesde": "fch_serv_desde",
    "FchServHasta": "fch_serv_hasta",
    "FchVtoPago": "fch_vto_pago",
    "MonId": "moneda",
    "MonCotiz": "cotizacion",
}

IVA_FIELDS = {
    "Id": "iva_id",
    "Importe": "iva_importe",
    "BaseImp": "iva_base_imp",
}

# Campos que el decodificador exige en la respuesta
REQUIRED_RESPONSE_FIELDS = ("Resultado",)


def _path(data: Any, *keys: str, source: str = "respuesta") -> Any:
    current = data
    for key in keys:
        if not isinstance(current, dict) or current.get(key) is None:
            raise MalformedResponse(f"La {source} no contiene '{'/'.join(keys)}'.")
        current = current[key]
    return current


def _first(block: Any) -> Any:
    # CantReg es 1: si el servicio devuelve una lista nos quedamos con el único detalle
    if isinstance(block, list):
        return block[0] if block else None
    return block


def _as_list(block: Any) -> List[Any]:
    if block is None:
        return []
    return block if isinstance(block, list) else [block]


def _rename(source: Dict[str, Any], mapping: Dict[str, str]) -> Dict[str, Any]:
    return {mapping[key]: value for key, value in source.items() if key in mapping}


def _messages(container: Optional[Dict[str, Any]], tag: str) -> List[Dict[str, str]]:
    if not isinstance(container, dict):
        return []
    return [
        {"code": str(item.get("Code")), "msg": item.get("Msg")}
        for item in _as_list(container.get(tag))
        if isinstance(item, dict)
    ]


class ResponseDecoder:
    """Aplana respuesta y pedido enviado en un único `InvoiceResult`."""

    def decode(self, raw_response: Dict[str, Any], echoed_request: Dict[str, Any]) -> InvoiceResult:
        result = _path(raw_response, "FECAESolicitarResponse", "FECAESolicitarResult")
        response_header = _path(result, "FeCabResp")
        if not isinstance(response_header, dict):
            raise MalformedResponse("La respuesta no contiene la cabecera del comprobante.")
        response_detail = _first(_path(result, "FeDetResp", "FECAEDetResponse"))
        if not isinstance(response_detail, dict):
            raise MalformedResponse("La respuesta no contiene el detalle del comprobante.")

        for block, name in ((response_header, "FeCabResp"), (response_detail, "FECAEDetResponse")):
            missing = [f for f in REQUIRED_RESPONSE_FIELDS if block.get(f) is None]
            if missing:
                raise MalformedResponse(f"'{name}' no contiene {', '.join(missing)}.")

        request_header = _path(echoed_request, "FeCAEReq", "FeCabReq", source="solicitud")
        request_detail = _path(echoed_request, "FeCAEReq", "FeDetReq", "FECAEDetRequest", source="solicitud")
        alic_iva = _path(request_detail, "Iva", "AlicIva", source="solicitud")

        decoded = _rename(response_header, RESPONSE_HEADER_FIELDS)
        decoded.update(_rename(response_detail, RESPONSE_DETAIL_FIELDS))
        decoded["observations"] = _messages(response_detail.get("Observaciones"), "Obs")
        decoded["errors"] = _messages(result.get("Errors"), "Err")

        # El bloque Iva anidado no pasa al resultado: sólo sus campos aplanados
        flat = _rename(request_header, REQUEST_HEADER_FIELDS)
        flat.update(_rename(request_detail, REQUEST_DETAIL_FIELDS))
        flat.update(_rename(alic_iva, IVA_FIELDS))
        flat.update(decoded)

        return InvoiceResult(**flat)
