# app/domain/ports/remote_call.py
from abc import ABC, abstractmethod
from typing import Any, Dict


class RemoteCallAdapter(ABC):
    """Puerto para la llamada de autorización al servicio remoto."""
    @abstractmethod
    def submit(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """
        Envía el pedido armado y retorna la respuesta estructurada.
        Si la llamada no puede completarse lanza `TransportFailure`.
        """
        pass
