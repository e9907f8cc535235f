# app/domain/ports/auth_provider.py
from abc import ABC, abstractmethod
from typing import Any, Dict


class AuthProvider(ABC):
    """Puerto para las credenciales del WSFE y el endpoint destino."""
    @abstractmethod
    def credential_block(self) -> Dict[str, Any]:
        """
        Retorna el bloque de autenticación que viaja en cada pedido:
        {'Auth': {'Token': str, 'Sign': str, 'Cuit': int}}
        """
        pass

    @abstractmethod
    def endpoint_url(self) -> str:
        pass
