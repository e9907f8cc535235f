# app/domain/ports/numbering_provider.py
from abc import ABC, abstractmethod


class NumberingProvider(ABC):
    """Puerto para obtener el próximo número de comprobante."""
    @abstractmethod
    def next_number(self, invoice_type_code: str) -> int:
        """
        Retorna el siguiente número secuencial para el tipo de comprobante.
        Debe ser creciente y sin huecos ni duplicados en uso secuencial.
        """
        pass
