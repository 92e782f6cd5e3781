"""Stored payment request as returned by the backend"""

from typing import Any, Optional, Union

from pydantic import BaseModel


class StoredRequest(BaseModel):
    """A previously saved payment request.

    ``plantilla_datos`` holds the form payload, either as the raw JSON string
    kept in the database or already decoded.
    """
    id_solicitud: Optional[int] = None
    plantilla_datos: Optional[Union[str, dict[str, Any]]] = None
    tipo_pago_descripcion: Optional[str] = None
    concepto: Optional[str] = None
    fecha_limite_pago: Optional[str] = None
