"""
Seguridad a nivel de campo.

Cada campo puede listar permisos por rol. Sin contexto de roles, sin
permisos o sin coincidencias, el acceso es total.
"""

from typing import Iterable, Optional

from nexform.config import FieldAccess
from nexform.models.field import FormField

# Orden de menor a mayor acceso
_ACCESS_RANK = {
    FieldAccess.HIDDEN: 0,
    FieldAccess.READ_ONLY: 1,
    FieldAccess.READ_WRITE: 2,
}


def resolve_access(field: FormField, roles: Optional[Iterable[str]] = None) -> FieldAccess:
    """
    Resuelve el acceso efectivo de un usuario sobre un campo.

    Args:
        field: Campo a evaluar
        roles: IDs de rol del usuario (None = sin restricciones)

    Returns:
        El acceso más permisivo entre los permisos que coinciden
    """
    if roles is None or not field.permissions:
        return FieldAccess.READ_WRITE

    role_set = set(roles)
    matches = [p.access for p in field.permissions if p.role_id in role_set]
    if not matches:
        return FieldAccess.READ_WRITE
    return max(matches, key=lambda a: _ACCESS_RANK[FieldAccess(a)])


def is_hidden_for(field: FormField, roles: Optional[Iterable[str]] = None) -> bool:
    """True si el campo está oculto para esos roles."""
    return resolve_access(field, roles) == FieldAccess.HIDDEN


def is_read_only_for(field: FormField, roles: Optional[Iterable[str]] = None) -> bool:
    """True si el campo no es editable para esos roles (solo lectura u oculto)."""
    return resolve_access(field, roles) != FieldAccess.READ_WRITE
