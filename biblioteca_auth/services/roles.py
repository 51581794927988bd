"""Role/permission resolution: role id -> display name and ordered permission set."""

from dataclasses import dataclass
from enum import IntEnum


class Role(IntEnum):
    STUDENT = 1
    LIBRARIAN = 2
    ADMIN = 3


# Permission names as clients see them.
VER_CATALOGO = "VER_CATALOGO"
SOLICITAR_PRESTAMO = "SOLICITAR_PRESTAMO"
VER_MIS_PRESTAMOS = "VER_MIS_PRESTAMOS"
APROBAR_PRESTAMO = "APROBAR_PRESTAMO"
GESTIONAR_LIBROS = "GESTIONAR_LIBROS"
VER_TODOS_PRESTAMOS = "VER_TODOS_PRESTAMOS"
GESTIONAR_USUARIOS = "GESTIONAR_USUARIOS"
VER_REPORTES = "VER_REPORTES"

_STUDENT_PERMISSIONS = (VER_CATALOGO, SOLICITAR_PRESTAMO, VER_MIS_PRESTAMOS)
_LIBRARIAN_PERMISSIONS = _STUDENT_PERMISSIONS + (
    APROBAR_PRESTAMO,
    GESTIONAR_LIBROS,
    VER_TODOS_PRESTAMOS,
)
_ADMIN_PERMISSIONS = _LIBRARIAN_PERMISSIONS + (GESTIONAR_USUARIOS, VER_REPORTES)


@dataclass(frozen=True)
class RoleProfile:
    """Display name and permissions for a role. Permission order is part of the contract."""

    display_name: str
    permissions: tuple[str, ...]


ROLE_PROFILES: dict[int, RoleProfile] = {
    Role.STUDENT: RoleProfile("Estudiante", _STUDENT_PERMISSIONS),
    Role.LIBRARIAN: RoleProfile("Bibliotecario", _LIBRARIAN_PERMISSIONS),
    Role.ADMIN: RoleProfile("Admin", _ADMIN_PERMISSIONS),
}

# Unknown role ids get the lowest-privilege profile.
FALLBACK_PROFILE = RoleProfile("Estudiante", (VER_CATALOGO,))


def resolve_role(role_id: int | None) -> RoleProfile:
    """Return the profile for role_id, or FALLBACK_PROFILE when the id is unknown."""
    if role_id is None:
        return FALLBACK_PROFILE
    return ROLE_PROFILES.get(role_id, FALLBACK_PROFILE)


def role_name(role_id: int | None) -> str:
    return resolve_role(role_id).display_name


def permissions_for(role_id: int | None) -> list[str]:
    return list(resolve_role(role_id).permissions)
