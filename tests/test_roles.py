"""Unit tests for biblioteca_auth.services.roles: role id to display name and permissions."""

import unittest

from biblioteca_auth.services.roles import (
    FALLBACK_PROFILE,
    ROLE_PROFILES,
    Role,
    permissions_for,
    resolve_role,
    role_name,
)


class TestKnownRoles(unittest.TestCase):
    """Each known role maps to its display name and ordered permissions."""

    def test_student(self) -> None:
        self.assertEqual(role_name(1), "Estudiante")
        self.assertEqual(
            permissions_for(1),
            ["VER_CATALOGO", "SOLICITAR_PRESTAMO", "VER_MIS_PRESTAMOS"],
        )

    def test_librarian_permissions_in_order(self) -> None:
        self.assertEqual(role_name(Role.LIBRARIAN), "Bibliotecario")
        self.assertEqual(
            permissions_for(2),
            [
                "VER_CATALOGO",
                "SOLICITAR_PRESTAMO",
                "VER_MIS_PRESTAMOS",
                "APROBAR_PRESTAMO",
                "GESTIONAR_LIBROS",
                "VER_TODOS_PRESTAMOS",
            ],
        )

    def test_admin_extends_librarian(self) -> None:
        self.assertEqual(role_name(3), "Admin")
        admin = permissions_for(3)
        self.assertEqual(admin[:6], permissions_for(2))
        self.assertEqual(admin[6:], ["GESTIONAR_USUARIOS", "VER_REPORTES"])

    def test_every_role_enum_member_has_a_profile(self) -> None:
        for role in Role:
            self.assertIn(role, ROLE_PROFILES)


class TestUnknownRoles(unittest.TestCase):
    """Unknown role ids fall back to the lowest-privilege profile."""

    def test_role_99_falls_back(self) -> None:
        self.assertEqual(role_name(99), "Estudiante")
        self.assertEqual(permissions_for(99), ["VER_CATALOGO"])

    def test_zero_and_none_fall_back(self) -> None:
        self.assertIs(resolve_role(0), FALLBACK_PROFILE)
        self.assertIs(resolve_role(None), FALLBACK_PROFILE)

    def test_returned_list_is_a_copy(self) -> None:
        perms = permissions_for(99)
        perms.append("VER_REPORTES")
        self.assertEqual(permissions_for(99), ["VER_CATALOGO"])


if __name__ == "__main__":
    unittest.main()
