# shopfront/domain/permissions.py
import enum


class Permission(str, enum.Enum):
    """Zamknieta lista uprawnien - sprawdzane przez przeciecie zbiorow."""

    ADMIN = "ADMIN"
    USER = "USER"
    ITEMCREATE = "ITEMCREATE"
    ITEMUPDATE = "ITEMUPDATE"
    ITEMDELETE = "ITEMDELETE"
    PERMISSIONUPDATE = "PERMISSIONUPDATE"


DEFAULT_PERMISSIONS = (Permission.USER,)


def normalize_permissions(values) -> list[Permission]:
    """Usuwa duplikaty z zachowaniem kolejnosci; nieznana wartosc -> ValueError."""
    result: list[Permission] = []
    for value in values:
        perm = Permission(value)
        if perm not in result:
            result.append(perm)
    return result
