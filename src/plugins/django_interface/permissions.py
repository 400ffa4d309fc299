from rest_framework.permissions import SAFE_METHODS, BasePermission

from odonto_core.core.application.dtos.requester_dto import SCHEDULING_ROLES, UserRole


def _role(request) -> str | None:
    return getattr(request.user, "role", None) if request.user else None


class IsClinicUser(BasePermission):
    """Qualquer usuário autenticado vinculado a uma clínica."""

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and getattr(request.user, "clinic_id", None)
            and _role(request) in set(UserRole)
        )


class CanManageSchedule(IsClinicUser):
    """Leitura para qualquer papel da clínica; escrita só OWNER/ADMIN/RECEPTIONIST."""

    def has_permission(self, request, view):
        if not super().has_permission(request, view):
            return False
        return request.method in SAFE_METHODS or _role(request) in SCHEDULING_ROLES
