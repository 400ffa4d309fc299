import jwt
from django.conf import settings
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication

from odonto_core.adapters.security.jwt_service import JWTService
from plugins.django_interface.models import User as UserModel


class SimpleUser:
    """
    Representa um usuário mínimo compatível com DRF,
    usando somente os atributos necessários: id, role, clinic_id e is_authenticated.
    """
    def __init__(self, id: str, role: str | None = None, clinic_id: str | None = None):
        self.id = id
        self.role = role
        self.clinic_id = clinic_id
        self.is_authenticated = True

    def __str__(self):
        return f"<SimpleUser id={self.id} role={self.role} clinic_id={self.clinic_id}>"


def _user_from_token(token: str) -> SimpleUser:
    try:
        payload = JWTService.decode_token(token)
    except jwt.PyJWTError as e:
        raise exceptions.AuthenticationFailed(f"Token inválido: {e}")  # noqa: B904

    user_id = payload.get("sub")
    if not user_id:
        raise exceptions.AuthenticationFailed("Token não contém o claim 'sub'.")

    user = UserModel.objects.filter(id=user_id, is_active=True).first()
    if not user:
        raise exceptions.AuthenticationFailed("Usuário não encontrado ou inativo.")

    # papel e clínica do banco prevalecem sobre os claims
    return SimpleUser(
        id=str(user.id),
        role=user.role or payload.get("role"),
        clinic_id=str(user.clinic_id) if user.clinic_id else payload.get("clinic_id"),
    )


class JWTAuthentication(BaseAuthentication):
    """
    Lê o header Authorization: Bearer <token>,
    valida com o JWTService e retorna (user, token).
    """
    def authenticate(self, request):
        header = request.headers.get("Authorization", "")
        parts = header.split()

        if not header or parts[0].lower() != "bearer" or len(parts) != 2:
            return None

        token = parts[1]
        return (_user_from_token(token), token)

    def authenticate_header(self, request):
        return "Bearer"


class CookieJWTAuthentication(BaseAuthentication):
    """
    Em vez de ler do header, busca o token em um cookie (settings.AUTH_COOKIE_NAME).
    """
    def authenticate(self, request):
        token = request.COOKIES.get(settings.AUTH_COOKIE_NAME)
        if not token:
            return None
        return (_user_from_token(token), token)
