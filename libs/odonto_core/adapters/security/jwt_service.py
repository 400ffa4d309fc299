from datetime import UTC, datetime, timedelta

import jwt
from django.conf import settings


class JWTService:
    """
    Criação e validação de tokens JWT.

    A emissão de tokens pertence ao provedor de sessão externo; `create_token`
    existe para scripts administrativos e testes.
    """

    @staticmethod
    def create_token(
        subject: str,
        expires_in: int,
        role: str,
        clinic_id: str | None = None,
    ) -> str:
        """Gera um token JWT com claim 'sub', role e expiração."""
        now = datetime.now(UTC)
        payload = {
            "sub": str(subject),
            "role": role,
            "iat": now,
            "exp": now + timedelta(seconds=int(expires_in)),
        }
        if clinic_id is not None:
            payload["clinic_id"] = str(clinic_id)

        return jwt.encode(
            payload,
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )

    @staticmethod
    def decode_token(token: str) -> dict:
        """
        Decodifica e valida o token JWT, retornando o payload.
        Lança jwt.PyJWTError se inválido ou expirado.
        """
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
