"""
Request HTTP corrente, acessível fora das views (ex.: handler de exceções).
Preenchida pelo RequestContextMiddleware; fora de uma request vale None.
"""
import contextvars

_request_var: contextvars.ContextVar = contextvars.ContextVar("odonto_request", default=None)


def set_current_request(request) -> contextvars.Token:
    return _request_var.set(request)


def reset_request(token: contextvars.Token) -> None:
    _request_var.reset(token)


def get_current_request():
    return _request_var.get()


def current_user_id() -> str | None:
    """Id do usuário autenticado na request corrente, se houver."""
    user = getattr(get_current_request(), "user", None)
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return str(user.id)
