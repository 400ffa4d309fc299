from dataclasses import fields
from typing import Any, TypeVar

E = TypeVar("E")


class EntityMixin:
    @classmethod
    def from_model(cls: type[E], model: Any, **overrides: Any) -> E:
        """
        Monta a entidade a partir de um model Django: cada campo da dataclass
        é lido do atributo homônimo do model, exceto os passados em `overrides`
        (campos sem correspondente direto, ex.: status do usuário vinculado).
        """
        values = {
            f.name: overrides[f.name] if f.name in overrides else getattr(model, f.name)
            for f in fields(cls)
        }
        return cls(**values)
