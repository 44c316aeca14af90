"""Per-record-type helper around the generator and resolver.

Gives any record type the ``secure_external_id`` /
``find_by_secure_external_id`` pair without inheritance. The type is
identified by a plain string tag and the identifier by an accessor; the
optional *finder* performs the caller's own lookup.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from operator import attrgetter
from typing import Any, Generic, TypeVar

from pysecureid.exceptions import SecureIdConfigError
from pysecureid.generator import TokenGenerator
from pysecureid.keyring import KeyRing, KeyRingSource
from pysecureid.models.payload import RecordId
from pysecureid.resolver import Clock, TokenResolver

T = TypeVar("T")


class SecureIdBinding(Generic[T]):
    """Issue and resolve tokens for one record type.

    Parameters
    ----------
    model_name : str
        Type tag sealed into every token.
    keyring : KeyRing or KeyRingSource
        Key ring shared by issuing and resolving.
    get_id : callable
        Returns the identifier of a record. Defaults to ``record.id``.
    finder : callable or None
        Loads a record by identifier, returning ``None`` when absent.
        Required for :meth:`find_by_secure_external_id`.
    clock : callable or None
        Passed to :class:`TokenResolver`.
    """

    def __init__(
        self,
        model_name: str,
        keyring: KeyRing | KeyRingSource,
        *,
        get_id: Callable[[T], RecordId] = attrgetter("id"),
        finder: Callable[[RecordId], T | None] | None = None,
        clock: Clock | None = None,
    ) -> None:
        if not model_name:
            raise SecureIdConfigError("model_name must be non-empty")
        self.model_name = model_name
        self._get_id = get_id
        self._finder = finder
        self._generator = TokenGenerator(keyring)
        self._resolver = TokenResolver(keyring, clock=clock)

    @classmethod
    def for_class(
        cls,
        record_cls: type[T],
        keyring: KeyRing | KeyRingSource,
        *,
        finder: Callable[[RecordId], T | None] | None = None,
        id_attr: str = "id",
        clock: Clock | None = None,
    ) -> SecureIdBinding[T]:
        """Binding tagged with ``record_cls.__name__``."""
        return cls(
            record_cls.__name__,
            keyring,
            get_id=attrgetter(id_attr),
            finder=finder,
            clock=clock,
        )

    def secure_external_id(self, record: T, scope: str, expires_at: datetime | None = None) -> str:
        """Token for *record* usable only under *scope*."""
        return self._generator.generate(self.model_name, self._get_id(record), scope, expires_at)

    def resolve_id(self, token: Any, scope: str) -> RecordId | None:
        """Identifier sealed in *token*, or ``None``."""
        return self._resolver.resolve(token, self.model_name, scope)

    def find_by_secure_external_id(self, token: Any, scope: str) -> T | None:
        """Resolve *token* and load the record through the finder."""
        if self._finder is None:
            raise SecureIdConfigError(f"no finder configured for {self.model_name}")
        record_id = self.resolve_id(token, scope)
        if record_id is None:
            return None
        return self._finder(record_id)
