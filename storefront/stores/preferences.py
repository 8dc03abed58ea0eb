"""Display preferences store (language and currency)."""
from __future__ import annotations

from enum import Enum
from typing import TypeVar

from logging_config import logger
from storefront.core.constants import PREFERENCES_STORAGE_KEY, Currency, Language
from storefront.core.exceptions import ValidationException
from storefront.core.persistence import PersistedRecord
from storefront.core.storage import KeyValueStorage
from storefront.domain.schemas import PreferencesState

EnumT = TypeVar("EnumT", bound=Enum)


def _coerce(enum_cls: type[EnumT], value: EnumT | str) -> EnumT:
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationException(
            f"{value!r} is not a valid {enum_cls.__name__.lower()} (allowed: {allowed})"
        ) from exc


class PreferencesStore:
    """Persisted language/currency selection. Has no effect on cart prices."""

    def __init__(self, storage: KeyValueStorage, key: str = PREFERENCES_STORAGE_KEY):
        self._record = PersistedRecord(storage, key, PreferencesState)
        self._state = self._record.load()

    @property
    def language(self) -> Language:
        return self._state.language

    @property
    def currency(self) -> Currency:
        return self._state.currency

    def rehydrate(self) -> None:
        self._state = self._record.load()

    def set_language(self, language: Language | str) -> None:
        self._state.language = _coerce(Language, language)
        self._record.save(self._state)
        logger.info("Language set to %s", self._state.language.value)

    def set_currency(self, currency: Currency | str) -> None:
        self._state.currency = _coerce(Currency, currency)
        self._record.save(self._state)
        logger.info("Currency set to %s", self._state.currency.value)

    def update(
        self, language: Language | str | None = None, currency: Currency | str | None = None
    ) -> None:
        """Set several preferences at once; nothing changes unless all values are valid."""
        new_language = _coerce(Language, language) if language is not None else self.language
        new_currency = _coerce(Currency, currency) if currency is not None else self.currency
        self._state = PreferencesState(language=new_language, currency=new_currency)
        self._record.save(self._state)
        logger.info("Preferences set to %s/%s", new_language.value, new_currency.value)

    def to_dict(self) -> dict[str, str]:
        return {"language": self.language.value, "currency": self.currency.value}
