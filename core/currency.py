"""
currency.py
------------
Payment-method classification layer.

Maps a free-text payment-method label to a CurrencyClass. The set of
local-currency labels is supplied by the caller, so labs with a different
payment vocabulary only need a config change.

Anything not in the table, including an empty label, is base currency.
This is a permissive default, not a validation gate.
"""

from typing import Any, Iterable

from core.models import CurrencyClass


def normalize_method(method: Any) -> str:
    """Trims and case-folds a method label. Non-strings normalize to ''."""
    if not isinstance(method, str):
        return ""
    return method.strip().casefold()


class CurrencyClassifier:
    """
    Lookup from payment-method label → CurrencyClass.

    Built once from an explicit list of local-currency labels. Immutable
    after construction and safe to share between callers.
    """

    def __init__(self, local_currency_methods: Iterable[str]):
        self._local_methods = frozenset(
            normalized
            for normalized in (normalize_method(m) for m in local_currency_methods)
            if normalized
        )

    @classmethod
    def from_config(cls) -> "CurrencyClassifier":
        """Builds a classifier from the local_currency_methods config block."""
        from config.config_loader import get_local_currency_methods

        return cls(get_local_currency_methods())

    def __len__(self) -> int:
        return len(self._local_methods)

    @property
    def local_currency_methods(self) -> frozenset[str]:
        return self._local_methods

    def classify(self, method: Any) -> CurrencyClass:
        if normalize_method(method) in self._local_methods:
            return CurrencyClass.LOCAL
        return CurrencyClass.BASE

    def is_local_currency_method(self, method: Any) -> bool:
        """Shortcut: True if the label is denominated in local currency."""
        return self.classify(method) is CurrencyClass.LOCAL
