"""
Key Conventions

Turns a flat batch of environment-style variables into configuration keys:

- ``__`` in a variable name is a nesting separator and becomes ``:``
- Azure App Service connection-string prefixes (``SQLCONNSTR_`` and friends)
  move the variable under ``ConnectionStrings:<name>``, optionally with a
  ``ConnectionStrings:<name>_ProviderName`` companion entry
- an optional prefix filter keeps only matching keys and strips the prefix

See https://learn.microsoft.com/azure/app-service/reference-app-settings#variable-prefixes

Author: registry_env Project
License: MIT
"""

from dataclasses import dataclass
from collections.abc import MutableMapping
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple


KEY_DELIMITER = ":"
NESTING_SEPARATOR = "__"
CONNECTION_STRINGS_SECTION = "ConnectionStrings"
PROVIDER_NAME_SUFFIX = "_ProviderName"


@dataclass(frozen=True)
class PrefixRule:
    """A connection-string variable prefix and the provider name it implies."""
    prefix: str
    provider_name: Optional[str] = None
    section: str = CONNECTION_STRINGS_SECTION


# Scanned in order, first match wins. The prefixes do not overlap.
CONNECTION_STRING_RULES: Tuple[PrefixRule, ...] = (
    PrefixRule("MYSQLCONNSTR_", "MySql.Data.MySqlClient"),
    PrefixRule("SQLAZURECONNSTR_", "System.Data.SqlClient"),
    PrefixRule("SQLCONNSTR_", "System.Data.SqlClient"),
    PrefixRule("POSTGRESQLCONNSTR_", "Npgsql"),
    PrefixRule("APIHUBCONNSTR_"),
    PrefixRule("DOCDBCONNSTR_"),
    PrefixRule("EVENTHUBCONNSTR_"),
    PrefixRule("NOTIFICATIONHUBCONNSTR_"),
    PrefixRule("REDISCACHECONNSTR_"),
    PrefixRule("SERVICEBUSCONNSTR_"),
    PrefixRule("CUSTOMCONNSTR_"),
)


def fold_case(value: str) -> str:
    """
    Ordinal case-insensitive form of ``value``.

    Each character is upper-cased on its own and kept as-is when its upper
    case is more than one character, so ``"straße"`` and ``"STRASSE"`` stay
    distinct and the folded string keeps the original length.
    """
    return "".join(
        upper if len(upper) == 1 else char
        for char, upper in ((c, c.upper()) for c in value)
    )


def starts_with_ignore_case(value: str, prefix: str) -> bool:
    """Case-insensitive ``str.startswith``."""
    if len(value) < len(prefix):
        return False
    return fold_case(value[:len(prefix)]) == fold_case(prefix)


def normalize(key: str) -> str:
    """Replace every ``__`` with the ``:`` key delimiter."""
    return key.replace(NESTING_SEPARATOR, KEY_DELIMITER)


def classify(
    key: str,
    rules: Iterable[PrefixRule] = CONNECTION_STRING_RULES
) -> Optional[Tuple[PrefixRule, str]]:
    """
    Match a raw variable name against the connection-string prefix table.

    Args:
        key: Raw variable name
        rules: Ordered prefix rules

    Returns:
        ``(rule, remainder)`` for the first matching rule, or None.
        A name equal to a prefix matches with an empty remainder.
    """
    for rule in rules:
        if starts_with_ignore_case(key, rule.prefix):
            return rule, key[len(rule.prefix):]
    return None


class CaseInsensitiveDict(MutableMapping):
    """
    Dict with case-insensitive string keys.

    The casing of the most recent write is the one reported when iterating.
    """

    def __init__(self, data: Optional[Mapping[str, Optional[str]]] = None, **kwargs):
        self._store: Dict[str, Tuple[str, Optional[str]]] = {}
        if data is not None:
            self.update(data)
        self.update(kwargs)

    def __setitem__(self, key: str, value: Optional[str]) -> None:
        self._store[fold_case(key)] = (key, value)

    def __getitem__(self, key: str) -> Optional[str]:
        return self._store[fold_case(key)][1]

    def __delitem__(self, key: str) -> None:
        del self._store[fold_case(key)]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key) -> bool:
        return isinstance(key, str) and fold_case(key) in self._store

    def copy(self) -> "CaseInsensitiveDict":
        return CaseInsensitiveDict(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"


def _add_if_matches_prefix(
    data: CaseInsensitiveDict,
    normalized_prefix: str,
    normalized_key: str,
    value: Optional[str]
) -> None:
    if starts_with_ignore_case(normalized_key, normalized_prefix):
        data[normalized_key[len(normalized_prefix):]] = value


def build_config_map(
    entries: Iterable[Tuple[str, Optional[str]]],
    normalized_prefix: str = "",
    rules: Iterable[PrefixRule] = CONNECTION_STRING_RULES
) -> CaseInsensitiveDict:
    """
    Transform raw variables into a ConfigMap.

    Args:
        entries: ``(name, value)`` pairs; a value may be None
        normalized_prefix: Already-normalized prefix filter ("" keeps everything)
        rules: Connection-string prefix rules

    Returns:
        New case-insensitive mapping of configuration keys to values
    """
    rules = tuple(rules)
    data = CaseInsensitiveDict()

    for key, value in entries:
        match = classify(key, rules)
        if match is None:
            _add_if_matches_prefix(data, normalized_prefix, normalize(key), value)
            continue

        rule, remainder = match
        name = f"{rule.section}{KEY_DELIMITER}{normalize(remainder)}"
        _add_if_matches_prefix(data, normalized_prefix, name, value)
        if rule.provider_name is not None:
            _add_if_matches_prefix(
                data, normalized_prefix, name + PROVIDER_NAME_SUFFIX, rule.provider_name
            )

    return data
