"""
labels.py - Human labels for contract addresses

A LabelRegistry lives for one logging session. Labels are only ever added;
an address can hold at most one label, and labeling it twice is a caller
error that fails immediately.
"""

from __future__ import annotations
from typing import Dict, Iterator, Optional, Tuple, Union

from .address import Address
from .core import (
    Contract, DuplicateLabelError,
    SHORTEN_THRESHOLD, SHORTEN_KEEP,
)


Labelable = Union[Contract, Address, str]


def shorten_string(text: str) -> str:
    """Keep the first and last four characters: "EQAb...x9Zk"."""
    if len(text) <= SHORTEN_THRESHOLD:
        return text
    return f"{text[:SHORTEN_KEEP]}...{text[-SHORTEN_KEEP:]}"


def address_key(target: Labelable) -> str:
    """
    Canonical registry key for a contract, an Address or a string.

    Strings that parse as an address (raw or friendly) are normalized to
    the friendly bounceable form; any other string is taken verbatim.
    """
    if isinstance(target, str):
        if Address.is_raw(target) or Address.is_friendly(target):
            return str(Address.parse(target))
        return target
    if isinstance(target, Address):
        return str(target)
    return str(target.address)


class LabelRegistry:
    """
    Mapping from address key to label, in registration order.

    Example:
        registry = LabelRegistry()
        registry.register(str(counter_address), "Counter")
        registry.resolve(str(counter_address))   # "Counter"
        registry.register(str(counter_address), "Other")   # DuplicateLabelError
    """

    def __init__(self):
        self._labels: Dict[str, str] = {}

    def register(self, key: str, label: str) -> None:
        """
        Associate label with key.

        Raises:
            DuplicateLabelError: key already has a label. The existing
                label is left untouched.
        """
        if key in self._labels:
            raise DuplicateLabelError(
                f"The '{key}' contract already has a '{self._labels[key]}' label, "
                f"cannot add '{label}'"
            )
        self._labels[key] = label

    def resolve(self, key: str) -> Optional[str]:
        return self._labels.get(key)

    def label_for(self, address: Address) -> str:
        """Registered label, or the shortened address when there is none."""
        key = str(address)
        return self._labels.get(key) or shorten_string(key)

    def __contains__(self, key: object) -> bool:
        return key in self._labels

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._labels.items()))

    def __repr__(self) -> str:
        return f"LabelRegistry({len(self._labels)} labels)"
