"""Ordered registry of uniquely named rules.

Registration order matters: it is the order in which the World collects
rule proposals each generation.
"""

from typing import Dict, Iterable, Iterator, List, Optional
import logging

from .rule import Rule
from .errors import DuplicateRuleError, UnknownRuleError

logger = logging.getLogger(__name__)


class RulesManager:
    """Registry mapping rule names to rules, in registration order."""

    def __init__(self, rules: Optional[Iterable[Rule]] = None):
        """Create a registry.

        Args:
            rules: Rules to register immediately, in order

        Raises:
            DuplicateRuleError: If two of the initial rules share a name
        """
        self._store: Dict[str, Rule] = {}
        for rule in rules or ():
            self.add(rule)

    def add(self, rule: Rule) -> None:
        """Register a rule at the end of the evaluation order.

        Raises:
            DuplicateRuleError: If a rule with the same name is registered
        """
        if rule.name in self._store:
            raise DuplicateRuleError(rule.name)
        self._store[rule.name] = rule
        logger.debug(f"Registered rule '{rule.name}' ({len(self._store)} active)")

    def remove(self, name: str) -> Rule:
        """Unregister a rule.

        Returns:
            The rule that was removed

        Raises:
            UnknownRuleError: If no rule has that name
        """
        if name not in self._store:
            raise UnknownRuleError(name)
        rule = self._store.pop(name)
        logger.debug(f"Removed rule '{name}' ({len(self._store)} active)")
        return rule

    def has(self, name: str) -> bool:
        return name in self._store

    def get(self, name: str) -> Rule:
        """Look up a rule by name.

        Raises:
            UnknownRuleError: If no rule has that name
        """
        try:
            return self._store[name]
        except KeyError:
            raise UnknownRuleError(name) from None

    def get_all(self) -> List[Rule]:
        """All registered rules in registration order."""
        return list(self._store.values())

    def names(self) -> List[str]:
        return list(self._store)

    def clear(self) -> None:
        self._store.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._store

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.get_all())

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"RulesManager({self.names()})"
