"""
Sub-rule registry.

Rules are checked in registration order. At most one rule may claim a
given prefix; overlapping rules are a defect in the rule set and are
reported as AmbiguousSubRuleError instead of silently picking one.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from tssls.lsp.capabilities.style.rules.base import SubRule

if TYPE_CHECKING:
    from tssls.lsp.tss_language_server import TssLanguageServer


class AmbiguousSubRuleError(ValueError):
    """More than one sub-rule matched the same line prefix."""

    def __init__(self, line_prefix: str, rules: list[SubRule]) -> None:
        self.line_prefix = line_prefix
        self.rules = rules
        names = ", ".join(rule.name for rule in rules)
        super().__init__(f"Sub-rules {names} all match {line_prefix!r}")


class SubRuleRegistry:
    """Ordered collection of property value sub-rules."""

    def __init__(self, rules: list[SubRule] | None = None) -> None:
        self._rules: list[SubRule] = list(rules or [])

    @classmethod
    def default(
        cls, server: TssLanguageServer | None = None, language: str = "en"
    ) -> SubRuleRegistry:
        from tssls.lsp.capabilities.style.rules.i18n_rule import I18nRule
        from tssls.lsp.capabilities.style.rules.image_rule import ImageRule

        return cls([I18nRule(server, language=language), ImageRule(server)])

    def register(self, rule: SubRule) -> None:
        self._rules.append(rule)

    @property
    def rules(self) -> list[SubRule]:
        return list(self._rules)

    def get(self, name: str) -> SubRule | None:
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def match(self, line_prefix: str) -> SubRule | None:
        """
        Return the rule claiming `line_prefix`, or None.

        Raises:
            AmbiguousSubRuleError: more than one rule matches.
        """
        matched = [rule for rule in self._rules if rule.matches(line_prefix)]

        if not matched:
            return None
        if len(matched) > 1:
            raise AmbiguousSubRuleError(line_prefix, matched)
        return matched[0]
