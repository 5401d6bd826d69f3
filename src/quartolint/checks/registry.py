"""Rule registry."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from quartolint.exceptions import RuleError
from quartolint.issues import Finding, Issue
from quartolint.log import get_logger


if TYPE_CHECKING:
    from quartolint.common_types import Severity
    from quartolint.context import LintContext


logger = get_logger(__name__)

type RuleFunc = Callable[[LintContext], Iterable[Finding]]


@dataclass(frozen=True)
class Rule:
    """A named check with a default severity."""

    code: str
    severity: Severity
    description: str
    func: RuleFunc

    def run(self, ctx: LintContext, severity: Severity | None = None) -> Iterator[Issue]:
        """Run the check and turn its findings into issues."""
        level = severity or self.severity
        for finding in self.func(ctx):
            yield Issue(
                rule=self.code,
                severity=level,
                message=finding.message,
                path=finding.path,
                line=finding.line,
            )


class RuleRegistry:
    """Ordered collection of rules, keyed by code."""

    def __init__(self):
        self._rules: dict[str, Rule] = {}

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, code: object) -> bool:
        return code in self._rules

    def register(self, rule: Rule) -> Rule:
        if rule.code in self._rules:
            msg = f"Rule {rule.code!r} is already registered"
            raise RuleError(msg)
        self._rules[rule.code] = rule
        return rule

    def rule(
        self, code: str, severity: Severity, description: str
    ) -> Callable[[RuleFunc], RuleFunc]:
        """Decorator registering a function as rule."""

        def decorator(func: RuleFunc) -> RuleFunc:
            self.register(Rule(code, severity, description, func))
            return func

        return decorator

    def get(self, code: str) -> Rule:
        try:
            return self._rules[code]
        except KeyError:
            msg = f"Unknown rule: {code!r}. Available: {', '.join(self._rules)}"
            raise RuleError(msg) from None

    def select(
        self,
        select: Iterable[str] | None = None,
        disable: Iterable[str] = (),
    ) -> list[Rule]:
        """Rules to run, in registration order.

        Raises:
            RuleError: If any code is unknown
        """
        disabled = {self.get(code).code for code in disable}
        chosen = {self.get(code).code for code in select} if select else None
        return [
            r
            for r in self
            if r.code not in disabled and (chosen is None or r.code in chosen)
        ]


registry = RuleRegistry()
rule = registry.rule
