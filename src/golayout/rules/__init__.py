from collections.abc import Iterable

from golayout.core.ports.rule import Rule
from golayout.rules.brace import BraceLineRule
from golayout.rules.defer import DeferPlacementRule
from golayout.rules.separator import SeparatorRule
from golayout.rules.signature import SignatureGapRule

RULES: dict[str, Rule] = {
    rule.name: rule
    for rule in (
        BraceLineRule(),
        DeferPlacementRule(),
        SignatureGapRule(),
        SeparatorRule(),
    )
}


def select_rules(names: Iterable[str] | None = None) -> list[Rule]:
    """Rules matching ``names`` in registry order; every rule when ``names`` is empty."""
    wanted = set(names or ())
    if not wanted:
        return list(RULES.values())
    unknown = wanted - RULES.keys()
    if unknown:
        raise ValueError(f"Unknown rule(s) {sorted(unknown)}. Available: {sorted(RULES)}")
    return [rule for name, rule in RULES.items() if name in wanted]


__all__ = [
    "RULES",
    "BraceLineRule",
    "DeferPlacementRule",
    "Rule",
    "SeparatorRule",
    "SignatureGapRule",
    "select_rules",
]
