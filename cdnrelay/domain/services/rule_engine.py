"""Domain service classifying asset filenames into delivery attributes."""

from typing import Iterable, List, Tuple

from cdnrelay.domain.entities.manifest import DeliveryAttributes, DeliveryMode, Rule

DEFAULT_RULES: Tuple[Rule, ...] = (
    Rule(pattern=r"\.js$", critical=True, mode=DeliveryMode.DEFER, priority=1),
    Rule(pattern=r"\.css$", critical=True, mode=DeliveryMode.SYNC, priority=1),
    Rule(
        pattern=r"\.(png|jpe?g|gif)$",
        critical=False,
        mode=DeliveryMode.SYNC,
        priority=2,
    ),
    Rule(pattern=r"\.html$", critical=True, mode=DeliveryMode.SYNC, priority=1),
)


class RuleEngine:
    """First-match classification over an ordered rule list."""

    def __init__(self, rules: Iterable[Rule] = DEFAULT_RULES) -> None:
        self._rules: List[Rule] = list(rules)

    @property
    def rules(self) -> List[Rule]:
        return list(self._rules)

    def classify(self, filename: str) -> DeliveryAttributes:
        for rule in self._rules:
            if rule.matches(filename):
                return rule.to_attributes()
        return DeliveryAttributes()
