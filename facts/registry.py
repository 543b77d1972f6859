import logging
from typing import Callable, Dict, List, NamedTuple, Tuple

# local
from common.models import Fact

# read failures a collector may raise; they become empty values
COLLECTION_ERRORS = (OSError, ValueError, IndexError, KeyError)


class FactSource(NamedTuple):
    label: str
    glyph: str
    collector: Callable[[], str]
    identity: bool


class FactRegistry:
    def __init__(self) -> None:
        self.logger = logging.getLogger("FACT_REGISTRY")
        self._registry: Dict[str, FactSource] = {}

    def register(self, label: str, glyph: str, collector: Callable[[], str], identity: bool = False) -> None:
        """Register a fact source under its label, keeping registration order."""
        self._registry[label] = FactSource(label, glyph, collector, identity)
        self.logger.debug(f"{collector.__name__} registered in FactRegistry as {label}")

    def get_labels(self) -> list:
        """Return the labels of the listed (non-identity) facts in display order."""
        return [source.label for source in self._registry.values() if not source.identity]

    def collect_one(self, label: str) -> Fact:
        source = self._registry[label]
        try:
            value = source.collector() or ""
        except COLLECTION_ERRORS as e:
            self.logger.debug(f"Collecting {label} failed, using empty value: {e}")
            value = ""
        return Fact(label=source.label, glyph=source.glyph, value=value.strip())

    def collect(self) -> Tuple[Tuple[Fact, Fact], List[Fact]]:
        """
        Runs every registered collector once.

        :return: ((user, host), facts) where facts keeps registration order.
        """
        identity = [self.collect_one(s.label) for s in self._registry.values() if s.identity]
        if len(identity) != 2:
            raise ValueError(f"Expected exactly two identity facts, found {len(identity)}")
        facts = [self.collect_one(label) for label in self.get_labels()]
        self.logger.info(f"Collected {len(facts)} facts for {identity[0].value}@{identity[1].value}")
        return (identity[0], identity[1]), facts

    def __iter__(self):
        return iter(self._registry.values())


fact_registry = FactRegistry()


def register_fact(label: str, glyph: str, identity: bool = False) -> Callable:
    """Decorator to register a fact collector."""
    def decorator(func: Callable[[], str]) -> Callable[[], str]:
        fact_registry.register(label, glyph, func, identity=identity)
        return func
    return decorator
