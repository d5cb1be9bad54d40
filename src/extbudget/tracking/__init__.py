from extbudget.tracking.dedupe import dedupe, join_selectors
from extbudget.tracking.registry import UsageRegistry
from extbudget.tracking.session import ExtSession

__all__ = ["dedupe", "join_selectors", "UsageRegistry", "ExtSession"]
