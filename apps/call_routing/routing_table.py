from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging
import threading
import time

from .models import StateAreaCode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoutingRule:
    state: str
    area_codes: Tuple[str, ...]
    extension: Optional[str]

    @property
    def routable(self) -> bool:
        return bool(self.extension)


def parse_area_codes(value) -> Tuple[str, ...]:
    """Split a comma-separated AreaCodes field into trimmed entries"""
    if value is None:
        return ()
    codes = (code.strip() for code in str(value).split(","))
    return tuple(code for code in codes if code)


def build_rule(state, area_codes, extension) -> Optional[RoutingRule]:
    """Turn a stored row into a rule; rows without area codes give None.

    Rows without an extension are kept so they still claim their area codes
    in table order, but they never route.
    """
    codes = parse_area_codes(area_codes)
    if not codes:
        logger.debug(f"Skipping row with missing AreaCodes: State={state}, Extension={extension}")
        return None
    return RoutingRule(
        state="" if state is None else str(state),
        area_codes=codes,
        extension=None if extension is None else (str(extension).strip() or None),
    )


def match_area_code(rules: Iterable[RoutingRule], area_code: str) -> Optional[RoutingRule]:
    """Return the first rule listing area_code exactly, in table order"""
    if not area_code:
        return None
    for rule in rules:
        if area_code in rule.area_codes:
            return rule
    return None


class RoutingTable:
    """Area code lookup over the state_area_codes table.

    Rules are read from the database on every resolve unless cache_seconds
    is positive, in which case a loaded rule set is reused until it is that
    old.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        cache_seconds: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.session_factory = session_factory
        self.cache_seconds = cache_seconds
        self.clock = clock
        self._cached_rules: Optional[List[RoutingRule]] = None
        self._cached_at = 0.0
        self._lock = threading.Lock()

    def load_rules(self) -> List[RoutingRule]:
        """Read every row in table order. Raises SQLAlchemyError on failure."""
        db = self.session_factory()
        try:
            rows = db.execute(
                select(StateAreaCode.state, StateAreaCode.area_codes, StateAreaCode.extension)
            ).all()
        finally:
            db.close()

        rules = []
        for state, area_codes, extension in rows:
            rule = build_rule(state, area_codes, extension)
            if rule is not None:
                rules.append(rule)
        return rules

    def rules(self) -> List[RoutingRule]:
        if self.cache_seconds <= 0:
            return self.load_rules()

        with self._lock:
            now = self.clock()
            if self._cached_rules is None or now - self._cached_at >= self.cache_seconds:
                self._cached_rules = self.load_rules()
                self._cached_at = now
                logger.info(f"Routing table cache refreshed with {len(self._cached_rules)} rules")
            return self._cached_rules

    def invalidate(self) -> None:
        with self._lock:
            self._cached_rules = None

    def resolve(self, area_code: str) -> Optional[RoutingRule]:
        """Find the routing rule for an area code.

        A failed table read is logged and treated as no match so the webhook
        can still answer.
        """
        if not area_code:
            logger.info("No area code extracted, skipping routing lookup")
            return None

        try:
            rules = self.rules()
        except SQLAlchemyError as e:
            logger.error(f"Error querying routing table: {e}")
            return None

        rule = match_area_code(rules, area_code)
        if rule is None:
            logger.info(f"No match found for area code: {area_code}")
        elif not rule.routable:
            logger.warning(f"First row for area code {area_code} has no Extension: State={rule.state}")
            return None
        else:
            logger.info(f"Match found! State: {rule.state}, Extension: {rule.extension}")
        return rule
