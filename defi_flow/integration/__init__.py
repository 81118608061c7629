"""
Collaborator adapters for the pool core (custody, price feed, event sink).
"""

from .custody import InMemoryCustody
from .event_sink import ListEventSink, LoggingEventSink
from .oracle_feed import CallablePriceFeed, StaticPriceFeed

__all__ = [
    "InMemoryCustody",
    "ListEventSink",
    "LoggingEventSink",
    "CallablePriceFeed",
    "StaticPriceFeed",
]
