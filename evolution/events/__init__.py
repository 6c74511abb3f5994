"""Domain events and the synchronous bus that delivers them."""

from evolution.events.event_bus import EventBus
from evolution.events.events import (
    CorrelationDiscoveredEvent,
    DayEndedEvent,
    FoodClaimedEvent,
    MilestoneAchievedEvent,
    OrganismBornEvent,
    OrganismDiedEvent,
    SpeciesExtinctEvent,
    SpeciesFoundedEvent,
    StatisticsPublishedEvent,
)

__all__ = [
    "CorrelationDiscoveredEvent",
    "DayEndedEvent",
    "EventBus",
    "FoodClaimedEvent",
    "MilestoneAchievedEvent",
    "OrganismBornEvent",
    "OrganismDiedEvent",
    "SpeciesExtinctEvent",
    "SpeciesFoundedEvent",
    "StatisticsPublishedEvent",
]
