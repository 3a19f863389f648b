from typing import Callable, List, Sequence, Tuple

import pytest

from viberooms_catalog.catalog import Catalog
from viberooms_core.types import (
    SCHEME_AXES,
    Action,
    CatalogItem,
    ContentType,
    EnrichedEvent,
    InteractionEvent,
    SchemeVector,
    VectorScheme,
)
from viberooms_logging.events import RecordingEmitter
from viberooms_session.engine import VibeEngine
from viberooms_user.signals.dwell import enrich_all

# (content_type, action, dwell_ms, timestamp)
Step = Tuple[ContentType, Action, int, int]


def events_from(
    steps: Sequence[Step], context_id: str = "the-last-row"
) -> List[InteractionEvent]:
    return [
        InteractionEvent(
            content_type=ct,
            context_id=context_id,
            action=action,
            dwell_ms=dwell,
            timestamp=ts,
            sequence_index=i,
        )
        for i, (ct, action, dwell, ts) in enumerate(steps)
    ]


def vibe8_vector(**values: float) -> SchemeVector:
    full = {a: 0.0 for a in SCHEME_AXES[VectorScheme.VIBE8]}
    full.update(values)
    return SchemeVector.from_mapping(VectorScheme.VIBE8, full)


@pytest.fixture(name="vibe8")
def vibe8_fixture() -> Callable[..., SchemeVector]:
    return vibe8_vector


@pytest.fixture()
def make_events() -> Callable[..., List[InteractionEvent]]:
    return events_from


@pytest.fixture()
def make_enriched() -> Callable[..., List[EnrichedEvent]]:
    def _make(steps: Sequence[Step], context_id: str = "the-last-row"):
        return enrich_all(events_from(steps, context_id))

    return _make


@pytest.fixture()
def rush_steps() -> List[Step]:
    # three 200 ms skips on images inside two seconds
    return [
        (ContentType.IMAGE, Action.SKIP, 200, 0),
        (ContentType.IMAGE, Action.SKIP, 200, 1_000),
        (ContentType.IMAGE, Action.SKIP, 200, 2_000),
    ]


@pytest.fixture()
def ten_items() -> List[CatalogItem]:
    items = []
    for i in range(10):
        w = i / 10
        items.append(
            CatalogItem(
                id=f"tt{i:07d}",
                title=f"Film {i}",
                vector=vibe8_vector(melancholy=1.0 - w, energy=w, romance=0.3),
                rating=7.0,
                genres=("Drama",) if i % 2 else ("Action",),
            )
        )
    return items


@pytest.fixture()
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture()
def engine(ten_items, emitter) -> VibeEngine:
    return VibeEngine(Catalog(ten_items), events=emitter)
