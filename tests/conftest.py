"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sysview.models import EntityRefType, MetaModel  # noqa: E402

# Op markers used throughout the tests
ACTOR_MSG = 1
CHANNEL_SEND = 2
CHANNEL_RCV = 3
JOIN = 4
SCOPE_ENTER = 5


@pytest.fixture(autouse=True)
def no_capabilities_env(monkeypatch):
    """Keep a developer's SYSVIEW_CAPABILITIES out of the tests."""
    monkeypatch.delenv("SYSVIEW_CAPABILITIES", raising=False)


@pytest.fixture
def meta_model():
    """Meta-model with activity, passive entity and dynamic scope endpoints."""
    return MetaModel(
        send_ops={
            ACTOR_MSG: EntityRefType.ACTIVITY,
            CHANNEL_SEND: EntityRefType.PASSIVE_ENTITY,
            SCOPE_ENTER: EntityRefType.DYNAMIC_SCOPE,
        },
        receive_ops={
            CHANNEL_RCV: EntityRefType.PASSIVE_ENTITY,
            JOIN: EntityRefType.ACTIVITY,
        },
    )


@pytest.fixture
def view(meta_model):
    """Create an empty SystemViewData."""
    from sysview.view import SystemViewData

    return SystemViewData(meta_model)


@pytest.fixture
def capabilities():
    """Server capabilities payload as sent by the runtime."""
    return {
        "activities": [{"id": 1, "label": "Actor"}, {"id": 2, "label": "Thread"}],
        "passiveEntities": [{"id": 3, "label": "Channel"}],
        "dynamicScopes": [{"id": 4, "label": "Transaction"}],
        "sendOps": [
            {"marker": 10, "entity": 0, "target": 1, "label": "ActorMessage"},
            {"marker": 11, "entity": 0, "target": 3, "label": "ChannelSend"},
        ],
        "receiveOps": [
            {"marker": 12, "source": 3},
            {"marker": 13, "source": 2},
        ],
    }
