"""DialogueService 테스트 (뱅크 / 텍스트 생성 보강 / 자유 대사)"""

import random
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from npcsim.core.dialogue.models import DialogueTag
from npcsim.core.event_bus import EventBus
from npcsim.core.event_types import EventTypes
from npcsim.core.npc.models import Agent
from npcsim.core.player.models import Player
from npcsim.services.ai import MockProvider
from npcsim.services.ai.base import AIProvider
from npcsim.services.dialogue_service import DialogueService
from npcsim.services.world import SocialWorld

NOW = datetime(2024, 5, 1, 15, 0)


def _world() -> SocialWorld:
    return SocialWorld(
        agents=[Agent(agent_id="npc-001", name="Corvin")],
        player=Player(player_id="player-1", name="hero"),
        rng=random.Random(1),
    )


def _failing_provider() -> MagicMock:
    provider = MagicMock(spec=AIProvider)
    provider.is_available.return_value = True
    provider.generate.side_effect = RuntimeError("quota exceeded")
    return provider


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


class TestCannedLines:
    def test_tagged_lines(self, bus):
        service = DialogueService(_world(), bus)
        lines = service.canned_lines("npc-001", [DialogueTag.GOSSIP], 1, NOW)
        assert lines == ["I heard Corvin has been lurking near the tavern with secrets."]

    def test_mixed_lines(self, bus):
        service = DialogueService(_world(), bus)
        assert len(service.canned_lines("npc-001", limit=3, now=NOW)) == 3

    def test_unknown_agent(self, bus):
        service = DialogueService(_world(), bus)
        assert service.canned_lines("npc-404") is None
        assert service.request_dialogue("npc-404") is None
        assert service.freeform("npc-404", "cave") is None


class TestRequestDialogue:
    def test_generated_lines(self, bus):
        service = DialogueService(_world(), bus, MockProvider(), clock=lambda: NOW)
        reply = service.request_dialogue("npc-001")

        assert reply.source == "ai"
        assert len(reply.lines) == 2
        assert all(line.startswith("[Mock]") for line in reply.lines)

    def test_provider_failure_falls_back_to_bank(self, bus):
        service = DialogueService(_world(), bus, _failing_provider(), clock=lambda: NOW)
        reply = service.request_dialogue("npc-001", [DialogueTag.WARNING])

        assert reply.source == "bank"
        assert reply.lines[0] == "Watch out for ambushes in the underground market."

    def test_unavailable_provider(self, bus):
        provider = MagicMock(spec=AIProvider)
        provider.is_available.return_value = False
        service = DialogueService(_world(), bus, provider, clock=lambda: NOW)

        assert service.request_dialogue("npc-001").source == "bank"
        provider.generate.assert_not_called()

    def test_enrich_disabled(self, bus):
        provider = MagicMock(spec=AIProvider)
        service = DialogueService(_world(), bus, provider, clock=lambda: NOW)
        assert service.request_dialogue("npc-001", enrich=False).source == "bank"
        provider.generate.assert_not_called()

    def test_generation_request_shape(self, bus):
        provider = MagicMock(spec=AIProvider)
        provider.is_available.return_value = True
        provider.generate.return_value = "NPC: Hold the line."
        service = DialogueService(_world(), bus, provider, clock=lambda: NOW)

        reply = service.request_dialogue("npc-001")

        assert reply.lines == ["Hold the line."]
        kwargs = provider.generate.call_args.kwargs
        assert kwargs["max_tokens"] == 120
        assert kwargs["temperature"] == 0.8
        assert "Mood:" in kwargs["context"]["npc"]

    def test_emits_dialogue_requested(self, bus):
        received = []
        bus.subscribe(EventTypes.DIALOGUE_REQUESTED, lambda e: received.append(e.data))
        DialogueService(_world(), bus).request_dialogue("npc-001", enrich=False)
        assert received == [{"agent_id": "npc-001", "enrich": False}]


class TestFreeform:
    def test_flavor_line(self, bus):
        reply = DialogueService(_world(), bus).freeform("npc-001", "old ruins")
        assert reply.source == "flavor"
        assert len(reply.lines) == 1
        assert "Hero" in reply.lines[0]
