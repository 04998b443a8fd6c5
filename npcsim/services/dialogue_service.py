"""대사 요청 Service — 정적 뱅크 선택 + 텍스트 생성 보강

사용자 요청 경로에서만 호출된다 (틱에서는 호출하지 않음).
텍스트 생성 실패/불가 시 항상 뱅크 대사로 돌아간다.
NPC 상태는 lock 안에서 스냅샷을 뜨고, 생성 호출은 lock 밖에서 한다.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from npcsim.core.dialogue.enrichment import (
    ENRICHMENT_MAX_TOKENS,
    ENRICHMENT_TEMPERATURE,
    SYSTEM_MESSAGE,
    build_enrichment_context,
    build_enrichment_prompt,
    parse_generated_lines,
)
from npcsim.core.dialogue.flavor import compose_flavor_line
from npcsim.core.dialogue.models import DialogueTag
from npcsim.core.dialogue.selection import generate_dialogue, generate_mixed
from npcsim.core.event_bus import EventBus, GameEvent
from npcsim.core.event_types import EventTypes
from npcsim.core.logging import get_logger
from npcsim.services.ai.base import AIProvider
from npcsim.services.world import SocialWorld

logger = get_logger(__name__)

SOURCE = "dialogue_service"
SOURCE_BANK = "bank"
SOURCE_AI = "ai"
SOURCE_FLAVOR = "flavor"


@dataclass
class DialogueReply:
    agent_id: str
    lines: List[str] = field(default_factory=list)
    source: str = SOURCE_BANK


class DialogueService:
    """NPC 대사 조회"""

    def __init__(
        self,
        world: SocialWorld,
        event_bus: EventBus,
        ai_provider: Optional[AIProvider] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._world = world
        self._bus = event_bus
        self._ai = ai_provider
        self._clock = clock

    # === 공개 API ===

    def canned_lines(
        self,
        agent_id: str,
        tags: Sequence[DialogueTag] = (),
        limit: int = 3,
        now: Optional[datetime] = None,
    ) -> Optional[List[str]]:
        """뱅크 대사. 태그가 없으면 혼합 선택. NPC가 없으면 None."""
        world = self._world
        with world.lock:
            agent = world.get_agent(agent_id)
            if agent is None or world.player is None:
                return None
            now = now or self._clock()
            if tags:
                return generate_dialogue(agent, world.player, tags, limit, now)
            return generate_mixed(agent, world.player, limit, now)

    def request_dialogue(
        self,
        agent_id: str,
        tags: Sequence[DialogueTag] = (),
        limit: int = 3,
        enrich: bool = True,
        now: Optional[datetime] = None,
    ) -> Optional[DialogueReply]:
        """보강 대사 요청. 생성 결과가 없으면 뱅크 대사."""
        now = now or self._clock()
        canned = self.canned_lines(agent_id, tags, limit, now)
        if canned is None:
            return None

        self._bus.emit(
            GameEvent(
                event_type=EventTypes.DIALOGUE_REQUESTED,
                data={"agent_id": agent_id, "enrich": enrich},
                source=SOURCE,
            )
        )
        reply = DialogueReply(agent_id=agent_id, lines=canned, source=SOURCE_BANK)
        if not enrich or self._ai is None or not self._ai.is_available():
            return reply

        generated = self._generate(agent_id, now)
        if generated:
            reply.lines = generated
            reply.source = SOURCE_AI
        return reply

    def freeform(
        self, agent_id: str, context: str = "", now: Optional[datetime] = None
    ) -> Optional[DialogueReply]:
        """장소/상황 문맥으로 한 단락 대사 조립"""
        world = self._world
        with world.lock:
            agent = world.get_agent(agent_id)
            if agent is None or world.player is None:
                return None
            tunables = world.tunables
            line = compose_flavor_line(
                agent,
                world.player,
                context,
                world.rng,
                biome_lexicon=tunables.biome_lexicon_enabled,
                whisper_prob=tunables.dialogue_whisper_prob,
                thought_prob=tunables.dialogue_thought_prob,
            )
        return DialogueReply(agent_id=agent_id, lines=[line], source=SOURCE_FLAVOR)

    # === 내부 ===

    def _generate(self, agent_id: str, now: datetime) -> List[str]:
        world = self._world
        with world.lock:
            agent = world.get_agent(agent_id)
            if agent is None or world.player is None:
                return []
            context = build_enrichment_context(agent, world.player, now)

        assert self._ai is not None
        try:
            text = self._ai.generate(
                build_enrichment_prompt(context),
                system_prompt=SYSTEM_MESSAGE,
                max_tokens=ENRICHMENT_MAX_TOKENS,
                context={"npc": context.render()},
                temperature=ENRICHMENT_TEMPERATURE,
            )
        except Exception as e:
            logger.warning(f"Dialogue enrichment failed for {agent_id}: {e}")
            return []
        return parse_generated_lines(text)
