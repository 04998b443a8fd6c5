"""대사 뱅크 선택 / 생성 보강 파싱 / 자유 대사 테스트"""

from datetime import datetime

from conftest import FixedRandom, make_agent

from npcsim.core.dialogue.bank import DIALOGUE_BANK
from npcsim.core.dialogue.enrichment import (
    build_enrichment_context,
    build_enrichment_prompt,
    parse_generated_lines,
)
from npcsim.core.dialogue.flavor import compose_flavor_line, humanize_memory
from npcsim.core.dialogue.models import DialogueLine, DialoguePriority, DialogueTag
from npcsim.core.dialogue.selection import (
    MIXED_POOL_SIZE,
    generate_dialogue,
    generate_mixed,
    score_line,
)
from npcsim.core.npc.memory import record_interaction
from npcsim.core.npc.models import Archetype, ChatStyle, Personality

MORNING = datetime(2024, 5, 1, 8, 0)
AFTERNOON = datetime(2024, 5, 1, 15, 0)
LATE_NIGHT = datetime(2024, 5, 1, 1, 0)

COVER_LINE = "Mission underway? I can cover your flank."
FAME_LINE = "By Merlin's beard, your name echoed across the city."


def _line(tags, priority=DialoguePriority.AMBIENT, weight=1, **kwargs) -> DialogueLine:
    return DialogueLine(
        text="x", tags=frozenset(tags), priority=priority, weight=weight, **kwargs
    )


class TestScoreLine:
    def test_relation_gate(self):
        line = _line([DialogueTag.GUILD_MISSION], required_relation=20)
        assert score_line(line, 19, 0, AFTERNOON) == -1
        assert score_line(line, 20, 0, AFTERNOON) == 1

    def test_zero_is_a_real_requirement(self):
        line = _line([DialogueTag.GOSSIP], required_relation=0)
        assert score_line(line, -1, 0, AFTERNOON) == -1

    def test_reputation_gate(self):
        line = _line([DialogueTag.EVENT], required_reputation=200)
        assert score_line(line, 0, 199, AFTERNOON) == -1
        assert score_line(line, 0, 200, AFTERNOON) == 1

    def test_urgent_bonus(self):
        assert score_line(_line([DialogueTag.WARNING], DialoguePriority.URGENT, 4), 0, 0, AFTERNOON) == 7

    def test_time_bonuses(self):
        morning = _line([DialogueTag.TIME_MORNING], weight=2)
        evening = _line([DialogueTag.TIME_EVENING], weight=2)
        assert score_line(morning, 0, 0, MORNING) == 4
        assert score_line(morning, 0, 0, AFTERNOON) == 2
        assert score_line(evening, 0, 0, LATE_NIGHT) == 4
        assert score_line(evening, 0, 0, AFTERNOON) == 2


class TestGenerateDialogue:
    def test_relation_gated_line(self, player):
        stranger = make_agent(relation=10)
        ally = make_agent(relation=20)
        tags = [DialogueTag.GUILD_MISSION]
        assert COVER_LINE not in generate_dialogue(stranger, player, tags, 10, AFTERNOON)
        assert COVER_LINE in generate_dialogue(ally, player, tags, 10, AFTERNOON)

    def test_reputation_gated_line(self, player):
        agent = make_agent()
        tags = [DialogueTag.HUMOR, DialogueTag.EVENT]
        assert FAME_LINE not in generate_dialogue(agent, player, tags, 10, AFTERNOON)
        player.progression.reputation = 200
        assert FAME_LINE in generate_dialogue(agent, player, tags, 10, AFTERNOON)

    def test_ranking_is_stable(self, player):
        lines = generate_dialogue(make_agent(), player, [DialogueTag.WARNING], 3, AFTERNOON)
        assert lines == [
            "Watch out for ambushes in the underground market.",
            "Rain brings witches; go armed into the Umbral Forest.",
            "If you go with rivals, keep an escape plan.",
        ]

    def test_name_substitution(self, player):
        agent = make_agent(name="Corvin")
        lines = generate_dialogue(agent, player, [DialogueTag.GOSSIP], 1, AFTERNOON)
        assert lines == ["I heard Corvin has been lurking near the tavern with secrets."]

    def test_limit_floor_is_one(self, player):
        assert len(generate_dialogue(make_agent(), player, [DialogueTag.EVENT], 0, AFTERNOON)) == 1

    def test_mixed_pool(self, player):
        agent = make_agent()
        assert len(generate_mixed(agent, player, 3, AFTERNOON)) == 3
        assert len(generate_mixed(agent, player, 50, AFTERNOON)) == MIXED_POOL_SIZE
        assert generate_mixed(agent, player, 0, AFTERNOON) == []

    def test_bank_size(self):
        assert len(DIALOGUE_BANK) == 20


class TestEnrichment:
    def test_parse_strips_prefix_and_blanks(self):
        text = "NPC: Keep your torch lit.\n\n  npc:   Mind the gap.  \nThird line"
        assert parse_generated_lines(text) == ["Keep your torch lit.", "Mind the gap."]

    def test_parse_empty(self):
        assert parse_generated_lines("") == []
        assert parse_generated_lines("NPC:\n   ") == []

    def test_context_and_prompt(self, player, now):
        agent = make_agent(relation=30)
        record_interaction(agent.memory, "player-1", "converse_friendly", 4, now)
        context = build_enrichment_context(agent, player, now)

        assert context.activity == "explore"  # 루틴 없음
        assert context.relation == 30
        assert context.recent_memories == ["converse_friendly"]
        assert "Mood: neutral" in context.render()
        assert "hero" in build_enrichment_prompt(context)


class TestFlavor:
    def test_hostile_tone(self, player):
        agent = make_agent(relation=-30)
        line = compose_flavor_line(agent, player, "market square", FixedRandom(0.9))
        assert line.startswith("Tsk.")
        assert "Do not trust appearances." in line

    def test_neutral_tone(self, player):
        line = compose_flavor_line(make_agent(), player, "", FixedRandom(0.9))
        assert line.startswith("Hmm. Plan:")
        assert "Hero, strength!" in line
        assert "let us move on through this stretch" in line

    def test_archetype_and_style(self, player):
        agent = make_agent(
            personality=Personality(archetype=Archetype.MERCHANT, chat_style=ChatStyle.QUIET)
        )
        line = compose_flavor_line(agent, player, "", FixedRandom(0.9))
        assert "Offer:" in line
        assert "I say in a low voice" in line

    def test_biome_lexicon(self, player):
        line = compose_flavor_line(make_agent(), player, "dark cave", FixedRandom(0.9))
        assert any(p in line for p in ("through cave", "dark grotto", "rocky crevices"))
        assert "Hero, caution!" in line

    def test_whisper_and_thought(self, player, now):
        agent = make_agent()
        record_interaction(agent.memory, agent.agent_id, "mission", 2, now)
        line = compose_flavor_line(agent, player, "", FixedRandom(0.0))
        assert "[whispering]" in line
        assert "(thinking)" in line
        assert "the last mission" in line

    def test_humanize_memory(self):
        assert humanize_memory("social_hostile") == "the brawl at the tavern"
        assert humanize_memory("social_friendly") == "that feast at the guild"
        assert humanize_memory("train") == "the drill in the yard"
        assert humanize_memory("???") == "the earlier incident"
