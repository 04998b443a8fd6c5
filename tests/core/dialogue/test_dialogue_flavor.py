"""자유 대사 보조 규칙 + 생성 보강 문맥 테스트"""

from npcsim.core.dialogue.enrichment import build_enrichment_context
from npcsim.core.dialogue.flavor import EXCLAMATIONS, compose_flavor_line, humanize_memory
from npcsim.core.npc.memory import record_interaction
from npcsim.core.npc.routine import default_routine

from conftest import FixedRandom, PLAYER_ID, make_agent


class TestComposeFlavorLine:
    def test_friendly_exclamation(self, player):
        line = compose_flavor_line(make_agent(relation=50), player, "", FixedRandom(0.9))
        assert any(line.startswith(e) for e in EXCLAMATIONS)
        assert "Do not trust appearances." not in line

    def test_lexicon_disabled(self, player):
        line = compose_flavor_line(
            make_agent(), player, "forest path", FixedRandom(0.9), biome_lexicon=False
        )
        assert "Forest path through this stretch." in line
        assert "Hero, strength!" in line

    def test_environment_cue_without_lexicon(self, player):
        line = compose_flavor_line(
            make_agent(), player, "old mine", FixedRandom(0.9), biome_lexicon=False
        )
        assert "through this stretch." not in line
        assert "Hero, caution!" in line

    def test_mentions_hostile_memory(self, player, now):
        agent = make_agent()
        record_interaction(agent.memory, PLAYER_ID, "social_hostile", -5, now)
        line = compose_flavor_line(agent, player, "", FixedRandom(0.9))
        assert line.endswith("And I do not want to repeat the brawl at the tavern.")


class TestHumanizeMemory:
    def test_known_summaries(self):
        assert humanize_memory("social_friendly") == "that feast at the guild"
        assert humanize_memory("social_neutral") == "that casual meeting in the square"
        assert humanize_memory("trained hard") == "the drill in the yard"
        assert humanize_memory("???") == "the earlier incident"


class TestEnrichmentContext:
    def test_routine_and_preferences(self, player, now):
        agent = make_agent(relation=12, routine=default_routine())
        agent.memory.preferences["drink"] = "ale"

        context = build_enrichment_context(agent, player, now)

        assert context.activity == "tavern"  # 12시 → tavern 슬롯
        rendered = context.render()
        assert "Relation with hero: 12." in rendered
        assert "Preferences: drink=ale." in rendered
        assert "Recent interactions: none" in rendered
