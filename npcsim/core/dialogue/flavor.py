"""자유 대사 조립기

원형/말투/관계/장소 단서로 한 단락짜리 대사를 만든다.
텍스트 생성이 불가능할 때 자유 요청의 기본 응답으로 쓴다.
"""

import random
from typing import Dict, List, Tuple

from npcsim.core.npc.models import Agent, Archetype, ChatStyle
from npcsim.core.player.models import Player

FRIENDLY_RELATION = 20
HOSTILE_RELATION = -20

EXCLAMATIONS = (
    "By the gods!",
    "By Merlin's beard!",
    "By all the drakes!",
    "Sky and steel!",
    "What luck!",
    "By Taranis!",
)
COLLOQUIALS = (
    "these passages",
    "these old corridors",
    "this cave",
    "these mines",
    "these ruins",
    "this thick brush",
)
SURVIVAL_TIPS = (
    "check your water and torches",
    "keep shelter within reach",
    "look for marks on the ground",
    "listen for the echo before moving on",
    "tie the rope around your waist",
    "keep your blade sharp",
)
WHISPERS = (
    "wait... I hear footsteps",
    "quiet, something is moving",
    "lights in the distance",
    "a fresh smell of mould",
    "a draft coming from the left",
)
THOUGHTS = (
    "better not underestimate this",
    "this reminds me of an old setback",
    "the map might be wrong",
    "I do not like this silence",
    "I need to see tracks",
)

# (단서 키워드들, 지형 표현들)
BIOME_LEXICON: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (("cave", "grotto"), ("cave", "dark grotto", "rocky crevices")),
    (("ruin",), ("ruins", "ancient courtyard", "broken halls")),
    (("forest", "woods"), ("thick brush", "hidden clearing", "twisted trunks")),
    (("city", "square", "market"), ("alleys", "square columns", "market arcades")),
    (("mountain", "cliff"), ("gorge", "steep slope", "windy cliffs")),
)
ENVIRONMENT_CUES = ("cave", "corridor", "column", "mine", "ruin")

ARCHETYPE_CATCHPHRASES: Dict[Archetype, Tuple[str, ...]] = {
    Archetype.COMPETITIVE: (
        "Nothing like proving your worth",
        "Nobody outdoes us today",
        "Time to climb the ranks",
    ),
    Archetype.COLLABORATIVE: (
        "Together we go further",
        "Share the loot, share the glory",
        "Cover the flank and push forward",
    ),
    Archetype.MERCHANT: (
        "A good deal is half the battle",
        "Weigh the price, weigh the risk",
        "Invest today, profit tomorrow",
    ),
    Archetype.EXPLORER: (
        "Map it, mark it and move on",
        "Feel the wind, read the terrain",
        "Curiosity opens doors",
    ),
    Archetype.SAGE: (
        "Watch for patterns",
        "The mind beats the blade",
        "Knowledge is protection",
    ),
    Archetype.CHAOTIC: (
        "Improvisation beats tactics",
        "If it goes wrong, run",
        "Let's poke this nest",
    ),
}
ARCHETYPE_PREFIX: Dict[Archetype, str] = {
    Archetype.MERCHANT: "Offer:",
    Archetype.COMPETITIVE: "Challenge:",
    Archetype.COLLABORATIVE: "Proposal:",
    Archetype.SAGE: "Advice:",
    Archetype.CHAOTIC: "Idea:",
    Archetype.EXPLORER: "Plan:",
}
CHAT_STYLE_TONE: Dict[ChatStyle, str] = {
    ChatStyle.SARCASTIC: "I say with a half smile",
    ChatStyle.FORMAL: "I say with a firm posture",
    ChatStyle.QUIET: "I say in a low voice",
    ChatStyle.FRIENDLY: "I say with a gleam in my eye",
}


def humanize_memory(summary: str) -> str:
    text = summary.lower()
    if "social_hostile" in text:
        return "the brawl at the tavern"
    if "social_friendly" in text:
        return "that feast at the guild"
    if "social_neutral" in text:
        return "that casual meeting in the square"
    if "mission" in text:
        return "the last mission"
    if "train" in text:
        return "the drill in the yard"
    return "the earlier incident"


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:] if text else text


def _place(context: str, rng: random.Random, biome_lexicon: bool) -> str:
    ctx = context.lower()
    env_cue = any(cue in ctx for cue in ENVIRONMENT_CUES)
    if biome_lexicon:
        for keywords, places in BIOME_LEXICON:
            if any(k in ctx for k in keywords):
                return rng.choice(places)
    return rng.choice(COLLOQUIALS) if env_cue else "this stretch"


def compose_flavor_line(
    agent: Agent,
    player: Player,
    context: str,
    rng: random.Random,
    biome_lexicon: bool = True,
    whisper_prob: float = 0.25,
    thought_prob: float = 0.35,
) -> str:
    agent.ensure_defaults()
    archetype = agent.personality.archetype
    relation = agent.relation_to(player.player_id)
    if relation > FRIENDLY_RELATION:
        tone = "friendly"
        excitement = rng.choice(EXCLAMATIONS)
    elif relation < HOSTILE_RELATION:
        tone = "hostile"
        excitement = "Tsk."
    else:
        tone = "neutral"
        excitement = "Hmm."

    env_cue = any(cue in context.lower() for cue in ENVIRONMENT_CUES)
    place = _place(context, rng, biome_lexicon)
    tip = rng.choice(SURVIVAL_TIPS)
    aside = rng.choice(WHISPERS) if rng.random() < whisper_prob else ""
    thought = rng.choice(THOUGHTS) if rng.random() < thought_prob else ""
    catchphrase = rng.choice(
        ARCHETYPE_CATCHPHRASES.get(archetype, ARCHETYPE_CATCHPHRASES[Archetype.EXPLORER])
    )
    prefix = ARCHETYPE_PREFIX.get(archetype, "Plan:")
    voice = CHAT_STYLE_TONE.get(
        agent.personality.chat_style, CHAT_STYLE_TONE[ChatStyle.FRIENDLY]
    )

    name = _capitalize(player.name or player.player_id)
    lead = f"{excitement} {prefix} {catchphrase}."
    core = (
        f"{name}, grab your gear and {tip}. {voice}: "
        f"{_capitalize(context) if context else 'let us move on'} through {place}."
    )

    parts: List[str] = [f"{name}, {'caution' if env_cue else 'strength'}!"]
    if aside:
        parts.append(f"[whispering] {aside}.")
    if thought:
        parts.append(f"(thinking) {thought}.")
    last = agent.memory.interactions[-1].summary if agent.memory.interactions else ""
    if last:
        parts.append(f"And I do not want to repeat {humanize_memory(last)}.")
    color = " ".join(parts)

    if tone == "hostile":
        return f"{lead} Do not trust appearances. {core} {color}"
    return f"{lead} {core} {color}"
