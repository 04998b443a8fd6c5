"""정적 대사 뱅크 (20줄)"""

from typing import Tuple

from npcsim.core.dialogue.models import DialogueLine, DialoguePriority, DialogueTag

T = DialogueTag
P = DialoguePriority


def _line(text, tags, priority, weight, required_relation=None, required_reputation=None):
    return DialogueLine(
        text=text,
        tags=frozenset(tags),
        priority=priority,
        weight=weight,
        required_relation=required_relation,
        required_reputation=required_reputation,
    )


DIALOGUE_BANK: Tuple[DialogueLine, ...] = (
    _line("I heard {npc} has been lurking near the tavern with secrets.", [T.GOSSIP], P.SOCIAL, 3),
    _line("They say a hero beat a cracked golem yesterday.", [T.EVENT], P.PLOT, 4),
    _line("If you need maps, I have a few trustworthy scribbles.", [T.HUMOR, T.EVENT], P.SOCIAL, 2),
    _line("Busy morning: I plan to patrol the ruins.", [T.TIME_MORNING], P.AMBIENT, 2),
    _line("Long night: I nearly became troll food today.", [T.TIME_EVENING], P.AMBIENT, 2),
    _line("The sun festival is coming, we will need torches.", [T.SEASONAL], P.AMBIENT, 1),
    _line(
        "Mission underway? I can cover your flank.",
        [T.GUILD_MISSION],
        P.PLOT,
        3,
        required_relation=20,
    ),
    _line("Watch out for ambushes in the underground market.", [T.WARNING], P.URGENT, 4),
    _line(
        "By Merlin's beard, your name echoed across the city.",
        [T.HUMOR, T.EVENT],
        P.SOCIAL,
        3,
        required_reputation=200,
    ),
    _line("I heard rumours of rivalries in the guild today.", [T.GOSSIP, T.GUILD_MISSION], P.SOCIAL, 2),
    _line("There is an old map pointing to a secret passage.", [T.EVENT], P.PLOT, 3),
    _line("Planning a mission? Splitting the loot first avoids fights.", [T.GUILD_MISSION], P.PLOT, 3),
    _line("Pay me in potions and I will tell you a safe shortcut.", [T.HUMOR, T.EVENT], P.SOCIAL, 2),
    _line("Rain brings witches; go armed into the Umbral Forest.", [T.SEASONAL, T.WARNING], P.PLOT, 3),
    _line("Your bow sings; I heard you hit three bandits.", [T.HUMOR, T.EVENT], P.SOCIAL, 2),
    _line("In the morning the council decides the hard missions.", [T.TIME_MORNING, T.GUILD_MISSION], P.PLOT, 2),
    _line("At night the truth comes out: who failed and who shone.", [T.TIME_EVENING, T.GUILD_MISSION], P.PLOT, 2),
    _line("Want to spread a useful rumour? I know the right person.", [T.GOSSIP], P.SOCIAL, 2),
    _line("I have a lead on a cave full of runic crystals.", [T.EVENT], P.PLOT, 3),
    _line("If you go with rivals, keep an escape plan.", [T.WARNING, T.GUILD_MISSION], P.PLOT, 3),
)
