"""결투 초대 발행 (틱마다 1회 판정)"""

import random
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from npcsim.core.notifications import Notification, NotificationType
from npcsim.core.npc.models import Agent
from npcsim.core.player.models import Player
from npcsim.core.relationship.calculations import compute_tier, tier_at_least
from npcsim.core.relationship.models import RelationTier
from npcsim.core.social.models import DuelInvite, DuelType
from npcsim.core.tunables import SocialTunables

TITLE_DUEL = "Duel Challenge"


def _within_level_cap(agent: Agent, player: Player, tunables: SocialTunables) -> bool:
    return abs(agent.level - player.level) <= tunables.duel_level_diff_max


def rivalry_candidates(
    agents: Sequence[Agent], player: Player, tunables: SocialTunables
) -> List[Agent]:
    return [
        a
        for a in agents
        if a.relation_to(player.player_id) <= tunables.duel_rivalry_moderate
        and _within_level_cap(a, player, tunables)
    ]


def friendly_candidates(
    agents: Sequence[Agent], player: Player, tunables: SocialTunables
) -> List[Agent]:
    return [
        a
        for a in agents
        if tier_at_least(
            compute_tier(a.relation_to(player.player_id), tunables), RelationTier.FRIEND
        )
        and _within_level_cap(a, player, tunables)
    ]


def prune_expired_invites(player: Player, now: datetime) -> int:
    before = len(player.duel_invites)
    player.duel_invites = [i for i in player.duel_invites if not i.is_expired(now)]
    return before - len(player.duel_invites)


def _append_invite(
    player: Player,
    agent: Agent,
    duel_type: DuelType,
    now: datetime,
    tunables: SocialTunables,
) -> DuelInvite:
    prune_expired_invites(player, now)
    invite = DuelInvite(
        npc_id=agent.agent_id,
        type=duel_type,
        expires_at=now + timedelta(minutes=tunables.duel_invite_ttl_minutes),
        level_diff=abs(agent.level - player.level),
    )
    player.duel_invites.append(invite)
    return invite


def issue_duel_challenges(
    agents: Sequence[Agent],
    player: Player,
    now: datetime,
    rng: random.Random,
    tunables: SocialTunables,
) -> Optional[Notification]:
    """라이벌 경로 → 실패 시 우호 경로. 초대는 최대 1건.

    라이벌: 관계 ≤ high 이면 honor, 아니면 training.
    우호: friend 이상 NPC가 낮은 확률로 training 초대.
    """
    rivals = rivalry_candidates(agents, player, tunables)
    if rivals and rng.random() < tunables.duel_chance:
        challenger = rng.choice(rivals)
        relation = challenger.relation_to(player.player_id)
        duel_type = (
            DuelType.HONOR if relation <= tunables.duel_rivalry_high else DuelType.TRAINING
        )
    else:
        friends = friendly_candidates(agents, player, tunables)
        if not friends or rng.random() >= tunables.friendly_duel_chance:
            return None
        challenger = rng.choice(friends)
        duel_type = DuelType.TRAINING

    _append_invite(player, challenger, duel_type, now, tunables)
    return Notification(
        type=NotificationType.QUEST,
        title=TITLE_DUEL,
        message=f"{challenger.name} challenged you to a duel ({duel_type.value})",
        icon="⚔️",
        duration=3000,
    )
