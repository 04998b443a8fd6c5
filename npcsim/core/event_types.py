"""이벤트 유형 상수

EventBus로 전파되는 시뮬레이션 이벤트.
알림(Notification)과 별개로, 서비스 간 후속 처리에 사용한다.
"""


class EventTypes:
    """이벤트 유형 문자열 상수"""

    # simulation
    TICK_STARTED = "tick_started"
    TICK_COMPLETED = "tick_completed"
    NPC_ACTED = "npc_acted"

    # relationship
    RELATIONSHIP_CHANGED = "relationship_changed"
    TIER_CHANGED = "tier_changed"
    NPC_PAIR_INTERACTED = "npc_pair_interacted"
    REPUTATION_CASCADED = "reputation_cascaded"
    SPECIAL_EVENT_FIRED = "special_event_fired"

    # social actions
    SOCIAL_ACTION_PERFORMED = "social_action_performed"
    SOCIAL_ACTION_REFUSED = "social_action_refused"
    HELP_GRANTED = "help_granted"
    GIFT_REWARDED = "gift_rewarded"
    DUEL_INVITE_ISSUED = "duel_invite_issued"

    # dialogue
    DIALOGUE_REQUESTED = "dialogue_requested"

    # notifications (EventBusSink)
    NOTIFICATION = "notification"
