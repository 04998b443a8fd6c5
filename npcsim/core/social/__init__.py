"""소셜 행동 Core 패키지

핸들러/결투는 하위 모듈(actions, duels, help)에서 직접 import한다.
"""

from npcsim.core.social.models import (
    DuelInvite,
    DuelType,
    GiftCategory,
    HelpStatus,
    HelpStatusKind,
    SocialActionKind,
)

__all__ = [
    "DuelInvite",
    "DuelType",
    "GiftCategory",
    "HelpStatus",
    "HelpStatusKind",
    "SocialActionKind",
]
