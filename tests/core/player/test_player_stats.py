"""플레이어 상호작용 기록 테스트"""

from datetime import datetime, timedelta

from npcsim.core.player.models import DAILY_HISTORY_DAYS, Player


class TestDailyInteractions:
    def test_counts_per_day(self):
        player = Player(player_id="player-1")
        day = datetime(2024, 5, 1, 9, 0)
        player.record_interaction(day)
        player.record_interaction(day + timedelta(hours=3))

        assert player.stats.daily_interactions == {"2024-05-01": 2}
        assert player.stats.last_interaction_at == day + timedelta(hours=3)

    def test_keeps_only_recent_days(self):
        """한 달 내내 기록해도 최근 DAILY_HISTORY_DAYS 일만 남는다"""
        player = Player(player_id="player-1")
        start = datetime(2024, 5, 1, 9, 0)
        for offset in range(30):
            player.record_interaction(start + timedelta(days=offset))

        kept = sorted(player.stats.daily_interactions)
        assert len(kept) == DAILY_HISTORY_DAYS
        assert kept[0] == "2024-05-24"
        assert kept[-1] == "2024-05-30"

    def test_old_loaded_history_is_pruned(self):
        player = Player(player_id="player-1")
        player.stats.daily_interactions = {"2023-12-31": 4, "2024-04-29": 1}
        player.record_interaction(datetime(2024, 5, 1, 9, 0))

        assert player.stats.daily_interactions == {"2024-04-29": 1, "2024-05-01": 1}
