"""Application configuration loaded from environment variables and .env file."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from npcsim.core.tunables import SocialTunables

MIN_TICK_INTERVAL_SECONDS = 60


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    Simulation tunables use the NPC_ prefix and fall back to
    the SocialTunables defaults when unset.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DATABASE_URL: str = "sqlite:///./dev.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # AI Provider settings
    AI_PROVIDER: str = "mock"
    AI_API_KEY: Optional[str] = None
    AI_MODEL: Optional[str] = None

    # Simulation runtime
    TICK_INTERVAL_SECONDS: int = 60
    SCHEDULER_ENABLED: bool = False
    POPULATION_SIZE: int = 8
    WORLD_SEED: Optional[int] = 42
    PLAYER_ID: str = "player-1"
    PLAYER_NAME: str = "Hero"

    # Relationship thresholds
    NPC_RELATION_KNOWN_THRESHOLD: Optional[float] = None
    NPC_RELATION_FRIEND_THRESHOLD: Optional[float] = None
    NPC_RELATION_BEST_FRIEND_THRESHOLD: Optional[float] = None
    NPC_RELATION_ALLY_THRESHOLD: Optional[float] = None
    NPC_RELATION_RIVAL_THRESHOLD: Optional[float] = None

    # Relationship dynamics
    NPC_RELATION_DECAY_PER_DAY: Optional[float] = None
    NPC_POSITIVE_INTERACTION_WEIGHT: Optional[int] = None
    NPC_NEGATIVE_INTERACTION_WEIGHT: Optional[int] = None
    NPC_RELATION_INTENSITY_PERCENT: Optional[int] = None
    NPC_INTERACTION_COOLDOWN_SECONDS: Optional[int] = None

    # Special events
    NPC_RANDOM_EVENTS_ENABLED: Optional[bool] = None
    NPC_EVENTS_PER_DAY: Optional[int] = None
    NPC_EVENTS_COOLDOWN_DAYS_MIN: Optional[float] = None
    NPC_EVENTS_COOLDOWN_DAYS_MAX: Optional[float] = None
    NPC_RIVAL_ENCOUNTER_CHANCE: Optional[float] = None

    # Duels
    NPC_DUEL_RIVALRY_MODERATE: Optional[float] = None
    NPC_DUEL_RIVALRY_HIGH: Optional[float] = None
    NPC_DUEL_LEVEL_DIFF_MAX: Optional[int] = None
    NPC_INTERACTION_DIFFICULTY: Optional[str] = None

    # Notifications / dialogue flavour
    NPC_NOTIFICATIONS_MODE: Optional[str] = None
    NPC_NOTIFY_MAX_PER_TICK: Optional[int] = None
    NPC_BIOME_LEXICON_ENABLED: Optional[bool] = None
    NPC_DIALOGUE_WHISPER_PROB: Optional[float] = None
    NPC_DIALOGUE_THOUGHT_PROB: Optional[float] = None

    @property
    def tick_interval(self) -> int:
        """Tick interval in seconds, never below one minute."""
        return max(MIN_TICK_INTERVAL_SECONDS, self.TICK_INTERVAL_SECONDS)

    def social_tunables(self) -> SocialTunables:
        """Build SocialTunables from the NPC_* values that are set."""
        return SocialTunables.from_mapping(
            {
                "known_threshold": self.NPC_RELATION_KNOWN_THRESHOLD,
                "friend_threshold": self.NPC_RELATION_FRIEND_THRESHOLD,
                "best_friend_threshold": self.NPC_RELATION_BEST_FRIEND_THRESHOLD,
                "ally_threshold": self.NPC_RELATION_ALLY_THRESHOLD,
                "rival_threshold": self.NPC_RELATION_RIVAL_THRESHOLD,
                "decay_per_day": self.NPC_RELATION_DECAY_PER_DAY,
                "positive_weight": self.NPC_POSITIVE_INTERACTION_WEIGHT,
                "negative_weight": self.NPC_NEGATIVE_INTERACTION_WEIGHT,
                "relation_intensity_percent": self.NPC_RELATION_INTENSITY_PERCENT,
                "interaction_cooldown_seconds": self.NPC_INTERACTION_COOLDOWN_SECONDS,
                "random_events_enabled": self.NPC_RANDOM_EVENTS_ENABLED,
                "events_per_day": self.NPC_EVENTS_PER_DAY,
                "events_cooldown_days_min": self.NPC_EVENTS_COOLDOWN_DAYS_MIN,
                "events_cooldown_days_max": self.NPC_EVENTS_COOLDOWN_DAYS_MAX,
                "rival_encounter_chance": self.NPC_RIVAL_ENCOUNTER_CHANCE,
                "duel_rivalry_moderate": self.NPC_DUEL_RIVALRY_MODERATE,
                "duel_rivalry_high": self.NPC_DUEL_RIVALRY_HIGH,
                "duel_level_diff_max": self.NPC_DUEL_LEVEL_DIFF_MAX,
                "interaction_difficulty": self.NPC_INTERACTION_DIFFICULTY,
                "notifications_mode": self.NPC_NOTIFICATIONS_MODE,
                "notify_max_per_tick": self.NPC_NOTIFY_MAX_PER_TICK,
                "biome_lexicon_enabled": self.NPC_BIOME_LEXICON_ENABLED,
                "dialogue_whisper_prob": self.NPC_DIALOGUE_WHISPER_PROB,
                "dialogue_thought_prob": self.NPC_DIALOGUE_THOUGHT_PROB,
            }
        )


settings = Settings()
