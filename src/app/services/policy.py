from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


@dataclass(frozen=True)
class EnginePolicy:
    """Tunables of the enforcement engine, resolved once from configuration"""

    timezone: ZoneInfo
    override_cooldown_minutes: int = 30
    override_unlock_minutes: int = 5
    tick_lock_timeout_seconds: float = 2.0

    @classmethod
    def from_config(cls, config) -> "EnginePolicy":
        try:
            tz = ZoneInfo(config.TIMEZONE)
        except ZoneInfoNotFoundError as exc:
            raise ValueError(f"Invalid TIMEZONE: {config.TIMEZONE}") from exc

        if config.OVERRIDE_COOLDOWN_MINUTES < 0:
            raise ValueError("OVERRIDE_COOLDOWN_MINUTES must not be negative")
        if config.OVERRIDE_UNLOCK_MINUTES <= 0:
            raise ValueError("OVERRIDE_UNLOCK_MINUTES must be positive")
        if config.TICK_LOCK_TIMEOUT_SECONDS <= 0:
            raise ValueError("TICK_LOCK_TIMEOUT_SECONDS must be positive")

        return cls(
            timezone=tz,
            override_cooldown_minutes=config.OVERRIDE_COOLDOWN_MINUTES,
            override_unlock_minutes=config.OVERRIDE_UNLOCK_MINUTES,
            tick_lock_timeout_seconds=config.TICK_LOCK_TIMEOUT_SECONDS,
        )
