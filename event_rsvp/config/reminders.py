"""Reminder dispatch configuration.

The dispatcher runs on a fixed cadence and selects events whose start time
falls inside a window around "one hour from now". The window must be wider
than the run interval, otherwise an event can slip between two ticks.
"""

from dataclasses import dataclass, field

from .environment import IS_PRODUCTION_ENVIRONMENT, env_flag, env_int


@dataclass
class ReminderConfig:
    """Reminder scheduling settings.

    Values not passed explicitly are read from the environment:
        REMINDER_INTERVAL_MINUTES: how often the dispatcher runs (default 5)
        REMINDER_WINDOW_START_MINUTES: lower window offset from now (default 55)
        REMINDER_WINDOW_END_MINUTES: upper window offset from now (default 65)
        NOTIFICATION_TIMEOUT_SECONDS: per-attendee gateway timeout (default 10)
        REMINDER_REQUIRE_ALL_DELIVERIES: leave the event unmarked when any delivery fails
        REMINDER_SCHEDULER_ENABLED: start the background scheduler with the API
    """

    interval_minutes: int = field(default_factory=lambda: env_int('REMINDER_INTERVAL_MINUTES', 5))
    window_start_minutes: int = field(default_factory=lambda: env_int('REMINDER_WINDOW_START_MINUTES', 55))
    window_end_minutes: int = field(default_factory=lambda: env_int('REMINDER_WINDOW_END_MINUTES', 65))
    notification_timeout_seconds: float = field(
        default_factory=lambda: float(env_int('NOTIFICATION_TIMEOUT_SECONDS', 10))
    )
    require_all_deliveries: bool = field(
        default_factory=lambda: env_flag('REMINDER_REQUIRE_ALL_DELIVERIES', False)
    )
    scheduler_enabled: bool = field(
        default_factory=lambda: env_flag('REMINDER_SCHEDULER_ENABLED', IS_PRODUCTION_ENVIRONMENT)
    )

    def validate(self) -> bool:
        """Validate the configuration.

        Raises:
            ValueError: If any value is out of range or the window is narrower
                        than the run interval
        """
        if self.interval_minutes < 1:
            raise ValueError("REMINDER_INTERVAL_MINUTES must be at least 1")
        if self.window_start_minutes < 0:
            raise ValueError("REMINDER_WINDOW_START_MINUTES cannot be negative")
        if self.window_end_minutes <= self.window_start_minutes:
            raise ValueError("Reminder window end must be after window start")
        if self.window_end_minutes - self.window_start_minutes < self.interval_minutes:
            raise ValueError(
                "Reminder window must be at least as wide as the run interval, "
                "otherwise events can fall between two runs"
            )
        if self.notification_timeout_seconds <= 0:
            raise ValueError("NOTIFICATION_TIMEOUT_SECONDS must be positive")
        return True
