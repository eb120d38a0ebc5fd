from pydantic import BaseModel


class AuthPolicy(BaseModel):
    """
    Session and lockout limits.

    - max_sessions: live refresh tokens per user; the oldest is evicted beyond this
    - max_failed_attempts / lockout_duration_minutes: lockout threshold and window
    - max_attempts_per_ip: attempts allowed from one IP per lockout window (0 disables)
    """

    max_sessions: int = 5
    max_failed_attempts: int = 5
    lockout_duration_minutes: int = 15
    refresh_token_days: int = 7
    max_attempts_per_ip: int = 50
    login_attempt_retention_days: int = 30
