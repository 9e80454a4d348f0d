import os
from dataclasses import dataclass


@dataclass(frozen=True)
class MatchSettings:
    # gate airport matches on terminal equality as well as location + time window
    strict_terminal: bool


def load_match_settings() -> MatchSettings:
    return MatchSettings(
        strict_terminal=os.getenv("MATCH_STRICT_TERMINAL", "0") == "1",
    )
