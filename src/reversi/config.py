import os
from dotenv import load_dotenv

from reversi.ai import DEFAULT_SEARCH_DEPTH

load_dotenv()


def get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default

    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(
            f'Environment variable {name} must be an integer, got "{raw}"'
        ) from e


def get_difficulty() -> str:
    return os.getenv("REVERSI_DIFFICULTY", "hard")


def get_search_depth() -> int:
    return get_int("REVERSI_SEARCH_DEPTH", DEFAULT_SEARCH_DEPTH)


def get_think_delay() -> float:
    return get_int("REVERSI_THINK_DELAY_MS", 350) / 1000


def get_verbose() -> bool:
    return os.getenv("REVERSI_VERBOSE", "0") != "0"
