from reversi.config import get_verbose


def log(message: str) -> None:
    if get_verbose():
        print(message)
