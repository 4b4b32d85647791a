"""Client-side navigation target used by auth flows."""

import logging

logger = logging.getLogger(__name__)

HOME_PATH = "/"
LOGIN_PATH = "/auth/login"


class Navigator:
    """Tracks the current location and the paths visited."""

    def __init__(self, initial_path: str = HOME_PATH) -> None:
        self.current_path = initial_path
        self.history: list[str] = [initial_path]

    def push(self, path: str) -> None:
        logger.debug(f"Navigating to {path}", extra={"from_path": self.current_path})
        self.current_path = path
        self.history.append(path)
