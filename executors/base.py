from abc import ABC, abstractmethod
from core.command import Command


class BaseExecutor(ABC):
    """
    Base contract for all executors.
    Executors take a Command and return a response dict.
    No routing, no editor access, no side effects here.
    """

    @abstractmethod
    async def execute(self, command: Command) -> dict:
        pass
