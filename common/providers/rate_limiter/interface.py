from abc import ABC, abstractmethod


class RateLimiterInterface(ABC):
    """Paces outgoing calls to the remote endpoint."""

    @abstractmethod
    async def acquire(self) -> None:
        """
        Wait until the next call may be issued.

        One instance is shared by all sessions, so a call waits for grants
        made to any caller, not only its own earlier ones.
        """
        pass
