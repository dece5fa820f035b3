from abc import ABC, abstractmethod

from src.domain.entities import LoginLog


class AuditSink(ABC):
    """
    Append-only destination for login audit records.

    Callers treat writes as fire-and-forget: a failing sink must never fail
    the operation being audited.
    """

    @abstractmethod
    async def record(self, entry: LoginLog) -> None:
        pass
