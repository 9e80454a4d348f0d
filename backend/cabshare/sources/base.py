from abc import ABC, abstractmethod

from cabshare.types import RawRecord


class BaseSource(ABC):
    @abstractmethod
    def fetch_records(self) -> list[RawRecord]:
        """
        Read every configured section and return its rows as RawRecords, in sheet order.
        Raise on upstream failure; never cache between calls.
        """
        raise NotImplementedError
