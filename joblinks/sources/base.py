"""Abstract base class for link sources."""

from abc import ABC, abstractmethod

from joblinks.core.schemas import CandidateLink, JobSource


class LinkSource(ABC):
    """Base class that every candidate-link source must implement."""

    @property
    @abstractmethod
    def source_id(self) -> JobSource:
        """Source tag recorded on links from this source (e.g. 'gmail')."""

    @abstractmethod
    async def fetch_links(self) -> list[CandidateLink]:
        """Return raw (unclassified, undeduplicated) candidate links."""
