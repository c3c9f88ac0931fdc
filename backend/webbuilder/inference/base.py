from abc import ABC, abstractmethod
from typing import Dict, List


class LLMClient(ABC):
    @abstractmethod
    def generate(self, messages: List[Dict[str, str]]) -> str:
        """
        Return the assistant text for a chat-style message array.

        Implementations raise webbuilder.errors.UpstreamError (or a subclass)
        for every transport, status or envelope failure.
        """
        pass
