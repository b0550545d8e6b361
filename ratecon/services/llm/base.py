from abc import ABC, abstractmethod


class VisionLLMService(ABC):
    @abstractmethod
    def generate_text(self, messages: list[dict]) -> str:
        """Send one chat request (text and image parts) and return the raw text reply.

        Raises ExtractionServiceError on non-success responses or empty content.
        """
        ...
