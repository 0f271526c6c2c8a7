"""
AgriScan Backend - Abstract Text Completion Interface
======================================================

What:  Contract for services that answer a prompt in a requested language.
How:   Concrete providers subclass TextCompletionService and implement
       generate(). Routes depend on this type only, so tests substitute a
       deterministic fake and never touch the network.
Who:   Called by the /gemini route handler.
"""

from abc import ABC, abstractmethod
from typing import Optional

DEFAULT_LANGUAGE = "English"


class TextCompletionService(ABC):
    """
    Abstract prompt-to-text capability.

    Contract:
        - generate() never raises; every failure is reported as a fixed,
          human-readable answer string
        - the answer is raw model text; HTML formatting happens elsewhere
    """

    @abstractmethod
    async def generate(self, prompt: str, language: Optional[str] = DEFAULT_LANGUAGE) -> str:
        """
        Answer `prompt` in simple `language`.

        Args:
            prompt:   Natural-language instruction from the client.
            language: Answer language; None means DEFAULT_LANGUAGE.

        Returns:
            The model's answer, or a fallback message when the provider is
            not configured, rejects the call, or cannot be reached.
        """
        ...
