"""Prompt personas for standup-summary.

A persona owns the system instruction and the prompt template used for
one kind of summary. Only the daily standup persona ships today.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence


class BasePersona(ABC):
    """Base class for summary personas."""

    def __init__(self, name: str, description: str):
        """Initialize the persona.

        Args:
            name: Unique name for the persona
            description: Human-readable description of the persona's style
        """
        self.name = name
        self.description = description

    @abstractmethod
    def get_system_prompt(self) -> str:
        """Get the system prompt that frames the assistant."""

    @abstractmethod
    def get_summary_instructions(self, commits: Sequence[str]) -> str:
        """Build the user prompt for summarizing the given commit messages."""

    def __str__(self) -> str:
        return f"{self.name}: {self.description}"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(name='{self.name}')>"


class StandupPersona(BasePersona):
    """Writes a short daily standup update from commit messages."""

    SYSTEM_PROMPT = (
        "You are an expert at summarizing software development progress for "
        "daily standup meetings. Create concise, clear summaries that highlight "
        "key accomplishments and changes."
    )

    def __init__(self) -> None:
        super().__init__(
            "Standup",
            "Concise, professional daily standup update built from commit messages",
        )

    def get_system_prompt(self) -> str:
        return self.SYSTEM_PROMPT

    def get_summary_instructions(self, commits: Sequence[str]) -> str:
        commit_lines = "\n".join(commits)
        return (
            "Please summarize the following git commits into a concise daily "
            "standup update:\n\n"
            f"{commit_lines}\n\n"
            "Format the summary as a brief, professional update suitable for a "
            "team standup meeting."
        )
