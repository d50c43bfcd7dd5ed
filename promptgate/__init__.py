"""PromptGate: one HTTP endpoint in front of three chat-completion backends."""

__version__ = "0.1.0"
