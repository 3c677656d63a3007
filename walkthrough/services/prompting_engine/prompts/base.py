"""
Base prompt template class.
"""

from dataclasses import dataclass


@dataclass
class PromptTemplate:
    """
    A prompt template with ``{name}`` placeholders.

    Substitution is literal: each ``{name}`` is replaced by the string form
    of the matching keyword, and every other brace is left alone. Templates
    can therefore embed JSON examples without escaping.

    Usage:
        template = PromptTemplate(
            template="Hello {name}!",
            description="A greeting"
        )
        result = template.format(name="World")
    """
    template: str
    description: str = ""

    def format(self, **kwargs) -> str:
        """Format the template with provided values"""
        text = self.template
        for key, value in kwargs.items():
            text = text.replace("{" + key + "}", str(value))
        return text

    def __str__(self) -> str:
        return f"PromptTemplate({self.description})"
