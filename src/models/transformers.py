"""
Transformer specification and metadata models

Describes the AST transformers the registry can build by name, for
the CLI's --transformers option and for listing them.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, List


class TransformerCategory(Enum):
    """
    Categories of AST transformers

    Used for organization and listing.
    """
    SUBSTITUTION = "substitution"    # [amp], [--] to text
    TYPOGRAPHY = "typography"        # '[...] to directed quotes
    ESCAPING = "escaping"            # unmatched matchers to references


@dataclass
class TransformerSpec:
    """
    Specification for a named transformer

    Attributes:
        name: Registry name (e.g., 'entity')
        category: Category for organization
        description: Human-readable description
        factory: Zero-argument callable returning a new transformer
        examples: Example input and effect strings
        aliases: Alternative names
    """
    name: str
    category: TransformerCategory
    description: str
    factory: Callable[[], Any]
    examples: List[str] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)

    def matches(self, name: str) -> bool:
        """True if name is this spec's name or one of its aliases"""
        return name == self.name or name in self.aliases
