"""
Registry of named AST transformers

Maps names such as 'entity' or 'matcher-minml' to TransformerSpec
records, so the CLI and configuration can name a transformer pipeline
as a list of strings.
"""

from typing import Dict, List, Optional

from ..models.transformers import TransformerCategory, TransformerSpec
from .transform import (
    EntityTransformer,
    MatcherTransformer,
    QuoteTransformer,
    Transformer,
    minmlEscaper,
    numericEscaper,
)


class TransformerRegistry:
    """
    Registry of transformer specifications

    Every get() builds a fresh transformer, so pipelines never share
    transformer state.
    """

    def __init__(self) -> None:
        """Initialize the registry with the built-in transformers"""
        self.specs: Dict[str, TransformerSpec] = {}
        self.builtinTransformers_register()

    def register(self, spec: TransformerSpec) -> None:
        """Register a transformer specification under its name and aliases"""
        self.specs[spec.name] = spec
        for alias in spec.aliases:
            self.specs[alias] = spec

    def spec_get(self, name: str) -> Optional[TransformerSpec]:
        return self.specs.get(name)

    def get(self, name: str) -> Optional[Transformer]:
        """
        Build the transformer registered as name

        Returns:
            A new transformer, or None if name is unknown
        """
        spec = self.spec_get(name)
        if spec is None:
            return None
        return spec.factory()

    def pipeline_build(self, names: List[str]) -> List[Transformer]:
        """
        Build transformers for names, in order

        Raises:
            ValueError: a name is not registered
        """
        transformers: List[Transformer] = []
        for name in names:
            t = self.get(name)
            if t is None:
                raise ValueError(
                    f"unknown transformer '{name}' (known: {', '.join(self.names_list())})"
                )
            transformers.append(t)
        return transformers

    def names_list(self) -> List[str]:
        """Canonical names, without aliases"""
        return sorted({spec.name for spec in self.specs.values()})

    def transformers_listByCategory(self, category: TransformerCategory) -> List[TransformerSpec]:
        """Get all transformer specs in a category"""
        unique = {spec.name: spec for spec in self.specs.values()}
        return [spec for spec in unique.values() if spec.category == category]

    def builtinTransformers_register(self) -> None:
        self.register(TransformerSpec(
            name='entity',
            category=TransformerCategory.SUBSTITUTION,
            description='HTML5 named entities and MinML symbols to literal text',
            factory=EntityTransformer,
            examples=['[amp] → &', '[-->] → →', '[1/2] → ½'],
            aliases=['entities'],
        ))

        self.register(TransformerSpec(
            name='quote',
            category=TransformerCategory.TYPOGRAPHY,
            description="'[...] and \"[...] elements to directed quotation marks",
            factory=QuoteTransformer,
            examples=["'[quote] → ‘quote’", '"[quote] → “quote”'],
            aliases=['quotes'],
        ))

        self.register(TransformerSpec(
            name='matcher',
            category=TransformerCategory.ESCAPING,
            description='Unmatched matchers to numeric references such as [#40]',
            factory=lambda: MatcherTransformer(numericEscaper),
            examples=['a(b → a[#40]b'],
        ))

        self.register(TransformerSpec(
            name='matcher-minml',
            category=TransformerCategory.ESCAPING,
            description='Unmatched matchers to MinML matcher escapes such as [(<)]',
            factory=lambda: MatcherTransformer(minmlEscaper),
            examples=['a(b → a[(<)]b'],
        ))
