"""
Tree transformation framework.

Transforms take a recipe definition and return a (possibly modified) one.
They can be composed in a pipeline; the recipe body rewrite is one of them.
"""

from abc import ABC, abstractmethod
from dataclasses import fields
from typing import Callable, List

from ..ast import AstNode, RecipeDefinition


class AstTransform(ABC):
    """
    Base class for tree transformations.

    Transforms are applied to a RecipeDefinition and return a (potentially
    modified) RecipeDefinition. Transforms can be composed in a pipeline.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this transform for debugging."""
        pass

    @abstractmethod
    def transform(self, definition: RecipeDefinition) -> RecipeDefinition:
        """
        Apply this transform to a recipe definition.

        Args:
            definition: The input definition

        Returns:
            The transformed definition (may be the same object)
        """
        pass


def replace_children(node: AstNode, replace: Callable[[AstNode], AstNode]) -> None:
    """
    Replace every direct child of node, in place, with replace(child).

    Children are visited in field order; list fields are updated element
    by element so that statement order is preserved.
    """
    for f in fields(node):
        if f.name == "span":
            continue
        value = getattr(node, f.name)
        if isinstance(value, AstNode):
            setattr(node, f.name, replace(value))
        elif isinstance(value, list):
            for i, item in enumerate(value):
                if isinstance(item, AstNode):
                    value[i] = replace(item)


class TransformPipeline:
    """
    A pipeline of transforms to apply in sequence.
    """

    def __init__(self, transforms: List[AstTransform] = None):
        self.transforms = transforms or []

    def add(self, transform: AstTransform) -> "TransformPipeline":
        """Add a transform to the pipeline."""
        self.transforms.append(transform)
        return self

    def apply(self, definition: RecipeDefinition) -> RecipeDefinition:
        """Apply all transforms in sequence."""
        result = definition
        for transform in self.transforms:
            result = transform.transform(result)
        return result


class IdentityTransform(AstTransform):
    """Identity transform - returns the definition unchanged."""

    @property
    def name(self) -> str:
        return "identity"

    def transform(self, definition: RecipeDefinition) -> RecipeDefinition:
        return definition
