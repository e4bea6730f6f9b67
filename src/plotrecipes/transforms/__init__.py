"""
Recipe tree transformations.

Provides the transform framework and the recipe body rewrite:
- attribute statements become guarded attribute map operations
- series blocks become fork-and-record nodes

Usage:
    from plotrecipes.transforms import TransformPipeline, RecipeBodyTransform

    pipeline = TransformPipeline()
    pipeline.add(RecipeBodyTransform())

    rewritten = pipeline.apply(definition)
"""

from .base import (
    AstTransform,
    TransformPipeline,
    IdentityTransform,
    replace_children,
)
from .series import extract_series
from .attributes import (
    FLAG_NAMES,
    RecipeFlags,
    RecipeBodyTransform,
    build_attribute_write,
    extract_flags,
    is_flagged_tuple,
    normalize_key,
    rewrite_body,
    rewrite_statement,
)

__all__ = [
    'AstTransform',
    'TransformPipeline',
    'IdentityTransform',
    'replace_children',
    'extract_series',
    'FLAG_NAMES',
    'RecipeFlags',
    'RecipeBodyTransform',
    'build_attribute_write',
    'extract_flags',
    'is_flagged_tuple',
    'normalize_key',
    'rewrite_body',
    'rewrite_statement',
]
