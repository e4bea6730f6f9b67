"""
Series block extraction.

A series block

    @series begin
        fillcolor := :green
        rand(10)
    end

becomes a ForkSeries node. At run time it copies the attribute map, runs the
(already rewritten) body against the copy, records (copy, body value) as a
series and evaluates to nothing.
"""

from typing import Callable

from ..ast import AstNode, Block, ForkSeries, SeriesBlock
from ..errors import error_bad_series_block


def extract_series(node: SeriesBlock, rewrite: Callable[[AstNode], AstNode]) -> ForkSeries:
    """
    Rewrite a series block into a fork-and-record node.

    Args:
        node: The series block
        rewrite: The attribute rewriter, applied to the whole body
            (nested blocks included) before the fork node is built

    Raises:
        RecipeSyntaxError: if the series body is not a block
    """
    if not isinstance(node.body, Block):
        raise error_bad_series_block(node.body.kind if isinstance(node.body, AstNode) else "nothing",
                                     node.span)
    body = rewrite(node.body)
    return ForkSeries(body, span=node.span)
