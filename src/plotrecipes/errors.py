"""
Recipe-specific exceptions and error handling.

Error code ranges:
- E1xx: Transformation errors (malformed recipe definitions)
- E3xx: Backend support errors (raised by generated functions)
- E4xx: Dispatch errors
- E5xx: Evaluation errors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, List
from .ast import SourceSpan


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


@dataclass
class Diagnostic:
    """A single diagnostic message (error, warning, etc.)."""
    code: str                       # E101, E301, etc.
    message: str                    # Human-readable message
    severity: ErrorSeverity
    span: Optional[SourceSpan] = None
    hints: List[str] = field(default_factory=list)

    def format(self) -> str:
        """Format the diagnostic for display."""
        header = f"{self.severity.value}[{self.code}]: {self.message}"
        if self.span is not None:
            header = f"{self.span.start}: {header}"
        parts = [header]
        for hint in self.hints:
            parts.append(f"    = hint: {hint}")
        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        result = {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "hints": self.hints,
        }
        if self.span is not None:
            result["range"] = {
                "start": {"line": self.span.start.line, "column": self.span.start.column},
                "end": {"line": self.span.end.line, "column": self.span.end.column},
            }
        return result


class RecipeError(Exception):
    """Base exception for recipe errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def code(self) -> str:
        return self.diagnostic.code

    def __str__(self) -> str:
        return self.diagnostic.format()


class RecipeSyntaxError(RecipeError):
    """Malformed recipe definition, detected at transformation time (E1xx)."""
    pass


class UnsupportedKeyError(RecipeError):
    """A 'require'-flagged attribute is not supported by the backend (E301)."""

    def __init__(self, diagnostic: Diagnostic, key: str, backend: Optional[str] = None):
        self.key = key
        self.backend = backend
        super().__init__(diagnostic)


class DispatchError(RecipeError):
    """No recipe (or more than one equally specific recipe) matches (E4xx)."""
    pass


class RecipeEvaluationError(RecipeError):
    """Error while evaluating a generated recipe function (E5xx)."""
    pass


def _error(cls, code: str, message: str, span: Optional[SourceSpan] = None,
           hints: Optional[List[str]] = None):
    diag = Diagnostic(
        code=code,
        message=message,
        severity=ErrorSeverity.ERROR,
        span=span,
        hints=hints or [],
    )
    return cls(diag)


# --- Transformation error codes ---

def error_not_call_form(found: str, span: SourceSpan = None) -> RecipeSyntaxError:
    """E101: Signature is not a call expression."""
    return _error(
        RecipeSyntaxError, "E101",
        f"expected recipe signature to be a call expression, found {found}",
        span,
        hints=["write the signature as name(arg::Type, ...; keyword = default)"],
    )


def error_missing_dispatch_args(name: str, span: SourceSpan = None) -> RecipeSyntaxError:
    """E102: Nothing to dispatch on."""
    return _error(
        RecipeSyntaxError, "E102",
        f"recipe '{name}' has no arguments to dispatch on",
        span,
    )


def error_bad_keyword_parameter(found: str, span: SourceSpan = None) -> RecipeSyntaxError:
    """E103: Keyword parameter entry is not name = default."""
    return _error(
        RecipeSyntaxError, "E103",
        f"keyword parameters must be 'name = default', found {found}",
        span,
    )


def error_bad_positional_parameter(found: str, span: SourceSpan = None) -> RecipeSyntaxError:
    """E104: Positional parameter is not a name."""
    return _error(
        RecipeSyntaxError, "E104",
        f"positional parameters must be names, found {found}",
        span,
    )


def error_misplaced_keywords(span: SourceSpan = None) -> RecipeSyntaxError:
    """E105: Keyword sub-list is not first."""
    return _error(
        RecipeSyntaxError, "E105",
        "keyword parameter list must come first in the signature arguments",
        span,
    )


def error_bad_attribute_key(found: str, span: SourceSpan = None) -> RecipeSyntaxError:
    """E106: Attribute key is not a name or symbol."""
    return _error(
        RecipeSyntaxError, "E106",
        f"attribute key must be a name, symbol or string, found {found}",
        span,
    )


def error_bad_series_block(found: str, span: SourceSpan = None) -> RecipeSyntaxError:
    """E107: Series body is not a block."""
    return _error(
        RecipeSyntaxError, "E107",
        f"series body must be a block, found {found}",
        span,
    )


def error_bad_recipe_body(found: str, span: SourceSpan = None) -> RecipeSyntaxError:
    """E108: Recipe body is not a block."""
    return _error(
        RecipeSyntaxError, "E108",
        f"recipe body must be a block, found {found}",
        span,
    )


def error_required_after_optional(name: str, span: SourceSpan = None) -> RecipeSyntaxError:
    """E109: Parameter without a default follows one with a default."""
    return _error(
        RecipeSyntaxError, "E109",
        f"parameter '{name}' has no default but follows a parameter with one",
        span,
        hints=["move parameters with defaults to the end of the positional list"],
    )


# --- Backend error codes ---

def error_unsupported_key(key: str, backend: Optional[str],
                          span: SourceSpan = None) -> UnsupportedKeyError:
    """E301: Required keyword not supported by the backend."""
    message = f"In recipe: required keyword {key} is not supported by backend"
    if backend:
        message = f"{message} {backend}"
    diag = Diagnostic(
        code="E301",
        message=message,
        severity=ErrorSeverity.ERROR,
        span=span,
    )
    return UnsupportedKeyError(diag, key, backend)


# --- Dispatch error codes ---

def error_no_matching_recipe(arg_types: str) -> DispatchError:
    """E401: No recipe accepts the argument types."""
    return _error(DispatchError, "E401", f"no recipe matches argument types ({arg_types})")


def error_ambiguous_recipe(arg_types: str, candidates: List[str]) -> DispatchError:
    """E402: Several recipes match equally well."""
    return _error(
        DispatchError, "E402",
        f"ambiguous recipe for argument types ({arg_types})",
        hints=[f"candidate: {c}" for c in candidates],
    )


# --- Evaluation error codes ---

def error_undefined_name(name: str, span: SourceSpan = None) -> RecipeEvaluationError:
    """E501: Name not bound in scope or namespace."""
    return _error(RecipeEvaluationError, "E501", f"undefined name '{name}'", span)


def error_unresolved_type(name: str, span: SourceSpan = None) -> RecipeEvaluationError:
    """E502: Type name not found in the recipe namespace."""
    return _error(
        RecipeEvaluationError, "E502",
        f"type '{name}' is not defined in the recipe namespace",
        span,
    )


def error_unexpected_node(kind: str, span: SourceSpan = None) -> RecipeEvaluationError:
    """E503: Node kind cannot be evaluated here."""
    return _error(
        RecipeEvaluationError, "E503",
        f"cannot evaluate {kind} here",
        span,
        hints=["attribute statements are only rewritten outside call arguments"],
    )


def error_user(message: Any, span: SourceSpan = None) -> RecipeEvaluationError:
    """E504: error(...) called from a recipe body."""
    return _error(RecipeEvaluationError, "E504", str(message), span)


class DiagnosticCollector:
    """Collects diagnostics from several recipe definitions."""

    def __init__(self, max_errors: int = 20):
        self.diagnostics: List[Diagnostic] = []
        self.max_errors = max_errors
        self._error_count = 0

    def add(self, diagnostic: Diagnostic) -> None:
        """Add a diagnostic."""
        self.diagnostics.append(diagnostic)
        if diagnostic.severity == ErrorSeverity.ERROR:
            self._error_count += 1

    def add_error(self, error: RecipeError) -> None:
        """Add an error exception as a diagnostic."""
        self.add(error.diagnostic)

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def has_errors(self) -> bool:
        return self._error_count > 0

    @property
    def should_stop(self) -> bool:
        """Check if we've hit the max error limit."""
        return self._error_count >= self.max_errors

    def format_all(self) -> str:
        """Format all diagnostics for display."""
        parts = [d.format() for d in self.diagnostics]
        if self._error_count > 0:
            parts.append(f"\n{self._error_count} error(s)")
        return "\n\n".join(parts)

    def to_json(self) -> dict:
        """Convert all diagnostics to JSON format."""
        return {
            "diagnostics": [d.to_json() for d in self.diagnostics],
            "error_count": self._error_count,
        }
