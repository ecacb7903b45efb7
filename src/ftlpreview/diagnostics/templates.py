"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostics are created here so exception constructors never build
    their own strings.
    """

    _DOCS_BASE = "https://projectfluent.org/fluent/guide"

    # ------------------------------------------------------------------
    # Runtime references
    # ------------------------------------------------------------------

    @staticmethod
    def message_not_found(message_id: str) -> Diagnostic:
        """Message reference not found in bundle."""
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message=f"Message '{message_id}' not found",
            hint="Check that the resource defining it has been loaded",
            help_url=f"{ErrorTemplate._DOCS_BASE}/messages.html",
        )

    @staticmethod
    def attribute_not_found(attribute: str, message_id: str) -> Diagnostic:
        """Message attribute not found."""
        return Diagnostic(
            code=DiagnosticCode.ATTRIBUTE_NOT_FOUND,
            message=f"Attribute '{attribute}' not found in message '{message_id}'",
            hint=f"Check that message '{message_id}' has an attribute '.{attribute}'",
            help_url=f"{ErrorTemplate._DOCS_BASE}/attributes.html",
        )

    @staticmethod
    def term_not_found(term_id: str) -> Diagnostic:
        """Term reference not found."""
        return Diagnostic(
            code=DiagnosticCode.TERM_NOT_FOUND,
            message=f"Term '-{term_id}' not found",
            hint="Load the branding resource that defines the term",
            help_url=f"{ErrorTemplate._DOCS_BASE}/terms.html",
        )

    @staticmethod
    def term_attribute_not_found(attribute: str, term_id: str) -> Diagnostic:
        """Term attribute not found."""
        return Diagnostic(
            code=DiagnosticCode.TERM_ATTRIBUTE_NOT_FOUND,
            message=f"Attribute '{attribute}' not found in term '-{term_id}'",
            help_url=f"{ErrorTemplate._DOCS_BASE}/terms.html",
        )

    @staticmethod
    def variable_not_provided(variable_name: str) -> Diagnostic:
        """Variable not provided in arguments."""
        return Diagnostic(
            code=DiagnosticCode.VARIABLE_NOT_PROVIDED,
            message=f"Variable '${variable_name}' not provided",
            hint=f"Pass '{variable_name}' in the element's l10n args",
            help_url=f"{ErrorTemplate._DOCS_BASE}/variables.html",
        )

    @staticmethod
    def message_no_value(message_id: str) -> Diagnostic:
        """Message has attributes only and no value."""
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NO_VALUE,
            message=f"Message '{message_id}' has no value",
            hint="Request one of its attributes instead",
        )

    @staticmethod
    def cyclic_reference(resolution_path: Iterable[str]) -> Diagnostic:
        """Message or term references itself, directly or indirectly."""
        path = tuple(resolution_path)
        return Diagnostic(
            code=DiagnosticCode.CYCLIC_REFERENCE,
            message=f"Cyclic reference detected: {' -> '.join(path)}",
            resolution_path=path,
        )

    @staticmethod
    def max_depth_exceeded(max_depth: int) -> Diagnostic:
        """Reference chain nested deeper than the configured limit."""
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=f"Maximum resolution depth ({max_depth}) exceeded",
        )

    @staticmethod
    def no_variants() -> Diagnostic:
        """Select expression has no usable variant."""
        return Diagnostic(
            code=DiagnosticCode.NO_VARIANTS,
            message="No variants in select expression",
        )

    @staticmethod
    def function_not_found(function_name: str) -> Diagnostic:
        """Function call names an unregistered function."""
        return Diagnostic(
            code=DiagnosticCode.FUNCTION_NOT_FOUND,
            message=f"Unknown function: {function_name}()",
            hint="Only NUMBER() is available in previews",
            help_url=f"{ErrorTemplate._DOCS_BASE}/functions.html",
        )

    @staticmethod
    def function_failed(function_name: str, reason: str) -> Diagnostic:
        """Function raised while formatting its argument."""
        return Diagnostic(
            code=DiagnosticCode.FUNCTION_FAILED,
            message=f"Function {function_name}() failed: {reason}",
        )

    # ------------------------------------------------------------------
    # Syntax
    # ------------------------------------------------------------------

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Parser ran past the end of input."""
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=f"Unexpected EOF at position {position}",
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @staticmethod
    def unknown_category(category: str, identifier: str, known: Iterable[str]) -> Diagnostic:
        """Identifier's first segment is not a configured root category."""
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_CATEGORY,
            message=f"Unknown root category '{category}' in '{identifier}'",
            hint=f"Use one of: {', '.join(known)}",
            ftl_location=identifier,
        )

    @staticmethod
    def invalid_identifier(identifier: str, reason: str) -> Diagnostic:
        """Identifier cannot be mapped to a physical path."""
        return Diagnostic(
            code=DiagnosticCode.INVALID_IDENTIFIER,
            message=f"Invalid resource identifier '{identifier}': {reason}",
            hint="Identifiers look like '<category>/<relative/path>.ftl'",
            ftl_location=identifier,
        )

    @staticmethod
    def resource_absent(identifier: str, physical_path: str) -> Diagnostic:
        """Asset provider has no content for a resolved path."""
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_ABSENT,
            message=f"FTL file not found for: {identifier}",
            hint="The load is not cached; it is retried on the next request",
            ftl_location=physical_path,
            severity="warning",
        )

    @staticmethod
    def resource_malformed(identifier: str, junk_count: int) -> Diagnostic:
        """Resource text did not parse cleanly."""
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_MALFORMED,
            message=f"Resource '{identifier}' has {junk_count} unparseable entries",
            hint="The resource was not merged; fix the syntax and reload",
            ftl_location=identifier,
        )

    @staticmethod
    def resource_rejected(identifier: str, reason: str) -> Diagnostic:
        """Parser refused the source outright (size limit)."""
        return Diagnostic(
            code=DiagnosticCode.RESOURCE_MALFORMED,
            message=f"Resource '{identifier}' rejected: {reason}",
            ftl_location=identifier,
        )

    @staticmethod
    def override_target_missing(missing_ids: Iterable[str]) -> Diagnostic:
        """Live override names messages the bundle does not hold."""
        ids = ", ".join(missing_ids)
        return Diagnostic(
            code=DiagnosticCode.OVERRIDE_TARGET_MISSING,
            message=f"Cannot override messages not present in the bundle: {ids}",
            hint="Load the resource that defines them before sending overrides",
        )
