"""Pattern resolver - turns message ASTs into display strings.

The active pseudo transform is applied here, to each TextElement as it is
read. Placeable results (variables, string literals, formatted numbers)
are never transformed, so a preview never mangles data.

Errors are collected and returned alongside a best-effort string;
resolution never raises to the caller.

Python 3.13+. Depends on Babel for plural rules and NUMBER().
"""

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from babel import Locale
from babel.numbers import format_decimal

from ftlpreview.constants import (
    FALLBACK_FUNCTION_ERROR,
    FALLBACK_INVALID,
    FALLBACK_MISSING_MESSAGE,
    FALLBACK_MISSING_TERM,
    FALLBACK_MISSING_VARIABLE,
    MAX_DEPTH,
)
from ftlpreview.diagnostics import (
    ErrorTemplate,
    FluentReferenceError,
    FluentResolutionError,
    FtlPreviewError,
)
from ftlpreview.syntax import (
    Expression,
    FunctionReference,
    Message,
    MessageReference,
    NumberLiteral,
    Pattern,
    Placeable,
    SelectExpression,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    VariableReference,
    Variant,
)

__all__ = [
    "FluentNumber",
    "FluentValue",
    "PatternResolver",
    "ResolutionContext",
    "number_format",
]

type FluentValue = str | int | float | Decimal | FluentNumber | None

# Unicode bidirectional isolation characters per Unicode TR9.
UNICODE_FSI: str = "\u2068"  # U+2068 FIRST STRONG ISOLATE
UNICODE_PDI: str = "\u2069"  # U+2069 POP DIRECTIONAL ISOLATE

# FTL camelCase option -> number_format keyword.
_NUMBER_OPTIONS = {
    "minimumFractionDigits": "minimum_fraction_digits",
    "maximumFractionDigits": "maximum_fraction_digits",
    "useGrouping": "use_grouping",
}


@dataclass(frozen=True, slots=True)
class FluentNumber:
    """Formatted number that still selects variants by its numeric value."""

    value: int | float | Decimal
    formatted: str

    def __str__(self) -> str:
        return self.formatted


def number_format(
    value: int | float | Decimal,
    locale: Locale,
    *,
    minimum_fraction_digits: int = 0,
    maximum_fraction_digits: int = 3,
    use_grouping: bool = True,
) -> FluentNumber:
    """Format a number with the locale's CLDR separators.

    Example:
        >>> number_format(1234.5, Locale.parse("en_US"), minimum_fraction_digits=2).formatted
        '1,234.50'
    """
    integer = "#,##0" if use_grouping else "0"
    maximum = max(maximum_fraction_digits, minimum_fraction_digits)
    fraction = "0" * minimum_fraction_digits + "#" * (maximum - minimum_fraction_digits)
    pattern = f"{integer}.{fraction}" if fraction else integer
    return FluentNumber(value=value, formatted=format_decimal(value, format=pattern, locale=locale))


def _is_finite(number: int | float | Decimal) -> bool:
    """CLDR plural operands exist only for finite numbers."""
    if isinstance(number, Decimal):
        return number.is_finite()
    return math.isfinite(number)


@dataclass(slots=True)
class ResolutionContext:
    """Per-call resolution state.

    Attributes:
        stack: Keys of the messages/terms being resolved (cycle detection)
        max_depth: Maximum reference depth
    """

    stack: list[str] = field(default_factory=list)
    max_depth: int = MAX_DEPTH

    def push(self, key: str) -> None:
        self.stack.append(key)

    def pop(self) -> str:
        return self.stack.pop()

    def contains(self, key: str) -> bool:
        return key in self.stack

    @property
    def depth(self) -> int:
        return len(self.stack)

    def is_depth_exceeded(self) -> bool:
        return self.depth >= self.max_depth

    def get_cycle_path(self, key: str) -> list[str]:
        return [*self.stack, key]


class PatternResolver:
    """Resolves messages and patterns against a bundle's entries.

    messages and terms are the bundle's own dicts, so entries merged after
    the resolver was created are visible immediately. transform may be
    swapped at any time and takes effect on the next resolution.
    """

    __slots__ = ("locale", "max_depth", "messages", "terms", "transform", "use_isolating")

    def __init__(
        self,
        locale: Locale,
        messages: Mapping[str, Message],
        terms: Mapping[str, Term],
        *,
        transform: Callable[[str], str],
        use_isolating: bool = True,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        self.locale = locale
        self.messages = messages
        self.terms = terms
        self.transform = transform
        self.use_isolating = use_isolating
        self.max_depth = max_depth

    def resolve_message(
        self,
        message: Message,
        args: Mapping[str, FluentValue] | None = None,
        attribute: str | None = None,
        *,
        context: ResolutionContext | None = None,
    ) -> tuple[str, tuple[FtlPreviewError, ...]]:
        """Resolve a message value (or one attribute) to a string.

        Returns:
            Tuple of (formatted_string, errors); the string is a readable
            fallback such as "{msg-id}" when resolution fails
        """
        errors: list[FtlPreviewError] = []
        if context is None:
            context = ResolutionContext(max_depth=self.max_depth)
        result = self._resolve_message(message, args or {}, attribute, errors, context)
        return result, tuple(errors)

    def resolve_pattern(
        self,
        pattern: Pattern,
        args: Mapping[str, FluentValue] | None = None,
    ) -> tuple[str, tuple[FtlPreviewError, ...]]:
        """Resolve a free-standing pattern (not owned by a message)."""
        errors: list[FtlPreviewError] = []
        context = ResolutionContext(max_depth=self.max_depth)
        result = self._resolve_pattern(pattern, args or {}, errors, context)
        return result, tuple(errors)

    def _resolve_message(
        self,
        message: Message,
        args: Mapping[str, FluentValue],
        attribute: str | None,
        errors: list[FtlPreviewError],
        context: ResolutionContext,
    ) -> str:
        key = f"{message.id}.{attribute}" if attribute else message.id
        fallback = FALLBACK_MISSING_MESSAGE.format(id=key)

        if attribute:
            attr = message.get_attribute(attribute)
            if attr is None:
                errors.append(
                    FluentReferenceError(ErrorTemplate.attribute_not_found(attribute, message.id))
                )
                return fallback
            pattern = attr.value
        elif message.value is None:
            errors.append(FluentReferenceError(ErrorTemplate.message_no_value(message.id)))
            return fallback
        else:
            pattern = message.value

        if context.contains(key):
            errors.append(
                FluentResolutionError(ErrorTemplate.cyclic_reference(context.get_cycle_path(key)))
            )
            return fallback
        if context.is_depth_exceeded():
            errors.append(FluentResolutionError(ErrorTemplate.max_depth_exceeded(context.max_depth)))
            return fallback

        context.push(key)
        try:
            return self._resolve_pattern(pattern, args, errors, context)
        finally:
            context.pop()

    def _resolve_pattern(
        self,
        pattern: Pattern,
        args: Mapping[str, FluentValue],
        errors: list[FtlPreviewError],
        context: ResolutionContext,
    ) -> str:
        # A lone placeable needs no isolation from surrounding text.
        isolate = self.use_isolating and len(pattern.elements) > 1
        parts: list[str] = []

        for element in pattern.elements:
            match element:
                case TextElement():
                    parts.append(self.transform(element.value))
                case Placeable():
                    try:
                        value = self._resolve_expression(element.expression, args, errors, context)
                        formatted = self._format_value(value)
                    except (FluentReferenceError, FluentResolutionError) as e:
                        errors.append(e)
                        formatted = self._get_fallback_for_placeable(element.expression)
                    if isolate:
                        parts.append(f"{UNICODE_FSI}{formatted}{UNICODE_PDI}")
                    else:
                        parts.append(formatted)

        return "".join(parts)

    def _resolve_expression(  # noqa: PLR0911
        self,
        expr: Expression,
        args: Mapping[str, FluentValue],
        errors: list[FtlPreviewError],
        context: ResolutionContext,
    ) -> FluentValue:
        match expr:
            case SelectExpression():
                return self._resolve_select_expression(expr, args, errors, context)
            case VariableReference():
                if expr.name not in args:
                    raise FluentReferenceError(ErrorTemplate.variable_not_provided(expr.name))
                return args[expr.name]
            case MessageReference():
                message = self.messages.get(expr.id)
                if message is None:
                    raise FluentReferenceError(ErrorTemplate.message_not_found(expr.id))
                return self._resolve_message(message, args, expr.attribute, errors, context)
            case TermReference():
                return self._resolve_term_reference(expr, args, errors, context)
            case FunctionReference():
                return self._resolve_function_call(expr, args, errors, context)
            case StringLiteral():
                return expr.value
            case NumberLiteral():
                return expr.value
            case Placeable():
                return self._resolve_expression(expr.expression, args, errors, context)
            case _:
                raise FluentResolutionError(FALLBACK_INVALID)

    def _resolve_term_reference(
        self,
        expr: TermReference,
        args: Mapping[str, FluentValue],
        errors: list[FtlPreviewError],
        context: ResolutionContext,
    ) -> str:
        """Resolve a term; terms only see the arguments passed to them."""
        term = self.terms.get(expr.id)
        if term is None:
            raise FluentReferenceError(ErrorTemplate.term_not_found(expr.id))

        if expr.attribute:
            attr = term.get_attribute(expr.attribute)
            if attr is None:
                raise FluentReferenceError(
                    ErrorTemplate.term_attribute_not_found(expr.attribute, expr.id)
                )
            pattern = attr.value
        else:
            pattern = term.value

        key = f"-{expr.id}.{expr.attribute}" if expr.attribute else f"-{expr.id}"
        if context.contains(key):
            errors.append(
                FluentResolutionError(ErrorTemplate.cyclic_reference(context.get_cycle_path(key)))
            )
            return f"{{{key}}}"
        if context.is_depth_exceeded():
            errors.append(FluentResolutionError(ErrorTemplate.max_depth_exceeded(context.max_depth)))
            return f"{{{key}}}"

        term_args: dict[str, FluentValue] = {}
        if expr.arguments is not None:
            term_args = {arg.name: arg.value.value for arg in expr.arguments.named}

        context.push(key)
        try:
            return self._resolve_pattern(pattern, term_args, errors, context)
        finally:
            context.pop()

    @staticmethod
    def _find_variant(variants: tuple[Variant, ...], key: str) -> Variant | None:
        for variant in variants:
            if isinstance(variant.key, str) and variant.key == key:
                return variant
        return None

    def _resolve_select_expression(
        self,
        expr: SelectExpression,
        args: Mapping[str, FluentValue],
        errors: list[FtlPreviewError],
        context: ResolutionContext,
    ) -> str:
        """Pick a variant: exact match, then plural category, then default."""
        if not expr.variants:
            raise FluentResolutionError(ErrorTemplate.no_variants())

        try:
            selector = self._resolve_expression(expr.selector, args, errors, context)
        except (FluentReferenceError, FluentResolutionError) as e:
            errors.append(e)
            return self._resolve_pattern(expr.default_variant.value, args, errors, context)

        number = selector.value if isinstance(selector, FluentNumber) else selector
        chosen: Variant | None = None

        if isinstance(number, (int, float, Decimal)) and not isinstance(number, bool):
            for variant in expr.variants:
                if isinstance(variant.key, NumberLiteral) and variant.key.value == number:
                    chosen = variant
                    break
            if chosen is None and _is_finite(number):
                chosen = self._find_variant(expr.variants, self.locale.plural_form(number))
        elif selector is not None:
            chosen = self._find_variant(expr.variants, str(selector))

        if chosen is None:
            chosen = expr.default_variant
        return self._resolve_pattern(chosen.value, args, errors, context)

    def _resolve_function_call(
        self,
        func_ref: FunctionReference,
        args: Mapping[str, FluentValue],
        errors: list[FtlPreviewError],
        context: ResolutionContext,
    ) -> FluentValue:
        """Only NUMBER() is built in."""
        if func_ref.name != "NUMBER":
            raise FluentResolutionError(ErrorTemplate.function_not_found(func_ref.name))

        positional = [
            self._resolve_expression(arg, args, errors, context)
            for arg in func_ref.arguments.positional
        ]
        if len(positional) != 1:
            raise FluentResolutionError(
                ErrorTemplate.function_failed(
                    func_ref.name, f"expected 1 positional argument, got {len(positional)}"
                )
            )
        value = positional[0]
        if isinstance(value, FluentNumber):
            value = value.value
        if isinstance(value, str):
            try:
                value = Decimal(value)
            except ArithmeticError as e:
                raise FluentResolutionError(
                    ErrorTemplate.function_failed(func_ref.name, f"not a number: {value!r}")
                ) from e
        if not isinstance(value, (int, float, Decimal)):
            raise FluentResolutionError(
                ErrorTemplate.function_failed(func_ref.name, f"not a number: {value!r}")
            )

        options: dict[str, int | bool] = {}
        for named in func_ref.arguments.named:
            option = _NUMBER_OPTIONS.get(named.name)
            if option is None:
                continue
            raw = named.value.value
            if option == "use_grouping":
                options[option] = raw not in ("false", 0)
            else:
                try:
                    options[option] = int(raw)
                except ValueError as e:
                    raise FluentResolutionError(
                        ErrorTemplate.function_failed(func_ref.name, f"invalid {named.name}: {raw!r}")
                    ) from e

        return number_format(value, self.locale, **options)  # type: ignore[arg-type]

    @staticmethod
    def _format_value(value: FluentValue) -> str:
        if isinstance(value, str):
            return value
        if value is None:
            return ""
        return str(value)

    def _get_fallback_for_placeable(self, expr: Expression) -> str:
        """Readable stand-in for a placeable that failed to resolve.

        Examples:
            VariableReference($name) -> "{$name}"
            MessageReference(welcome) -> "{welcome}"
            TermReference(-brand) -> "{-brand}"
            FunctionReference(PLATFORM) -> "{!PLATFORM}"
        """
        match expr:
            case VariableReference():
                return FALLBACK_MISSING_VARIABLE.format(name=expr.name)
            case MessageReference():
                suffix = f".{expr.attribute}" if expr.attribute else ""
                return FALLBACK_MISSING_MESSAGE.format(id=f"{expr.id}{suffix}")
            case TermReference():
                suffix = f".{expr.attribute}" if expr.attribute else ""
                return FALLBACK_MISSING_TERM.format(name=f"{expr.id}{suffix}")
            case FunctionReference():
                return FALLBACK_FUNCTION_ERROR.format(name=expr.name)
            case SelectExpression():
                return self._get_fallback_for_placeable(expr.selector)
            case Placeable():
                return self._get_fallback_for_placeable(expr.expression)
            case _:
                return FALLBACK_INVALID
