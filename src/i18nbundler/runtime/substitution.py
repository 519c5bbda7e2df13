"""TokenSubstitutionEngine: streaming replacement of inline token markers.

Markup and code carry markers of the form ``@{dotted.token.key}``. The
engine replaces each marker with the resolved translation, expanded with
the parameters supplied for this call.

Streaming:
    Input is consumed chunk by chunk and output is produced per chunk. The
    only state carried across chunk boundaries is the pending partial marker
    (``@``, ``@{`` or ``@{some.ke``), bounded by MAX_MARKER_LENGTH. Closing
    the output generator (request cancelled) drops that state.

Built-in format markers:
    ``@{date:name}`` and ``@{number:name}`` format the parameter ``name``
    with LocaleFormatters using the table's format tokens.

Failure isolation:
    A missing key renders ``??? key ???`` and reports a
    MissingTranslationError; a bad template renders ``!!! key !!!`` and
    reports the TemplateError. The rest of the stream is unaffected.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable, Iterable, Iterator, Mapping
from typing import TYPE_CHECKING, TextIO

from i18nbundler.constants import (
    DATE_MARKER_PREFIX,
    DEFAULT_CHUNK_SIZE,
    FALLBACK_MISSING_TOKEN,
    FALLBACK_TEMPLATE_ERROR,
    MARKER_CLOSE,
    MARKER_KEY_CHARS,
    MARKER_OPEN,
    MAX_MARKER_LENGTH,
    NUMBER_MARKER_PREFIX,
)
from i18nbundler.diagnostics import (
    ErrorTemplate,
    FormattingError,
    MissingTranslationError,
    TemplateError,
    UnboundParameterError,
)
from i18nbundler.runtime.expander import ParameterExpander
from i18nbundler.runtime.formatters import LocaleFormatters
from i18nbundler.runtime.reporter import CollectingReporter

if TYPE_CHECKING:
    from i18nbundler.diagnostics import I18nError
    from i18nbundler.runtime.reporter import TranslationReporter

__all__ = ["TokenSubstitutionEngine"]

logger = logging.getLogger(__name__)

type Params = Mapping[str, object]


class _MarkerScanner:
    """Incremental marker scanner for one stream.

    ``feed`` returns the output that is final for the text seen so far and
    keeps a possibly incomplete marker pending for the next chunk.
    """

    __slots__ = ("_max_length", "_pending", "_substitute")

    def __init__(self, substitute: Callable[[str], str], max_length: int) -> None:
        self._substitute = substitute
        self._max_length = max_length
        self._pending = ""

    def feed(self, chunk: str) -> str:
        text = self._pending + chunk if self._pending else chunk
        self._pending = ""
        length = len(text)
        out: list[str] = []
        position = 0

        while position < length:
            at = text.find(MARKER_OPEN[0], position)
            if at == -1:
                out.append(text[position:])
                break
            out.append(text[position:at])

            if at + 1 == length:
                self._pending = MARKER_OPEN[0]
                break
            if text[at + 1] != MARKER_OPEN[1]:
                out.append(MARKER_OPEN[0])
                position = at + 1
                continue

            body_start = at + len(MARKER_OPEN)
            end = body_start
            limit = min(length, body_start + self._max_length)
            while end < limit and text[end] in MARKER_KEY_CHARS:
                end += 1

            if end == length:
                self._pending = text[at:]
                break
            if end < length and text[end] == MARKER_CLOSE and end > body_start:
                out.append(self._substitute(text[body_start:end]))
                position = end + 1
                continue

            # Not a marker: emit the opener literally and rescan after it.
            out.append(MARKER_OPEN)
            position = body_start

        return "".join(out)

    def finish(self) -> str:
        # An unterminated marker at end of input is literal text.
        tail, self._pending = self._pending, ""
        return tail

    def reset(self) -> None:
        if self._pending:
            logger.debug("Stream closed with pending marker text %r", self._pending)
        self._pending = ""

    @property
    def pending(self) -> str:
        return self._pending


class TokenSubstitutionEngine:
    """Replaces ``@{token.key}`` markers using one effective token table.

    Engines are cheap; create one per locale (or per request) and share the
    immutable table between them.

    Example:
        >>> engine = TokenSubstitutionEngine({"a.b": "Hi"}, locale="en")
        >>> "".join(engine.transform(["<h1>@{a", ".b}</h1>"]))
        '<h1>Hi</h1>'
    """

    __slots__ = ("_expander", "_formatters", "_locale", "_max_marker_length", "_reporter", "_table")

    def __init__(
        self,
        table: Mapping[str, str],
        *,
        locale: str | None = None,
        expander: ParameterExpander | None = None,
        formatters: LocaleFormatters | None = None,
        reporter: TranslationReporter | None = None,
        max_marker_length: int = MAX_MARKER_LENGTH,
    ) -> None:
        """Initialize the engine.

        Args:
            table: Effective token table (any mapping of key -> template)
            locale: Active locale; defaults to ``table.locale`` when present
            expander: Placeholder expander
            formatters: Date/number formatters for built-in format markers
            reporter: Receives non-fatal errors (collecting by default)
            max_marker_length: Longest key buffered across chunk boundaries

        Raises:
            ValueError: If no locale can be determined or the length is not positive
        """
        resolved_locale = locale if locale is not None else getattr(table, "locale", None)
        if not resolved_locale:
            msg = "locale is required when the table does not carry one"
            raise ValueError(msg)
        if max_marker_length <= 0:
            msg = "max_marker_length must be positive"
            raise ValueError(msg)

        self._table = table
        self._locale: str = resolved_locale
        self._expander = expander if expander is not None else ParameterExpander()
        self._formatters = formatters if formatters is not None else LocaleFormatters()
        self._reporter: TranslationReporter = (
            reporter if reporter is not None else CollectingReporter()
        )
        self._max_marker_length = max_marker_length

    @property
    def locale(self) -> str:
        """Active locale."""
        return self._locale

    @property
    def table(self) -> Mapping[str, str]:
        """The token table consulted by this engine."""
        return self._table

    @property
    def reporter(self) -> TranslationReporter:
        """Reporter receiving non-fatal errors."""
        return self._reporter

    @property
    def formatters(self) -> LocaleFormatters:
        """Formatters used for built-in format markers."""
        return self._formatters

    def has_token(self, key: str) -> bool:
        """Check whether a key resolves in the active locale."""
        return key in self._table

    def lookup(
        self, key: str, params: Params | None = None
    ) -> tuple[str, tuple[I18nError, ...]]:
        """Resolve one token exactly as a marker would be resolved.

        Returns:
            Tuple of (text, errors); errors are also sent to the reporter
        """
        errors: list[I18nError] = []
        text = self._replace(key, params, errors)
        return text, tuple(errors)

    def translate(self, key: str, params: Params | None = None) -> str:
        """Resolve one token for application code.

        Missing keys render the diagnostic marker and are reported.

        Raises:
            UnboundParameterError: A placeholder has no value in params
            MalformedTemplateError: The translation template is malformed
        """
        template = self._table.get(key)
        if template is None:
            return self._missing(key, [])
        return self._expander.expand(template, params, token_key=key)

    def transform(
        self,
        chunks: Iterable[str],
        params: Params | None = None,
        *,
        errors: list[I18nError] | None = None,
    ) -> Iterator[str]:
        """Stream substituted output for a stream of input chunks.

        Args:
            chunks: Input text chunks; markers may span chunk boundaries
            params: Placeholder values applied to every marker
            errors: Optional list that receives this run's errors

        Yields:
            Output chunks (never empty strings)
        """
        collected = errors if errors is not None else []
        scanner = _MarkerScanner(
            lambda body: self._replace(body, params, collected), self._max_marker_length
        )
        try:
            for chunk in chunks:
                out = scanner.feed(chunk)
                if out:
                    yield out
            tail = scanner.finish()
            if tail:
                yield tail
        finally:
            scanner.reset()

    async def atransform(
        self,
        chunks: AsyncIterable[str],
        params: Params | None = None,
        *,
        errors: list[I18nError] | None = None,
    ) -> AsyncIterator[str]:
        """Async variant of ``transform``.

        Suspends only while waiting on the source or on the consumer.
        Cancellation drops the pending marker state.
        """
        collected = errors if errors is not None else []
        scanner = _MarkerScanner(
            lambda body: self._replace(body, params, collected), self._max_marker_length
        )
        try:
            async for chunk in chunks:
                out = scanner.feed(chunk)
                if out:
                    yield out
            tail = scanner.finish()
            if tail:
                yield tail
        finally:
            scanner.reset()

    def transform_text(
        self, text: str, params: Params | None = None
    ) -> tuple[str, tuple[I18nError, ...]]:
        """Substitute a complete string.

        Returns:
            Tuple of (output, errors)
        """
        errors: list[I18nError] = []
        output = "".join(self.transform((text,), params, errors=errors))
        return output, tuple(errors)

    def transform_file(
        self,
        source: TextIO,
        sink: TextIO,
        params: Params | None = None,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> tuple[I18nError, ...]:
        """Stream a text file into a sink without buffering the whole file.

        Returns:
            Errors collected during the run
        """
        errors: list[I18nError] = []
        chunks = iter(lambda: source.read(chunk_size), "")
        for out in self.transform(chunks, params, errors=errors):
            sink.write(out)
        return tuple(errors)

    def _replace(self, body: str, params: Params | None, errors: list[I18nError]) -> str:
        if body.startswith(DATE_MARKER_PREFIX):
            return self._format_param(body, DATE_MARKER_PREFIX, params, errors)
        if body.startswith(NUMBER_MARKER_PREFIX):
            return self._format_param(body, NUMBER_MARKER_PREFIX, params, errors)

        template = self._table.get(body)
        if template is None:
            return self._missing(body, errors)

        try:
            return self._expander.expand(template, params, token_key=body)
        except TemplateError as e:
            self._record(e, errors)
            return FALLBACK_TEMPLATE_ERROR.format(key=body)

    def _format_param(
        self, body: str, prefix: str, params: Params | None, errors: list[I18nError]
    ) -> str:
        name = body.removeprefix(prefix)
        if params is None or name not in params:
            self._record(
                UnboundParameterError(
                    ErrorTemplate.unbound_parameter(name, body), placeholder=name, token_key=body
                ),
                errors,
            )
            return FALLBACK_TEMPLATE_ERROR.format(key=body)

        value = params[name]
        try:
            if prefix == DATE_MARKER_PREFIX:
                return self._formatters.format_date(value, self._locale, table=self._table)  # type: ignore[arg-type]
            return self._formatters.format_number(value, self._locale, table=self._table)  # type: ignore[arg-type]
        except FormattingError as e:
            self._record(e, errors)
            return e.fallback_value

    def _missing(self, key: str, errors: list[I18nError]) -> str:
        self._record(
            MissingTranslationError(
                ErrorTemplate.missing_translation(key, self._locale),
                token_key=key,
                locale_code=self._locale,
            ),
            errors,
        )
        return FALLBACK_MISSING_TOKEN.format(key=key)

    def _record(self, error: I18nError, errors: list[I18nError]) -> None:
        errors.append(error)
        self._reporter.report(error)
