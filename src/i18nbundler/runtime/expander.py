"""ParameterExpander: substitutes [name] placeholders in translations.

Expansion is a single left-to-right pass. Substituted values are appended to
the output and never rescanned, so a value containing "[other]" stays
literal and cannot trigger further substitution.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping

from i18nbundler.constants import PLACEHOLDER_CLOSE, PLACEHOLDER_OPEN
from i18nbundler.diagnostics import ErrorTemplate, MalformedTemplateError, UnboundParameterError

__all__ = ["ParameterExpander", "expand", "placeholders"]

type ParameterValue = object


class ParameterExpander:
    """Expands bracketed placeholders with caller-supplied values.

    Example:
        >>> ParameterExpander().expand("Hello [name]", {"name": "World"})
        'Hello World'
    """

    __slots__ = ()

    def expand(
        self,
        template: str,
        params: Mapping[str, ParameterValue] | None = None,
        *,
        token_key: str | None = None,
    ) -> str:
        """Substitute every placeholder in a template.

        Args:
            template: Translation template
            params: Placeholder name -> value; values are stringified
            token_key: Key of the template, used in error reports

        Returns:
            Expanded string

        Raises:
            UnboundParameterError: A placeholder has no value in params
            MalformedTemplateError: Unterminated, nested or empty placeholder
        """
        if PLACEHOLDER_OPEN not in template:
            return template

        values = params if params is not None else {}
        parts: list[str] = []
        for literal, name in self._scan(template, token_key):
            parts.append(literal)
            if name is None:
                continue
            if name not in values:
                raise UnboundParameterError(
                    ErrorTemplate.unbound_parameter(name, token_key),
                    placeholder=name,
                    token_key=token_key,
                )
            parts.append(str(values[name]))
        return "".join(parts)

    def placeholders(self, template: str, *, token_key: str | None = None) -> tuple[str, ...]:
        """List placeholder names in order of appearance.

        Raises:
            MalformedTemplateError: Unterminated, nested or empty placeholder
        """
        return tuple(name for _, name in self._scan(template, token_key) if name is not None)

    @staticmethod
    def _scan(template: str, token_key: str | None) -> list[tuple[str, str | None]]:
        """Split a template into (literal, placeholder-name) pairs.

        The final pair carries the trailing literal and a None name.
        """
        pairs: list[tuple[str, str | None]] = []
        position = 0
        while True:
            start = template.find(PLACEHOLDER_OPEN, position)
            if start == -1:
                pairs.append((template[position:], None))
                return pairs

            end = template.find(PLACEHOLDER_CLOSE, start + 1)
            if end == -1:
                raise MalformedTemplateError(
                    ErrorTemplate.malformed_template(token_key, start, "unterminated '['"),
                    position=start,
                    token_key=token_key,
                )

            name = template[start + 1 : end]
            if PLACEHOLDER_OPEN in name:
                raise MalformedTemplateError(
                    ErrorTemplate.malformed_template(token_key, start, "nested '['"),
                    position=start,
                    token_key=token_key,
                )
            if not name.strip():
                raise MalformedTemplateError(
                    ErrorTemplate.malformed_template(token_key, start, "empty placeholder"),
                    position=start,
                    token_key=token_key,
                )

            pairs.append((template[position:start], name.strip()))
            position = end + 1


_DEFAULT_EXPANDER = ParameterExpander()


def expand(
    template: str,
    params: Mapping[str, ParameterValue] | None = None,
    *,
    token_key: str | None = None,
) -> str:
    """Module-level shortcut for ParameterExpander().expand()."""
    return _DEFAULT_EXPANDER.expand(template, params, token_key=token_key)


def placeholders(template: str) -> tuple[str, ...]:
    """Module-level shortcut for ParameterExpander().placeholders()."""
    return _DEFAULT_EXPANDER.placeholders(template)
