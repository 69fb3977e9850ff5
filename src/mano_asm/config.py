"""
Mano Assembler - Configuration
==============================

Assembler configuration. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line flags (which take precedence, see ``manoasm``)
"""

from dataclasses import dataclass, replace
import os


_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _parse_bool(value: str) -> bool | None:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


@dataclass(frozen=True)
class AssemblerConfig:
    """
    Configuration for an assembly run.

    Attributes:
        strict_symbols: Raise UndefinedSymbolError for unresolved
            memory-reference operands instead of encoding address 0
            (default: False)
        allow_redefinition: Let a repeated label re-bind to the later address
            with a warning instead of raising DuplicateSymbolError
            (default: False)
        comment_chars: Characters that start a comment in source text read
            from strings or files (default: ";/")
    """

    strict_symbols: bool = False
    allow_redefinition: bool = False
    comment_chars: str = ";/"

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            MANO_ASM_STRICT_SYMBOLS: "1"/"true" to fail on undefined symbols
            MANO_ASM_ALLOW_REDEFINITION: "1"/"true" for last-write-wins labels
            MANO_ASM_COMMENT_CHARS: Comment start characters (e.g. ";")

        Unrecognized boolean values are ignored.
        """
        config = cls()

        if strict := os.environ.get("MANO_ASM_STRICT_SYMBOLS"):
            parsed = _parse_bool(strict)
            if parsed is not None:
                config = replace(config, strict_symbols=parsed)

        if redefine := os.environ.get("MANO_ASM_ALLOW_REDEFINITION"):
            parsed = _parse_bool(redefine)
            if parsed is not None:
                config = replace(config, allow_redefinition=parsed)

        if (comment_chars := os.environ.get("MANO_ASM_COMMENT_CHARS")) is not None:
            config = replace(config, comment_chars=comment_chars)

        return config

    def with_overrides(self, **overrides) -> "AssemblerConfig":
        """Return a copy with the non-None overrides applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)
