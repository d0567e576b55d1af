"""
Route patterns - path templates compiled into small token matchers.

Template syntax:
- literal text, compared character for character
- ``:name`` parameters (name = letters, digits, underscore), matching one or
  more characters other than "/"
- a trailing ``*`` wildcard that matches the rest of the path, used for the
  fallback route (``"*"`` on its own matches every path)

Matches are anchored: the whole path must be consumed, prefixes never match.
"""

from dataclasses import dataclass
from typing import Optional, Union

from src.utils.errors import InvalidPatternError, MissingParamError


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Param:
    name: str


@dataclass(frozen=True)
class Wildcard:
    pass


Token = Union[Literal, Param, Wildcard]


def _is_name_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char == "_")


def tokenize(template: str) -> list[Token]:
    """
    Split a route template into Literal, Param and Wildcard tokens.
    
    Raises:
        InvalidPatternError: For duplicate parameter names or a wildcard
            that is not the last token
    """
    tokens: list[Token] = []
    seen: set[str] = set()
    literal: list[str] = []
    i = 0
    
    def flush() -> None:
        if literal:
            tokens.append(Literal("".join(literal)))
            literal.clear()
    
    while i < len(template):
        char = template[i]
        
        if char == ":" and i + 1 < len(template) and _is_name_char(template[i + 1]):
            flush()
            end = i + 1
            while end < len(template) and _is_name_char(template[end]):
                end += 1
            name = template[i + 1:end]
            if name in seen:
                raise InvalidPatternError(f"Duplicate parameter '{name}' in route '{template}'")
            seen.add(name)
            tokens.append(Param(name))
            i = end
            continue
        
        if char == "*":
            if i != len(template) - 1:
                raise InvalidPatternError(f"Wildcard must end the route '{template}'")
            flush()
            tokens.append(Wildcard())
            i += 1
            continue
        
        literal.append(char)
        i += 1
    
    flush()
    return tokens


class RoutePattern:
    """
    A compiled route template.
    
    Example:
        >>> pattern = RoutePattern("/projects/:slug/edit")
        >>> pattern.match("/projects/acme/edit")
        {'slug': 'acme'}
        >>> pattern.reverse_generate({"slug": "acme"})
        '/projects/acme/edit'
    """
    
    def __init__(self, template: str):
        self.template = template
        self.tokens: tuple[Token, ...] = tuple(tokenize(template))
    
    def __repr__(self) -> str:
        return f"RoutePattern({self.template!r})"
    
    @property
    def param_names(self) -> list[str]:
        return [t.name for t in self.tokens if isinstance(t, Param)]
    
    @property
    def is_wildcard(self) -> bool:
        """True if the pattern ends in a wildcard."""
        return bool(self.tokens) and isinstance(self.tokens[-1], Wildcard)
    
    def match(self, path: str) -> Optional[dict[str, str]]:
        """
        Match a whole path against the pattern.
        
        Returns:
            Parameter values keyed by name (raw path text, no decoding), or
            None if the path does not match
        """
        params: dict[str, str] = {}
        if self._match_from(0, path, 0, params):
            return params
        return None
    
    def matches(self, path: str) -> bool:
        return self.match(path) is not None
    
    def _match_from(self, index: int, path: str, pos: int, params: dict[str, str]) -> bool:
        if index == len(self.tokens):
            return pos == len(path)
        
        token = self.tokens[index]
        
        if isinstance(token, Literal):
            if not path.startswith(token.text, pos):
                return False
            return self._match_from(index + 1, path, pos + len(token.text), params)
        
        if isinstance(token, Wildcard):
            return True
        
        # Param: longest run of non-"/" characters first, then shorter ones
        segment_end = path.find("/", pos)
        if segment_end == -1:
            segment_end = len(path)
        
        for end in range(segment_end, pos, -1):
            params[token.name] = path[pos:end]
            if self._match_from(index + 1, path, end, params):
                return True
        
        params.pop(token.name, None)
        return False
    
    def reverse_generate(self, params: dict[str, object]) -> str:
        """
        Build a path by substituting parameter values into the template.
        
        Values are inserted as given (converted with str(), no encoding).
        Extra keys are ignored.
        
        Raises:
            MissingParamError: If a parameter in the template has no value
            InvalidPatternError: If the template contains a wildcard
        """
        parts = []
        for token in self.tokens:
            if isinstance(token, Literal):
                parts.append(token.text)
            elif isinstance(token, Param):
                if token.name not in params or params[token.name] is None:
                    raise MissingParamError(token.name, self.template)
                parts.append(str(params[token.name]))
            else:
                raise InvalidPatternError(f"Cannot generate a path from wildcard route '{self.template}'")
        return "".join(parts)
