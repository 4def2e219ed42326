"""
Environment model

Holds the mutable state shared by the parse, process and compile stages of a
single pipeline instance.
"""

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List

from markdown_it.token import Token

from .parser import Heading


@dataclass(eq=False)
class Environment(MutableMapping):
    """
    Per-pipeline state bus threaded through parse -> process -> compile.

    One Environment belongs to exactly one pipeline instance and must not be
    shared by concurrent runs. Fields are populated as the run progresses:

        - parse:   title, headings (parser), meta, assets (parse-time plugins)
        - process: term_tokens (processors deferring content to the end)
        - compile: consumes and clears term_tokens

    The engine keeps its own scratch data (link references, footnotes) in the
    environment through the MutableMapping interface; that storage is private
    to the engine and its parse-time rules.

    Attributes:
        title: Document title, empty until derived by the parser
        headings: Heading descriptors derived by the parser
        meta: Document metadata collected during parsing (front matter)
        assets: Asset references collected during parsing
        term_tokens: Deferred tokens rendered after the main content, read
                     exactly once by the compiler
    """

    title: str = field(default="")
    headings: List[Heading] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)
    assets: List[Dict[str, Any]] = field(default_factory=list)
    term_tokens: List[Token] = field(default_factory=list)
    _scratch: Dict[str, Any] = field(default_factory=dict, repr=False)

    def __getitem__(self, key: str) -> Any:
        return self._scratch[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._scratch[key] = value

    def __delitem__(self, key: str) -> None:
        del self._scratch[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._scratch)

    def __len__(self) -> int:
        return len(self._scratch)

    # Identity semantics: the mapping part is only engine scratch, and an
    # Environment stays truthy when that scratch is empty.
    def __eq__(self, other: object) -> bool:
        return self is other

    __hash__ = object.__hash__

    def __bool__(self) -> bool:
        return True

    def reset(self) -> None:
        """Clear all state left by a previous run"""
        self.title = ""
        self.headings = []
        self.meta = {}
        self.assets = []
        self.term_tokens = []
        self._scratch.clear()

    def termTokens_defer(self, tokens: List[Token]) -> None:
        """Queue tokens to be rendered after the main content by the compiler"""
        self.term_tokens.extend(tokens)

    def termTokens_consume(self) -> List[Token]:
        """
        Take the deferred term tokens, leaving the slot empty.

        Only the compiler calls this; a second call in the same run returns [].
        """
        tokens = self.term_tokens
        self.term_tokens = []
        return tokens
