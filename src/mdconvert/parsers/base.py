#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/parsers/base.py
"""Base class for source parsers.

A parser turns Markdown source into a :class:`~mdconvert.ast.Document`.
Sources may arrive as already-decoded text, raw bytes, a file path or an
open stream; :meth:`BaseParser._load_text` reduces all of them to a ``str``
so the parsing code only ever deals with text.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdconvert.ast import Document
from mdconvert.exceptions import InvalidOptionsError
from mdconvert.options.base import BaseParserOptions
from mdconvert.utils.encoding import decode_source, read_source_stream

logger = logging.getLogger(__name__)

SourceInput = Union[str, bytes, Path, IO[bytes], IO[str]]


class BaseParser(ABC):
    """Abstract base class for parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Notes
    -----
    ``parse()`` accepts these input types:

    - str: Markdown text (never interpreted as a path)
    - bytes: UTF-8 encoded Markdown
    - Path: file to read in binary mode and decode
    - IO[bytes] or IO[str]: stream read to the end

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Raise InvalidOptionsError if ``options`` is not None and not an ``expected_type``."""
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def _load_text(input_data: SourceInput, source_name: str | None = None) -> str:
        """Reduce any supported input to decoded text.

        Raises
        ------
        DecodingError
            If byte input is not valid UTF-8
        OSError
            If a path cannot be read

        """
        if isinstance(input_data, str):
            return input_data
        if isinstance(input_data, (bytes, bytearray)):
            return decode_source(bytes(input_data), source_name=source_name)
        if isinstance(input_data, Path):
            logger.debug("Reading Markdown source from %s", input_data)
            return decode_source(input_data.read_bytes(), source_name=source_name or input_data.name)
        if hasattr(input_data, "read"):
            return read_source_stream(input_data, source_name=source_name)
        raise TypeError(f"Unsupported input type for parsing: {type(input_data).__name__}")

    @abstractmethod
    def parse(self, input_data: SourceInput) -> Document:
        """Parse the input into a Document.

        Parameters
        ----------
        input_data : str, bytes, Path, or stream
            The source to parse

        Returns
        -------
        Document
            Root of the document tree

        Raises
        ------
        DecodingError
            If the source bytes are not valid UTF-8

        """
        raise NotImplementedError


__all__ = ["BaseParser", "SourceInput"]
