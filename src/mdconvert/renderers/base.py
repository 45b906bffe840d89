#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/renderers/base.py
"""Base classes for document tree renderers."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdconvert.ast import Document
from mdconvert.ast.nodes import Node
from mdconvert.exceptions import InvalidOptionsError
from mdconvert.options.base import BaseRendererOptions

OutputTarget = Union[str, Path, IO[bytes], IO[str]]


class BaseRenderer(ABC):
    """Abstract base class for renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the tree to a string.

        Parameters
        ----------
        doc : Document
            Document to render

        Returns
        -------
        str
            Rendered output

        """
        raise NotImplementedError

    def render(self, doc: Document, output: OutputTarget) -> None:
        """Render the tree and write it to a path or stream.

        Parameters
        ----------
        doc : Document
            Document to render
        output : str, Path, IO[bytes], or IO[str]
            Output destination; paths and binary streams receive UTF-8

        Raises
        ------
        OSError
            If a path cannot be written

        """
        self.write_text_output(self.render_to_string(doc), output)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Raise InvalidOptionsError if ``options`` is not None and not an ``expected_type``."""
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: OutputTarget) -> None:
        """Write text to a file path or a text or binary stream.

        Examples
        --------
        >>> from io import BytesIO
        >>> buffer = BytesIO()
        >>> BaseRenderer.write_text_output("<p>Hi</p>", buffer)
        >>> buffer.getvalue()
        b'<p>Hi</p>'

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
            return

        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output).__name__}")

        if isinstance(output, io.TextIOBase):
            binary = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            binary = True
        else:
            mode = getattr(output, "mode", "")
            binary = isinstance(mode, str) and "b" in mode

        if binary:
            output.write(text.encode("utf-8"))  # type: ignore[arg-type]
        else:
            output.write(text)  # type: ignore[arg-type]


class InlineContentMixin:
    """Mixin that renders a list of inline nodes into a string.

    The implementing class must accumulate output in ``self._output`` and
    append to it from its visitor methods.
    """

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render inline nodes and return the text they produce."""
        saved_output = self._output
        self._output = []
        for node in content:
            node.accept(self)
        result = "".join(self._output)
        self._output = saved_output
        return result


__all__ = ["BaseRenderer", "InlineContentMixin", "OutputTarget"]
