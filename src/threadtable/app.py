"""
Thread-table orchestrator.

App.run() is the single end-to-end entry point used by the CLI and tests:

    validate -> derive pitch -> calculator -> build or load document
             -> merge -> pretty-print

Nothing is written to disk here; the caller decides where the returned
string goes.
"""

import logging
from typing import Any, Mapping, Optional, Tuple, Union

from .calculator.constants import DEFAULT_OFFSETS
from .calculator.core import ThreadCalculator
from .calculator.validation import validate_required_flags, derive_pitch
from .io.loaders import ThreadOptions, read_xml
from .io.merge import merge, pretty_print
from .io.schema import build_new, validate_existing

OptionsInput = Union[ThreadOptions, Mapping[str, Any]]


def _discard_logger() -> logging.Logger:
    # Not registered with logging.getLogger(): no parent, nothing propagates
    logger = logging.Logger("threadtable.discard")
    logger.addHandler(logging.NullHandler())
    return logger


class App:
    """
    Generate or extend a ThreadType document from one set of options.

    Args:
        logger: Optional logger for progress messages. Defaults to a logger
            that discards everything.

    Example:
        >>> app = App()
        >>> xml = app.run({"angle": 60.0, "pitch": 0.9, "diameter": 9.45,
        ...                "gender": "internal", "offsets": [0.0, 0.1]})
    """

    DEFAULT_OFFSETS = DEFAULT_OFFSETS

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger if logger is not None else _discard_logger()

    def run(self, options: OptionsInput) -> str:
        """
        Create or merge a ThreadType document.

        If options.xml names an existing file it is loaded, checked for
        compatibility and merged into; otherwise a new document is built.

        Args:
            options: ThreadOptions or dict of option values

        Returns:
            Pretty-printed XML document ending in a single newline

        Raises:
            ConfigurationError, ValidationError, GenderError, XmlParseError,
            AngleMismatchError, IoError
        """
        opts, calculator = self._prepare(options)
        angle = opts.angle

        if opts.xml is not None and opts.xml.exists():
            self.logger.info(f"Merging into existing document {opts.xml}")
            document = read_xml(opts.xml)
            validate_existing(document, angle)
        else:
            if opts.xml is not None:
                self.logger.info(f"{opts.xml} does not exist, creating a new document")
            document = build_new(opts, angle)

        result = merge(document, calculator, angle, opts, log=self.logger.debug)
        return pretty_print(result)

    def calculate(self, options: OptionsInput) -> ThreadCalculator:
        """
        Validate options and return the configured calculator, without
        touching any document.
        """
        _, calculator = self._prepare(options)
        return calculator

    def _prepare(self, options: OptionsInput) -> Tuple[ThreadOptions, ThreadCalculator]:
        opts = validate_required_flags(options)
        pitch = derive_pitch(opts)

        offsets = opts.offsets or list(self.DEFAULT_OFFSETS)

        calculator = ThreadCalculator.with_pitch(pitch, opts.gender, opts.diameter)
        calculator.add_offsets(*offsets)

        self.logger.info(
            f"{calculator.gender.value} thread: diameter={opts.diameter} mm, "
            f"pitch={pitch} mm, angle={opts.angle}°, offsets={calculator.offsets}"
        )
        return opts, calculator


def run(options: OptionsInput, logger: Optional[logging.Logger] = None) -> str:
    """Convenience wrapper for App(logger).run(options)"""
    return App(logger=logger).run(options)
