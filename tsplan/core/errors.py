# SPDX-License-Identifier: MIT
"""Custom exceptions for tsplan.

All tsplan exceptions inherit from TsplanError, which includes
optional location information (a file or option name) for better
error messages. Every one of them aborts the planning pass.
"""

from __future__ import annotations

from pathlib import Path


class TsplanError(Exception):
    """Base class for all tsplan exceptions.

    Attributes:
        message: The error message.
        location: Optional location (config file, option) of the error.
    """

    def __init__(
        self,
        message: str,
        location: str | None = None,
    ) -> None:
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class ConfigureError(TsplanError):
    """Invalid build configuration.

    Raised for unknown options, unparsable values, or a broken
    configuration file.
    """


class TripleParseError(ConfigureError):
    """A target triple string could not be parsed.

    Attributes:
        text: The offending triple string.
    """

    def __init__(
        self,
        text: str,
        reason: str,
        location: str | None = None,
    ) -> None:
        self.text = text
        super().__init__(f"invalid target triple {text!r}: {reason}", location)


class ClassificationError(TsplanError):
    """The target triple has no prebuilt wasmtime bundle.

    Attributes:
        arch: Architecture name, as given.
        os: Operating system name, as given.
        abi: ABI name, as given.
    """

    def __init__(self, arch: str, os: str, abi: str) -> None:
        self.arch = arch
        self.os = os
        self.abi = abi
        super().__init__(f"Unsupported target for wasmtime: {arch}-{os}-{abi}")


class SourceScanError(TsplanError):
    """The source directory could not be opened or iterated.

    Attributes:
        path: The directory that was being scanned.
        cause: The underlying filesystem error.
    """

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"cannot scan source directory {path}: {cause}")


class InvariantViolation(TsplanError):
    """An assembled plan broke one of its own invariants.

    This indicates a logic defect in tsplan, never a user error.
    """
