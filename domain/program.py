# domain/program.py
from __future__ import annotations

from pathlib import PurePath
from typing import Iterable, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class Program(BaseModel):
    """
    Snapshot of the program configuration the bootstrap runs with.

    Frozen once dispatched. Widening the recognised extensions produces a new
    snapshot rather than mutating this one.
    """
    model_config = ConfigDict(frozen=True)

    directory: str
    extensions: Tuple[str, ...] = ()

    @field_validator("directory", mode="before")
    @classmethod
    def _slash_directory(cls, value):
        # Windows paths are stored with forward slashes.
        if isinstance(value, PurePath):
            value = value.as_posix()
        return str(value).replace("\\", "/")

    @field_validator("extensions", mode="before")
    @classmethod
    def _unique_extensions(cls, value):
        return tuple(dict.fromkeys(value or ()))

    def with_extensions(self, extensions: Iterable[str]) -> "Program":
        return Program(directory=self.directory, extensions=tuple(extensions))
