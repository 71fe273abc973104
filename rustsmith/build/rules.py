# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Records handed to the external build-rule execution engine."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class BuildRule:
    """A compiler or tool invocation to be executed later.

    Attributes:
        rule: Rule name (e.g. 'rustc')
        outputs: Files the rule produces
        inputs: Files the rule reads
        args: Rule-specific arguments (flags, crate name, ...)
    """

    rule: str
    outputs: list[Path]
    inputs: list[Path] = field(default_factory=list)
    args: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            'rule': self.rule,
            'outputs': [str(p) for p in self.outputs],
            'inputs': [str(p) for p in self.inputs],
            'args': self.args,
        }


@dataclass
class WriteFileRule:
    """Write generated text content to an output file."""

    output: Path
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {'rule': 'write_file', 'outputs': [str(self.output)]}


@dataclass
class InstallRecord:
    """Copy of a built file into its install location."""

    src: Path
    dest: Path

    def to_dict(self) -> dict[str, str]:
        return {'src': str(self.src), 'dest': str(self.dest)}
