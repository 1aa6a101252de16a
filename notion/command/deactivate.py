"""
`notion deactivate`: remove the shim directory from the calling shell's PATH.
"""
import os
import shlex
from dataclasses import dataclass

from . import Command, CommandName


@dataclass(frozen=True)
class Deactivate(Command):
    NAME = CommandName.DEACTIVATE
    USAGE = """
Remove Notion from the current shell

Usage:
    notion deactivate [options]

Options:
    -h, --help     Display this message
"""

    @dataclass
    class Args:
        pass

    @classmethod
    def help(cls):
        return cls(helping=True)

    @classmethod
    def parse(cls, notion, args, /):
        return cls()

    def run(self, session, /):
        if self.helping:
            return self.print_help(session)
        shims = os.path.normpath(session.bin_dir)
        entries = session.environ.get("PATH", "").split(os.pathsep)
        path = os.pathsep.join(entry for entry in entries if entry and os.path.normpath(entry) != shims)
        session.postscript("export PATH=%s" % shlex.quote(path))
        return True
