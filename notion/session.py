"""
Notion session: the mutable state one command execution works against.

Layout of the state home ($NOTION_HOME, default ~/.notion)
- state.json   installed toolchain versions and the user default
- config.json  flat mapping of dotted keys to string values
- bin/         shims, each a symlink to the launcher (home/launchbin)

Project state
- A project pins its toolchain in a .node-version file; the project root is the
  nearest ancestor of the working directory holding .node-version or package.json.

Lifecycle
- Built once per process by the entry point (from_environment), borrowed by the
  running command, then flushed with save(). Files are read lazily on first use.
"""
import json
import logging
import os
import re
from pathlib import Path

from rich.console import Console

from .faults import ConfigKeyError, EnvironmentFault, NotInstalledError, NoVersionError, StateFileError
from .utils import *

logger = logging.getLogger(__name__)

VERSION_FILE = ".node-version"
MANIFEST_FILE = "package.json"
VERSION_PATTERN = re.compile(r"v?(?P<version>\d+(\.\d+){0,2})")


def normalize_version(text, /):
    """
    Return the canonical spelling of a version (no leading 'v'), or None when the
    text is not a MAJOR[.MINOR[.PATCH]] version.
    """
    match = VERSION_PATTERN.fullmatch(text.strip())
    return match["version"] if match else None


def version_key(version, /):
    return tuple(int(part) for part in version.split("."))


class Session:
    def __init__(self, home, /, *, cwd=Unset, environ=Unset, console=Unset):
        self._home = Path(home)
        self._cwd = Path(coalesce(cwd, Path.cwd()))
        self._environ = dict(coalesce(environ, os.environ))
        self.console = coalesce(console, Console(highlight=False))
        self._state = Unset
        self._config = Unset
        self._dirty = set()

    @classmethod
    def from_environment(cls, environ=Unset, /, **options):
        """
        Build a session from the process environment (NOTION_HOME, NOTION_POSTSCRIPT).
        """
        environ = coalesce(environ, os.environ)
        home = environ.get("NOTION_HOME") or Path.home() / ".notion"
        return cls(home, environ=environ, **options)

    @property
    def home(self):
        return self._home

    @property
    def bin_dir(self):
        return self._home / "bin"

    @property
    def launcher(self):
        return self._home / "launchbin"

    @property
    def environ(self):
        return dict(self._environ)

    # ── persistence ─────────────────────────────────────────────────────────

    def _read(self, name, default):
        path = self._home / name
        try:
            with path.open(encoding="utf-8") as file:
                data = json.load(file)
        except FileNotFoundError:
            return default
        except (OSError, ValueError) as exception:
            raise StateFileError(
                "could not read %s: %s" % (path, exception),
                path=str(path),
                hint="fix or remove the file and try again",
            ) from exception
        if not isinstance(data, dict):
            raise StateFileError("%s must contain a JSON object" % path, path=str(path))
        return data

    def _write(self, name, data):
        path = self._home / name
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
        except OSError as exception:
            raise StateFileError("could not write %s: %s" % (path, exception), path=str(path)) from exception
        logger.debug("wrote %s", path)

    @property
    def state(self):
        if self._state is Unset:
            state = self._read("state.json", {})
            installed = state.setdefault("installed", [])
            default = state.setdefault("default", None)
            if (
                not isinstance(installed, list)
                or not all(isinstance(version, str) and normalize_version(version) == version for version in installed)
                or not isinstance(default, str | None)
            ):
                path = self._home / "state.json"
                raise StateFileError(
                    "%s must list installed versions and name the default as version strings" % path,
                    path=str(path),
                    hint="fix or remove the file and try again",
                )
            self._state = state
        return self._state

    @property
    def config(self):
        if self._config is Unset:
            self._config = self._read("config.json", {})
        return self._config

    def save(self):
        """
        Flush every modified file of the state home.
        """
        if "state" in self._dirty:
            self._write("state.json", self.state)
        if "config" in self._dirty:
            self._write("config.json", self.config)
        self._dirty.clear()

    # ── catalog ─────────────────────────────────────────────────────────────

    def installed(self):
        return sorted(self.state["installed"], key=version_key)

    def is_installed(self, version):
        return version in self.state["installed"]

    def install(self, version):
        """
        Record version in the catalog. Returns False when it was already installed.
        """
        if self.is_installed(version):
            logger.info("node %s is already installed", version)
            return False
        self.state["installed"].append(version)
        self._dirty.add("state")
        logger.info("installed node %s", version)
        return True

    def uninstall(self, version):
        if not self.is_installed(version):
            raise NotInstalledError(
                "node %s is not installed" % version,
                version=version,
                hint="run 'notion current' to see the active toolchain",
            )
        self.state["installed"].remove(version)
        if self.state["default"] == version:
            self.state["default"] = None
        self._dirty.add("state")
        logger.info("uninstalled node %s", version)

    def resolve(self, requirement):
        """
        Return the newest installed version matching a (possibly partial) version.
        """
        if not self.state["installed"]:
            raise NoVersionError(
                "no toolchain is installed",
                version=requirement,
                hint="run 'notion install <version>' first",
            )
        candidates = [
            version for version in self.state["installed"]
            if version == requirement or version.startswith(requirement + ".")
        ]
        if not candidates:
            raise NotInstalledError(
                "no installed version matches node %s" % requirement,
                version=requirement,
                hint="install a version matching %s first" % requirement,
            )
        return max(candidates, key=version_key)

    def require_installed(self, version):
        if not self.is_installed(version):
            raise NotInstalledError(
                "node %s is not installed" % version,
                version=version,
                hint="run 'notion install %s' first" % version,
            )

    # ── selection ───────────────────────────────────────────────────────────

    @property
    def default(self):
        return self.state["default"]

    def set_default(self, version):
        self.require_installed(version)
        self.state["default"] = version
        self._dirty.add("state")
        logger.info("default toolchain set to node %s", version)

    def project_root(self):
        for directory in (self._cwd, *self._cwd.parents):
            if (directory / VERSION_FILE).is_file() or (directory / MANIFEST_FILE).is_file():
                return directory
        return None

    def project_version(self):
        root = self.project_root()
        if root is None:
            return None
        try:
            text = (root / VERSION_FILE).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exception:
            raise StateFileError("could not read %s: %s" % (root / VERSION_FILE, exception)) from exception
        return normalize_version(text) if text.strip() else None

    def pin(self, version):
        """
        Pin the project (or the working directory when outside a project) to version.
        """
        self.require_installed(version)
        path = coalesce(self.project_root(), self._cwd) / VERSION_FILE
        try:
            path.write_text(version + "\n", encoding="utf-8")
        except OSError as exception:
            raise StateFileError("could not write %s: %s" % (path, exception), path=str(path)) from exception
        logger.info("pinned %s to node %s", path.parent, version)
        return path

    # ── configuration ───────────────────────────────────────────────────────

    def config_get(self, key):
        try:
            return self.config[key]
        except KeyError:
            raise ConfigKeyError(
                "configuration key %r is not set" % key,
                key=key,
                hint="run 'notion config list' to see every key",
            ) from None

    def config_set(self, key, value):
        self.config[key] = value
        self._dirty.add("config")

    def config_delete(self, key):
        self.config_get(key)
        del self.config[key]
        self._dirty.add("config")

    # ── shims ───────────────────────────────────────────────────────────────

    def shims(self):
        try:
            return sorted(path.name for path in self.bin_dir.iterdir())
        except FileNotFoundError:
            return []

    def create_shim(self, name):
        """
        Link bin/name to the launcher. Returns False when the shim already exists.
        """
        path = self.bin_dir / name
        if path.is_symlink() or path.exists():
            return False
        try:
            self.bin_dir.mkdir(parents=True, exist_ok=True)
            path.symlink_to(self.launcher)
        except OSError as exception:
            raise StateFileError("could not create shim %s: %s" % (path, exception), path=str(path)) from exception
        logger.info("created shim %s", path)
        return True

    def delete_shim(self, name):
        """
        Remove bin/name. Returns False when there was no such shim.
        """
        path = self.bin_dir / name
        if not (path.is_symlink() or path.exists()):
            return False
        try:
            path.unlink()
        except OSError as exception:
            raise StateFileError("could not delete shim %s: %s" % (path, exception), path=str(path)) from exception
        logger.info("deleted shim %s", path)
        return True

    # ── shell integration ───────────────────────────────────────────────────

    def postscript(self, text):
        """
        Append a snippet for the calling shell wrapper to source after notion exits.
        """
        try:
            path = Path(self._environ["NOTION_POSTSCRIPT"])
        except KeyError:
            raise EnvironmentFault(
                "NOTION_POSTSCRIPT is not set",
                hint="run notion through its shell integration to modify the current shell",
            ) from None
        try:
            with path.open("a", encoding="utf-8") as file:
                file.write(text.rstrip("\n") + "\n")
        except OSError as exception:
            raise StateFileError("could not write %s: %s" % (path, exception), path=str(path)) from exception
        logger.debug("postscript appended to %s", path)


__all__ = (
    "Session",
    "VERSION_FILE",
    "normalize_version",
    "version_key",
)
