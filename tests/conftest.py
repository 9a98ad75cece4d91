import shutil
import subprocess
from pathlib import Path

import pytest

from koosh_cursors.config import ToolConfig

DEFAULT_MANIFEST = "name = Source\ndescription = old\nversion = 0.1\ncursors_directory = hyprcursors\n"


class FakeTools:
    """Stand-in for the external binaries, recording every invocation.

    Each tool writes roughly what the real one would so the workflows can
    carry on with their file handling.
    """

    def __init__(self):
        self.calls = []
        self.installed = {"xcur2png", "xcursorgen", "convert", "hyprcursor-util", "gtk-update-icon-cache"}
        self.failing = set()
        self.frames = {}          # cursor file name -> frames xcur2png extracts
        self.skip_frames = set()  # (cursor file name, frame index) left out
        self.extract_manifest = DEFAULT_MANIFEST

    def which(self, name, *args, **kwargs):
        return f"/usr/bin/{name}" if name in self.installed else None

    def calls_to(self, tool):
        return [call for call in self.calls if call[0] == tool]

    def run(self, args, cwd=None, capture_output=False, text=False, check=False, **kwargs):
        args = [str(arg) for arg in args]
        self.calls.append(args)
        tool = args[0]

        if tool not in self.installed:
            raise FileNotFoundError(2, "No such file or directory", tool)
        if tool in self.failing:
            raise subprocess.CalledProcessError(1, args, output="", stderr=f"{tool}: simulated failure")

        handler = getattr(self, "_" + tool.replace("-", "_"), None)
        if handler is not None:
            handler(args, Path(cwd) if cwd else Path.cwd())
        return subprocess.CompletedProcess(args, 0, stdout="", stderr="")

    def _xcur2png(self, args, cwd):
        src = Path(args[1])
        out_dir = Path(args[args.index("-d") + 1])
        for frame in range(self.frames.get(src.name, 1)):
            if (src.name, frame) in self.skip_frames:
                continue
            (out_dir / f"{src.name}_{frame:03d}.png").write_bytes(b"PNG")
        (out_dir / f"{src.name}.conf").write_text("# xcur2png\n")

    def _convert(self, args, cwd):
        Path(args[-1]).write_bytes(b"PNG-" + args[3].encode())

    _magick = _convert

    def _xcursorgen(self, args, cwd):
        config = (cwd / args[1]).read_text()
        (cwd / args[2]).write_text("Xcur\n" + config)

    def _hyprcursor_util(self, args, cwd):
        src, out = Path(args[2]), Path(args[4])
        if args[1] == "--extract":
            extracted = out / f"extracted_{src.name}"
            (extracted / "hyprcursors").mkdir(parents=True)
            if self.extract_manifest is not None:
                (extracted / "manifest.hl").write_text(self.extract_manifest)
        else:
            manifest = (src / "manifest.hl").read_text()
            name = next(line.split("=", 1)[1].strip()
                        for line in manifest.splitlines() if line.startswith("name"))
            theme = out / f"theme_{name}"
            (theme / "hyprcursors").mkdir(parents=True)
            (theme / "manifest.hl").write_text(manifest)
            (theme / "hyprcursors" / "left_ptr.hlc").write_bytes(b"HLC")


@pytest.fixture
def tools(monkeypatch):
    fake = FakeTools()
    monkeypatch.setattr(subprocess, "run", fake.run)
    monkeypatch.setattr(shutil, "which", fake.which)
    return fake


@pytest.fixture
def icons_dir(tmp_path):
    path = tmp_path / "icons"
    path.mkdir()
    return path


@pytest.fixture
def config(icons_dir):
    return ToolConfig(icons_dir=str(icons_dir))


def make_theme(root, name, cursors, links=None):
    """Create ``root/name/cursors`` with the given files and symlinks."""
    cursors_dir = Path(root) / name / "cursors"
    cursors_dir.mkdir(parents=True)
    for cursor, content in cursors.items():
        (cursors_dir / cursor).write_bytes(content)
    for link, target in (links or {}).items():
        (cursors_dir / link).symlink_to(target)
    return cursors_dir


@pytest.fixture
def theme_factory():
    return make_theme
