import os

import pytest

from koosh_cursors import rename_cursors as rename_module
from koosh_cursors.cursor_mapping import WINDOWS_TO_X11
from koosh_cursors.errors import ThemeNotFound
from koosh_cursors.rename_cursors import list_cursor_files, rename_cursors, x11_name_for


@pytest.fixture
def exported(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "output"
    output.mkdir()
    for name in ("Normal", "Person", "Text", "Busy", "Working", "Readme"):
        (output / name).write_bytes(name.encode())
    return output


def test_x11_name_for():
    assert x11_name_for("Normal") == "left_ptr"
    assert x11_name_for("Diagonal2") == "size_fdiag"
    assert x11_name_for("Busy.ani") == "wait"
    assert x11_name_for("Move.CUR") == "move"
    assert x11_name_for("Normal.png") is None
    assert x11_name_for("Grab") is None


def test_all_roles_mapped():
    assert len(WINDOWS_TO_X11) == 17
    assert len(set(WINDOWS_TO_X11.values())) == 17


def test_rename_cursors(exported, tools, config, icons_dir, tmp_path, capsys):
    theme = rename_cursors("output", "Koosh-X11", config)

    cursors = tmp_path / "Koosh-X11" / "cursors"
    assert theme.cursors_dir == cursors
    assert (cursors / "left_ptr").read_bytes() == b"Normal"
    assert (cursors / "pointer").read_bytes() == b"Person"
    assert (cursors / "text").read_bytes() == b"Text"
    assert not (cursors / "Readme").exists()

    assert os.readlink(cursors / "arrow") == "left_ptr"
    assert os.readlink(cursors / "xterm") == "text"
    assert os.readlink(cursors / "watch") == "wait"
    assert os.readlink(cursors / "left_ptr_watch") == "progress"
    # Roles that were never exported leave their aliases out
    assert not os.path.lexists(cursors / "fleur")

    index = (tmp_path / "Koosh-X11" / "index.theme").read_text()
    assert "Name=Koosh-X11" in index
    assert "Comment=Koosh cursor theme" in index

    installed = icons_dir / "Koosh-X11"
    assert (installed / "cursors" / "left_ptr").read_bytes() == b"Normal"
    assert (installed / "cursors" / "arrow").is_symlink()

    printed = capsys.readouterr().out
    assert "  left_ptr (6 bytes)" in printed
    assert "  arrow (-> left_ptr)" in printed


def test_rename_replaces_existing_theme(exported, tools, config, tmp_path, theme_factory):
    theme_factory(tmp_path, "Koosh-X11", {"stale": b"S"})

    rename_cursors("output", "Koosh-X11", config)

    assert not (tmp_path / "Koosh-X11" / "cursors" / "stale").exists()


def test_windows_cursors_are_converted(exported, tools, config, tmp_path, monkeypatch):
    (exported / "Move.cur").write_bytes(b"cur")
    (exported / "Help.ani").write_bytes(b"ani")
    converted = []

    def fake_convert(src, dst, add_shadow=False):
        converted.append((src.name, add_shadow))
        dst.write_bytes(b"Xcur")
        return True

    monkeypatch.setattr(rename_module, "convert_windows_cursor", fake_convert)

    rename_cursors("output", "Koosh-X11", config, add_shadow=True)

    assert sorted(converted) == [("Help.ani", True), ("Move.cur", True)]
    cursors = tmp_path / "Koosh-X11" / "cursors"
    assert (cursors / "move").read_bytes() == b"Xcur"
    assert (cursors / "help").read_bytes() == b"Xcur"
    assert os.readlink(cursors / "fleur") == "move"


def test_unparsable_windows_cursor_is_copied(exported, tools, config, tmp_path, monkeypatch):
    (exported / "Pin.cur").write_bytes(b"garbage")
    monkeypatch.setattr(rename_module, "convert_windows_cursor", lambda src, dst, add_shadow=False: False)

    rename_cursors("output", "Koosh-X11", config)

    assert (tmp_path / "Koosh-X11" / "cursors" / "pin").read_bytes() == b"garbage"


def test_convert_rejects_invalid_data(tmp_path):
    pytest.importorskip("win2xcur.parser")
    pytest.importorskip("win2xcur.shadow")
    src = tmp_path / "Normal.cur"
    src.write_bytes(b"not a cursor")
    dst = tmp_path / "left_ptr"

    assert not rename_module.convert_windows_cursor(src, dst)
    assert not dst.exists()


def test_missing_input_dir(tmp_path, monkeypatch, tools, config):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ThemeNotFound) as excinfo:
        rename_cursors("output", "Koosh-X11", config)
    assert excinfo.value.path.name == "output"
    assert not (tmp_path / "Koosh-X11").exists()


def test_list_cursor_files(tmp_path, capsys):
    (tmp_path / "left_ptr").write_bytes(b"abc")
    (tmp_path / "arrow").symlink_to("left_ptr")

    list_cursor_files(tmp_path)

    assert capsys.readouterr().out.splitlines() == ["  arrow (-> left_ptr)", "  left_ptr (3 bytes)"]
