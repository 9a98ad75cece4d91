import pytest

from koosh_cursors.errors import ManifestNotFound
from koosh_cursors.theme_files import (
    HyprManifest,
    create_cursor_theme,
    create_index_theme,
    create_theme_files,
    update_manifest,
)


def test_index_theme_without_sizes(tmp_path):
    path = create_index_theme(tmp_path, "Koosh-X11", "Koosh cursor theme")

    assert path.read_text() == (
        "[Icon Theme]\n"
        "Name=Koosh-X11\n"
        "Comment=Koosh cursor theme\n"
        "Inherits=hicolor\n"
        "\n"
        "# Directory list\n"
        "Directories=cursors\n"
        "\n"
        "[cursors]\n"
        "Context=Cursors\n"
        "Type=Fixed\n"
    )


def test_index_theme_with_sizes_and_directories(tmp_path):
    text = create_index_theme(
        tmp_path, "Koosh", "c", sizes=[24, 48], directories=("cursors", "hyprcursors")
    ).read_text()

    assert "Directories=cursors hyprcursors\n" in text
    assert "[hyprcursors]\nContext=Cursors\nType=Fixed\n" in text
    assert "[cursors/24]\nSize=24\nContext=Cursors\nType=Fixed\n" in text
    assert text.index("[cursors/24]") < text.index("[cursors/48]")


def test_cursor_theme_inherits_itself(tmp_path):
    text = create_cursor_theme(tmp_path, "Koosh-Animated", "c").read_text()
    assert text == "[Icon Theme]\nName=Koosh-Animated\nComment=c\nInherits=Koosh-Animated\n"


def test_create_theme_files(tmp_path):
    create_theme_files(tmp_path, "Koosh", "c")
    assert (tmp_path / "index.theme").is_file()
    assert (tmp_path / "cursor.theme").is_file()


def test_update_manifest_keeps_other_lines(tmp_path):
    manifest_path = tmp_path / "manifest.hl"
    manifest_path.write_text(
        "# generated\n"
        "name = Old\n"
        "description = old description\n"
        "cursors_directory = hyprcursors\n"
    )

    update_manifest(manifest_path, HyprManifest("Koosh-Hyprcursor2", "new description", "2.0"))

    assert manifest_path.read_text().splitlines() == [
        "# generated",
        "name = Koosh-Hyprcursor2",
        "description = new description",
        "cursors_directory = hyprcursors",
        "version = 2.0",
    ]


def test_update_manifest_only_selected_keys(tmp_path):
    manifest_path = tmp_path / "manifest.hl"
    manifest_path.write_text("name=Old\nversion=0.1\n")

    update_manifest(manifest_path, HyprManifest("New", "d"), keys=("name",))

    assert manifest_path.read_text() == "name = New\nversion=0.1\n"


def test_update_missing_manifest(tmp_path):
    with pytest.raises(ManifestNotFound) as excinfo:
        update_manifest(tmp_path / "manifest.hl", HyprManifest("New", "d"))
    assert excinfo.value.path == tmp_path / "manifest.hl"


def test_update_manifest_writes_every_field(tmp_path):
    manifest_path = tmp_path / "manifest.hl"
    manifest_path.write_text("name = Old\n")

    update_manifest(manifest_path, HyprManifest("New", "d", "1.0"))

    assert manifest_path.read_text().splitlines() == [
        "name = New",
        "description = d",
        "version = 1.0",
        "cursors_directory = hyprcursors",
    ]
